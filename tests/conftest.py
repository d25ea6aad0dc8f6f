"""Shared fixtures: small doxygen searchData shards and entry lists."""

from __future__ import annotations

from pathlib import Path

import pytest

from doc_search import Entry

ALL_9 = """var searchData=
[
  ['initial_1609',['initial',['../class_cpp_common_1_1_path.html#a75b30d283db76f2056a94039b7ae3af8',1,'CppCommon::Path']]],
  ['insert_1611',['insert',['../class_cpp_common_1_1_mem_cache.html#afb5c516af1186f34d7738216e22455c3',1,'CppCommon::MemCache::insert()'],['../class_cpp_common_1_1_hash_map.html#a53dc1c628ee0fe1d7808277d80fa890d',1,'CppCommon::HashMap::insert(value_type &amp;&amp;item)']]],
  ['iostream_2eh',['iostream.h',['../iostream_8h.html',1,'']]],
  ['iwusr',['IWUSR',['../namespace_cpp_common.html#ae065c40f4f0d3419423d85bc31a58b24a28292f24c33947e08d606326ad6ed70b',1,'CppCommon']]]
];
"""

ALL_14 = """var searchData=
[
  ['wait',['Wait',['../class_cpp_common_1_1_barrier.html#ae5d6c33df84832a3b7b3a2aae08ffae7',1,'CppCommon::Barrier::Wait()'],['../class_cpp_common_1_1_latch.html#aed8ac82e2202f1f6ff9a3f903b9e57bb',1,'CppCommon::Latch::Wait()']]],
  ['wait_5fqueue_2eh',['wait_queue.h',['../wait__queue_8h.html',1,'']]],
  ['waitqueue',['WaitQueue',['../class_cpp_common_1_1_wait_queue.html#af0fc84e6250cd566ceeee7e24210b249',1,'CppCommon::WaitQueue::WaitQueue()']]],
  ['waitqueue',['WaitQueue',['../class_cpp_common_1_1_wait_queue.html',1,'CppCommon']]]
];
"""

FUNCTIONS_8 = """var searchData=
[
  ['insert_1611',['insert',['../class_cpp_common_1_1_mem_cache.html#afb5c516af1186f34d7738216e22455c3',1,'CppCommon::MemCache::insert()']]]
];
"""


@pytest.fixture
def search_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "search"
    directory.mkdir()
    (directory / "all_9.js").write_text(ALL_9, encoding="utf-8")
    (directory / "all_14.js").write_text(ALL_14, encoding="utf-8")
    (directory / "functions_8.js").write_text(FUNCTIONS_8, encoding="utf-8")
    (directory / "search.js").write_text("function SearchBox() {}", encoding="utf-8")
    return directory


@pytest.fixture
def spec_entries() -> list[Entry]:
    return [
        Entry("insert", "insert", "#a"),
        Entry("insertpath", "insertPath", "#b"),
        Entry("pop", "pop", "#c"),
    ]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no DOC_SEARCH_* variables set."""
    for name in (
        "DOC_SEARCH_DATA",
        "DOC_SEARCH_CATEGORIES",
        "DOC_SEARCH_BASE_URL",
        "DOC_SEARCH_MAX",
        "DOC_SEARCH_LOG_LEVEL",
    ):
        # setenv first so values loaded from .env files are removed on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
