"""
Reader for the ``searchData`` shards doxygen writes next to its HTML output.

Each shard (``search/all_9.js``, ``search/functions_8.js``, ...) looks like::

    var searchData=
    [
      ['insert_1611',['insert',['../class_x.html#afb5c',1,'CppCommon::MemCache::insert()'],...]],
      ['wait_5fqueue_2eh',['wait_queue.h',['../wait__queue_8h.html',1,'']]]
    ];

The array is a plain literal (single-quoted strings, integers, nested lists),
so it is evaluated with ``ast.literal_eval`` rather than a JavaScript parser.
Every link inside a record becomes one ``Entry``.
"""

from __future__ import annotations

import ast
import html
import logging
import re
from pathlib import Path
from typing import Iterator, Sequence

from .errors import SearchDataError
from .symbol_index import Entry

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("all",)

_ESCAPE_RE = re.compile(r"_([0-9a-f]{2})")
_SUFFIX_RE = re.compile(r"(.+)_(\d+)")
_SHARD_RE = re.compile(r"([a-z]+)_([0-9a-f]+)\.js")


def _unescape_id(raw: str) -> str:
    return _ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), raw)


def decode_search_id(raw_id: str, label: str = "") -> str:
    """
    Turn a doxygen search id into the plain lowercase key.

    ``wait_5fqueue_2eh`` -> ``wait_queue.h``; ``insert_1611`` -> ``insert``.
    A trailing ``_<digits>`` may be a sequence suffix or an escape such as
    ``_29``; whichever reading matches the lowercased label is used, and the
    suffix-stripped reading otherwise.
    """
    expected = label.lower()
    suffixed = _SUFFIX_RE.fullmatch(raw_id)
    candidates = [raw_id] if suffixed is None else [suffixed.group(1), raw_id]
    for candidate in candidates:
        decoded = _unescape_id(candidate)
        if decoded == expected:
            return decoded
    return _unescape_id(candidates[0]).lower()


def _array_literal(text: str, source: str):
    start = text.find("[")
    end = text.rfind("]")
    if start < 0 or end < start:
        raise SearchDataError("no searchData array found", source)
    try:
        data = ast.literal_eval(text[start : end + 1])
    except (ValueError, SyntaxError, MemoryError, RecursionError) as exc:
        raise SearchDataError(f"searchData is not a plain literal ({exc})", source) from None
    if not isinstance(data, list):
        raise SearchDataError("searchData is not an array", source)
    return data


def _record_entries(record, position: int, source: str) -> Iterator[Entry]:
    if not (isinstance(record, (list, tuple)) and len(record) == 2):
        raise SearchDataError(f"record #{position} is not an [id, body] pair", source)
    raw_id, body = record
    if not isinstance(raw_id, str) or not isinstance(body, (list, tuple)) or len(body) < 2:
        raise SearchDataError(f"record #{position} has a malformed id or body", source)
    label = body[0]
    if not isinstance(label, str):
        raise SearchDataError(f"record #{position} has no label", source)
    label = html.unescape(label)
    key = decode_search_id(raw_id, label)

    for link in body[1:]:
        if not isinstance(link, (list, tuple)) or not link or not isinstance(link[0], str):
            raise SearchDataError(f"record #{position} ({raw_id}) has a malformed link", source)
        scope = link[2] if len(link) > 2 else None
        if scope is not None and not isinstance(scope, str):
            raise SearchDataError(f"record #{position} ({raw_id}) has a malformed scope", source)
        yield Entry(
            key=key,
            label=label,
            target=link[0],
            scope=html.unescape(scope) if scope else None,
        )


def parse_search_data(text: str, *, source: str = "<string>") -> list[Entry]:
    """Parse one shard body into entries, in file order."""
    entries: list[Entry] = []
    for position, record in enumerate(_array_literal(text, source)):
        entries.extend(_record_entries(record, position, source))
    return entries


def read_text(path: Path) -> str:
    """Read a search data file as UTF-8, reporting undecodable bytes as ``SearchDataError``."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SearchDataError(f"not valid UTF-8 ({exc.reason} at byte {exc.start})", str(path)) from None


def read_shard(path: Path) -> list[Entry]:
    """Parse one shard file."""
    return parse_search_data(read_text(path), source=str(path))


def iter_shards(directory: Path, categories: Sequence[str] | None = None) -> Iterator[Path]:
    """Yield shard files of the requested categories, by category then shard number."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Search data directory not found: {directory}")
    wanted = [c.lower() for c in (categories or DEFAULT_CATEGORIES)]

    found = []
    for path in directory.iterdir():
        match = _SHARD_RE.fullmatch(path.name)
        if not match or match.group(1) not in wanted:
            continue
        found.append((wanted.index(match.group(1)), int(match.group(2), 16), path))
    for _, _, path in sorted(found):
        yield path


def load_search_dir(directory: Path, categories: Sequence[str] | None = None) -> list[Entry]:
    """
    Parse every matching shard in ``directory``.

    A shard that cannot be parsed is logged and skipped so one bad file does
    not hide the rest of the reference.
    """
    entries: list[Entry] = []
    shards = 0
    for path in iter_shards(directory, categories):
        try:
            entries.extend(read_shard(path))
        except SearchDataError as exc:
            logger.warning("Skipping unreadable shard: %s", exc)
            continue
        shards += 1
    if shards == 0:
        logger.warning("No searchData shards loaded from %s", directory)
    else:
        logger.info("Loaded %d entries from %d shard(s) in %s", len(entries), shards, directory)
    return entries
