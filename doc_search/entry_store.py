"""
Pre-built entry files and source dispatch.

Parsing a full doxygen ``search/`` directory means evaluating hundreds of
shards; ``dump_entries`` flattens the result into one compact JSON file of
``[key, label, target, scope]`` rows (lists instead of dicts keep it small), and
``load_entries`` reads whichever kind of source it is pointed at.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from .errors import SearchDataError
from .search_data import load_search_dir, read_shard, read_text
from .symbol_index import Entry

logger = logging.getLogger(__name__)


def dump_entries(entries: Iterable[Entry], path: Path) -> int:
    """Write entries as JSON rows and return how many were written."""
    rows = [[e.key, e.label, e.target, e.scope] for e in entries]
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(rows, f, ensure_ascii=False)
    logger.info("Wrote %d entries to %s", len(rows), path)
    return len(rows)


def load_entries_json(path: Path) -> list[Entry]:
    """Read rows written by ``dump_entries``."""
    path = Path(path)
    try:
        rows = json.loads(read_text(path))
    except json.JSONDecodeError as e:
        raise SearchDataError(f"invalid JSON ({e})", str(path)) from None
    if not isinstance(rows, list):
        raise SearchDataError("expected a JSON array of entry rows", str(path))

    entries = []
    for i, row in enumerate(rows):
        if not isinstance(row, list) or len(row) not in (3, 4):
            raise SearchDataError(f"row #{i} is not [key, label, target, scope]", str(path))
        if not all(isinstance(field, str) for field in row[:3]):
            raise SearchDataError(f"row #{i} key, label and target must be strings", str(path))
        if len(row) == 4 and row[3] is not None and not isinstance(row[3], str):
            raise SearchDataError(f"row #{i} scope must be a string or null", str(path))
        entries.append(Entry.create(row))
    return entries


def load_entries(path: Path, categories: Sequence[str] | None = None) -> list[Entry]:
    """
    Load entries from a shard directory, a single ``.js`` shard or a ``.json`` dump.

    ``categories`` only applies to directories.
    """
    path = Path(path)
    if path.is_dir():
        return load_search_dir(path, categories)
    if not path.exists():
        raise FileNotFoundError(f"Search data not found at {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_entries_json(path)
    if suffix == ".js":
        return read_shard(path)
    raise SearchDataError("unsupported search data file (expected .js or .json)", str(path))
