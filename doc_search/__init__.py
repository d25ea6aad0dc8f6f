"""Symbol search over doxygen-generated API reference data."""

from __future__ import annotations

from .entry_store import dump_entries, load_entries, load_entries_json
from .errors import DocSearchError, InvalidEntry, SearchDataError
from .search_data import decode_search_id, iter_shards, load_search_dir, parse_search_data, read_shard
from .symbol_index import Entry, QueryResult, SymbolIndex, build, lookup, normalize_key, query

__all__ = [
    "DocSearchError",
    "Entry",
    "InvalidEntry",
    "QueryResult",
    "SearchDataError",
    "SymbolIndex",
    "build",
    "decode_search_id",
    "dump_entries",
    "iter_shards",
    "load_entries",
    "load_entries_json",
    "load_search_dir",
    "lookup",
    "normalize_key",
    "parse_search_data",
    "query",
    "read_shard",
]
