"""
Immutable symbol index answering "which symbols match what the user typed".

Entries are grouped by their normalized key (overloads share one key) and the
distinct keys are kept sorted, so prefix ranges come from a binary search and
only the substring tier has to scan every key.

Examples:
    index = build([Entry("insert", "insert", "#a"), Entry("pop", "pop", "#c")])
    list(index.query("ins"))     # [Entry(key='insert', ...)]
    index.lookup("POP")          # (Entry(key='pop', ...),)
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass, replace
from itertools import islice
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from .errors import InvalidEntry

logger = logging.getLogger(__name__)


def normalize_key(raw: str) -> str:
    """Normalize a key to its lowercase search form."""
    return raw.strip().lower()


@dataclass(frozen=True)
class Entry:
    """One searchable symbol: what to match on, what to show, where it points."""

    key: str
    label: str
    target: str
    scope: str | None = None

    @classmethod
    def create(cls, item: Any) -> "Entry":
        """
        Coerce an ``Entry``, a mapping or a 3/4-item sequence into an ``Entry``.

        Mappings use the field names; ``label`` defaults to the key as given.
        Sequences are ``(key, label, target[, scope])``. The key is not
        validated here, ``build`` does that.
        """
        if isinstance(item, cls):
            return item
        if isinstance(item, Mapping):
            key = item.get("key")
            label = item.get("label")
            return cls(
                key=key,
                label=key if label is None else label,
                target=item.get("target"),
                scope=item.get("scope") or None,
            )
        if isinstance(item, (list, tuple)) and len(item) in (3, 4):
            key, label, target = item[0], item[1], item[2]
            scope = item[3] if len(item) == 4 else None
            return cls(key=key, label=label, target=target, scope=scope or None)
        raise InvalidEntry(f"cannot interpret {type(item).__name__} as an entry")


def _validated(entry: Entry, position: int) -> Entry:
    if entry.key is None:
        raise InvalidEntry("key is missing", position)
    if not isinstance(entry.key, str):
        raise InvalidEntry(f"key must be a string, got {type(entry.key).__name__}", position)
    key = normalize_key(entry.key)
    if not key:
        raise InvalidEntry("key is empty", position)
    for field in ("label", "target"):
        if not isinstance(getattr(entry, field), str):
            raise InvalidEntry(f"{field} must be a string for key {key!r}", position)
    if entry.scope is not None and not isinstance(entry.scope, str):
        raise InvalidEntry(f"scope must be a string or None for key {key!r}", position)
    return entry if key == entry.key else replace(entry, key=key)


class QueryResult:
    """
    Lazy, restartable view over the ranked matches for one fragment.

    Each iteration recomputes the ranking from the immutable index, so callers
    may stop early or iterate again without affecting anything.
    """

    def __init__(self, index: "SymbolIndex", fragment: str, limit: int | None = None):
        self._index = index
        self.fragment = fragment
        self.limit = limit

    def __iter__(self) -> Iterator[Entry]:
        # keys may contain spaces, so the fragment is matched as typed
        ranked = self._index._iter_ranked(self.fragment.lower())
        if self.limit is not None:
            return islice(ranked, max(self.limit, 0))
        return ranked

    def __repr__(self) -> str:
        return f"QueryResult(fragment={self.fragment!r}, limit={self.limit!r})"


class SymbolIndex:
    """Read-only key -> entries mapping. Construct it through ``build``."""

    def __init__(self, entries: tuple[Entry, ...], groups: dict[str, tuple[Entry, ...]]):
        self._entries = entries
        self._groups = MappingProxyType(groups)
        self._keys = tuple(sorted(groups))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._groups

    def __repr__(self) -> str:
        return f"SymbolIndex(keys={len(self._keys)}, entries={len(self._entries)})"

    def keys(self) -> tuple[str, ...]:
        """Distinct keys in lexical order."""
        return self._keys

    def query(self, fragment: str, limit: int | None = None) -> QueryResult:
        """Ranked case-insensitive substring search; an empty fragment matches nothing.

        The fragment is not stripped: a leading or trailing space is part of
        what must appear in the key.
        """
        return QueryResult(self, fragment, limit)

    def lookup(self, key: str) -> tuple[Entry, ...]:
        """Entries whose key equals ``key`` (case-insensitive), in insertion order."""
        return self._groups.get(normalize_key(key), ())

    def _iter_ranked(self, needle: str) -> Iterator[Entry]:
        if not needle:
            return
        yield from self._groups.get(needle, ())

        prefixed = []
        for pos in range(bisect_left(self._keys, needle), len(self._keys)):
            key = self._keys[pos]
            if not key.startswith(needle):
                break
            if key != needle:
                prefixed.append(key)
        for key in sorted(prefixed, key=len):
            yield from self._groups[key]

        contained = [k for k in self._keys if needle in k and not k.startswith(needle)]
        for key in sorted(contained, key=len):
            yield from self._groups[key]


def build(entries: Iterable[Any]) -> SymbolIndex:
    """
    Build an immutable index from entries in the order given.

    Args:
        entries: ``Entry`` objects, or mappings/sequences ``Entry.create`` accepts.

    Raises:
        InvalidEntry: if any key is missing, empty or not a string.
    """
    kept: list[Entry] = []
    grouped: dict[str, list[Entry]] = {}
    seen: set[tuple[str, str]] = set()
    dropped = 0

    for position, item in enumerate(entries):
        try:
            entry = _validated(Entry.create(item), position)
        except InvalidEntry as exc:
            if exc.position is None:
                raise InvalidEntry(str(exc), position) from None
            raise
        pair = (entry.key, entry.target)
        if pair in seen:
            dropped += 1
            continue
        seen.add(pair)
        kept.append(entry)
        grouped.setdefault(entry.key, []).append(entry)

    if dropped:
        logger.debug("Dropped %d duplicate (key, target) entries.", dropped)
    logger.debug("Built symbol index: %d keys, %d entries.", len(grouped), len(kept))
    return SymbolIndex(tuple(kept), {key: tuple(group) for key, group in grouped.items()})


def query(index: SymbolIndex, fragment: str, limit: int | None = None) -> QueryResult:
    """Module-level form of ``SymbolIndex.query``."""
    return index.query(fragment, limit)


def lookup(index: SymbolIndex, key: str) -> tuple[Entry, ...]:
    """Module-level form of ``SymbolIndex.lookup``."""
    return index.lookup(key)
