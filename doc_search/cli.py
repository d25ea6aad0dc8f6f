"""
Search a doxygen API reference's symbol data from the command line.

Examples:
    # Ranked search over the shards in ./search (exact > prefix > substring)
    doc-search search insert --max 5

    # Every overload of one exact key, with links resolved against the docs site
    doc-search --base-url https://example.org/docs/search/ lookup waitqueue

    # Only the function shards, as JSON
    doc-search --category functions search wait --json

    # Flatten a large search/ directory once, then load the dump instead
    doc-search --data docs/html/search export symbols.json
    doc-search --data symbols.json search path

Defaults come from DOC_SEARCH_* environment variables or a .env file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import urljoin

from .entry_store import dump_entries, load_entries
from .errors import DocSearchError
from .settings import Settings, load_settings, split_categories
from .symbol_index import Entry, SymbolIndex, build

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for counts that must be 1 or more."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _parse_args(argv: Sequence[str] | None, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="doc-search", description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data,
        help="Shard directory, single .js shard or exported .json (default: %(default)s or $DOC_SEARCH_DATA).",
    )
    parser.add_argument(
        "--category",
        "-c",
        action="append",
        help="Shard category to load, e.g. all, functions, classes (repeatable or comma separated).",
    )
    parser.add_argument(
        "--base-url",
        default=settings.base_url,
        help="URL of the search/ directory; relative targets are resolved against it.",
    )
    parser.add_argument("--env-file", type=Path, help="Load settings from this .env file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Ranked substring search.")
    search.add_argument("term", help="Case-insensitive fragment to search for.")
    search.add_argument(
        "--max",
        "-n",
        type=positive_int,
        default=settings.max_results,
        help="Maximum results to print (default %(default)s).",
    )
    search.add_argument("--json", action="store_true", help="Print results as JSON.")

    lookup = sub.add_parser("lookup", help="Exact key lookup.")
    lookup.add_argument("key", help="Key to look up (case-insensitive).")
    lookup.add_argument("--json", action="store_true", help="Print results as JSON.")

    export = sub.add_parser("export", help="Write the loaded entries to a JSON file.")
    export.add_argument("output", type=Path, help="Destination .json file.")

    return parser.parse_args(argv)


def _configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _env_file(argv: Sequence[str] | None) -> Path | None:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", type=Path)
    known, _ = pre.parse_known_args(argv)
    return known.env_file


def resolve_target(target: str, base_url: str) -> str:
    """Join a relative target onto the docs base URL, if one is configured."""
    return urljoin(base_url, target) if base_url else target


def _print_entries(entries: Iterable[Entry], base_url: str, as_json: bool) -> int:
    entries = list(entries)
    if as_json:
        rows = [
            {
                "key": e.key,
                "label": e.label,
                "target": e.target,
                "scope": e.scope,
                "url": resolve_target(e.target, base_url),
            }
            for e in entries
        ]
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return len(entries)
    for e in entries:
        parts = [e.label]
        if e.scope:
            parts.append(e.scope)
        parts.append(resolve_target(e.target, base_url))
        print(" :: ".join(parts))
    return len(entries)


def _load_index(args: argparse.Namespace, settings: Settings) -> SymbolIndex:
    categories = settings.categories
    if args.category:
        categories = split_categories(",".join(args.category)) or categories
    entries = load_entries(args.data, categories)
    return build(entries)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = load_settings(_env_file(argv))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    args = _parse_args(argv, settings)
    _configure_logging(args.verbose, settings.log_level)

    try:
        index = _load_index(args, settings)
    except (OSError, DocSearchError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug("Loaded %r from %s", index, args.data)

    if args.command == "search":
        printed = _print_entries(index.query(args.term, limit=args.max), args.base_url, args.json)
        if printed == 0 and not args.json:
            print("No matches found.")
        return 0

    if args.command == "lookup":
        found = index.lookup(args.key)
        if not found:
            print(f"No entries for key '{args.key}'.", file=sys.stderr)
            return 1
        _print_entries(found, args.base_url, args.json)
        return 0

    count = dump_entries(index, args.output)
    print(f"Wrote {count} entries to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
