"""Environment-driven defaults for the doc-search CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Resolved CLI defaults; flags on the command line take precedence."""

    data: Path
    categories: tuple[str, ...]
    base_url: str
    max_results: int
    log_level: str


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def split_categories(raw: str) -> tuple[str, ...]:
    """Split a comma separated category list into lowercase names, dropping blanks."""
    return tuple(p.strip().lower() for p in raw.split(",") if p.strip())


def load_settings(env_file: Path | None = None) -> Settings:
    """
    Read settings from the environment, after loading ``env_file`` (or ``./.env``).

    Values already present in the environment win over the .env file.
    """
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv(dotenv_path=Path.cwd() / ".env")

    return Settings(
        data=Path(os.getenv("DOC_SEARCH_DATA", "search")),
        categories=split_categories(os.getenv("DOC_SEARCH_CATEGORIES", "all")) or ("all",),
        base_url=os.getenv("DOC_SEARCH_BASE_URL", ""),
        max_results=_int_env("DOC_SEARCH_MAX", 20),
        log_level=os.getenv("DOC_SEARCH_LOG_LEVEL", "WARNING").upper(),
    )
