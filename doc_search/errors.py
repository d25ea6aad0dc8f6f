"""Exception types raised by the doc_search package."""

from __future__ import annotations


class DocSearchError(Exception):
    """Base class for all doc_search failures."""


class InvalidEntry(DocSearchError, ValueError):
    """An entry handed to ``build`` has an empty or malformed field."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is not None:
            message = f"entry #{position}: {message}"
        super().__init__(message)


class SearchDataError(DocSearchError, ValueError):
    """Generated search data could not be read."""

    def __init__(self, message: str, source: str = "<string>"):
        self.source = source
        super().__init__(f"{source}: {message}")
