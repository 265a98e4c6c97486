"""Exceptions raised by the consolidated book."""

from typing import Any


class BookError(Exception):
    """Base class for consolidated book errors."""


class InvalidLevelData(BookError, ValueError):
    """A level update carried a non-numeric or out-of-range field."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidQuoteRequest(BookError, ValueError):
    """A VWAP quote was requested with an unusable label or quantity."""


class InvalidFeedRecord(BookError, ValueError):
    """A replayed feed record has a field of the wrong type."""
