"""Consolidated, venue-aware order book with VBBO and VWAP analytics."""

from consolidated_book.book.view import BookDisplay, BookView
from consolidated_book.config.settings import Settings
from consolidated_book.errors import BookError, InvalidLevelData, InvalidQuoteRequest
from consolidated_book.models.enums import Side

__all__ = [
    "BookDisplay",
    "BookView",
    "BookError",
    "InvalidLevelData",
    "InvalidQuoteRequest",
    "Settings",
    "Side",
]
