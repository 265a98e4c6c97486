"""Models for the consolidated book: levels, rows and VWAP quotes."""

from consolidated_book.models.enums import MarketOrderState, Side
from consolidated_book.models.level import (
    AGGREGATED_VENUE,
    BookRow,
    BookRowUpdate,
    Level,
    LevelKey,
    LevelUpdate,
    MarketPrices,
    format_price,
)
from consolidated_book.models.quote import VwapFill, VwapFillText, VwapQuote, VwapQuoteText

__all__ = [
    "AGGREGATED_VENUE",
    "Side",
    "MarketOrderState",
    "Level",
    "LevelKey",
    "LevelUpdate",
    "BookRow",
    "BookRowUpdate",
    "MarketPrices",
    "format_price",
    "VwapFill",
    "VwapFillText",
    "VwapQuote",
    "VwapQuoteText",
]
