"""VWAP quote models."""

from pydantic import BaseModel


class VwapFill(BaseModel):
    """Result of walking one side of the book for a requested quantity.

    ``level`` is the index of the last level that contributed, or -1.
    """

    quantity: int
    price: float
    level: int


class VwapQuote(BaseModel):
    label: str
    quantity: int
    buy_side: VwapFill
    sell_side: VwapFill


class VwapFillText(BaseModel):
    quantity: str
    price: str
    level: int


class VwapQuoteText(BaseModel):
    """VwapQuote rendered for direct display: prices as 4-decimal text."""

    label: str
    quantity: str
    buy_side: VwapFillText
    sell_side: VwapFillText
