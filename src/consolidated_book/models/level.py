"""Level models: stored price levels, derived display rows and their wire shapes."""

from dataclasses import dataclass
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from consolidated_book.models.enums import Side

AGGREGATED_VENUE = ""


class LevelKey(NamedTuple):
    """Identifies one venue's depth index on one side of the book."""

    venue: str
    depth: int


@dataclass(frozen=True)
class Level:
    """A single price/quantity entry at a venue and depth index.

    Aggregated levels carry ``venue == ""``.
    """

    key: LevelKey
    price: float
    quantity: int
    venue: str
    cumulative_quantity: int = 0

    @property
    def is_aggregated(self) -> bool:
        return self.venue == AGGREGATED_VENUE


@dataclass(frozen=True)
class BookRow:
    """Figures derived for one displayed level during a redisplay pass."""

    level: Level
    cumulative_quantity: int
    vbbo: float


@dataclass(frozen=True)
class MarketPrices:
    """Reserved prices marking unpriced (at market) orders.

    ``bid``/``offer`` arrive on the feed; ``unknown_bid``/``unknown_offer``
    are emitted when a market order ahead of a level makes its weighted
    price indeterminate.
    """

    bid: float
    offer: float
    unknown_bid: float
    unknown_offer: float


class LevelUpdate(BaseModel):
    """A single venue/level change as received from the feed."""

    model_config = ConfigDict(allow_inf_nan=False, frozen=True)

    depth_level: int = Field(ge=0)
    side: Side
    quantity: int = Field(ge=0)
    price: float
    venue: str

    @field_validator("depth_level", "quantity", "price", mode="before")
    @classmethod
    def _reject_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @property
    def key(self) -> LevelKey:
        return LevelKey(self.venue, self.depth_level)


class BookRowUpdate(BaseModel):
    """One row handed to the rendering callback."""

    row_index: int
    side: Side
    quantity: int
    price: str
    venue: str
    cumulative_quantity: int
    vbbo: str


def format_price(value: float, decimals: int = 4) -> str:
    """Render a price as fixed-point text."""
    return f"{value:.{decimals}f}"
