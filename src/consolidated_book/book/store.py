"""PriceLevelStore: per-side storage of venue/depth levels."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from consolidated_book.metrics.prometheus import LEVEL_UPDATES_TOTAL
from consolidated_book.models.enums import Side
from consolidated_book.models.level import Level, LevelKey

logger = logging.getLogger(__name__)


class PriceLevelStore:
    """Holds the latest level for every (venue, depth) pair on each side.

    A zero quantity removes the entry. A zero price does not: market orders
    during an auction or the open cross arrive priced at zero.
    """

    def __init__(self) -> None:
        self._sides: dict[Side, dict[LevelKey, Level]] = {Side.BUY: {}, Side.SELL: {}}

    def upsert(self, side: Side, key: LevelKey, price: float, quantity: int, venue: str) -> bool:
        """Store or remove a level. Returns True if stored, False if removed."""
        levels = self._sides[side]
        if quantity == 0:
            removed = levels.pop(key, None)
            LEVEL_UPDATES_TOTAL.labels(side=side.value, action="removed").inc()
            logger.debug("Removed %s level %s (present=%s)", side.value, key, removed is not None)
            return False

        levels[key] = Level(key=key, price=price, quantity=quantity, venue=venue)
        LEVEL_UPDATES_TOTAL.labels(side=side.value, action="stored").inc()
        logger.debug("Stored %s level %s: %d @ %s", side.value, key, quantity, price)
        return True

    def side(self, side: Side) -> Mapping[LevelKey, Level]:
        """Read-only view of one side."""
        return MappingProxyType(self._sides[side])

    def count(self, side: Side) -> int:
        return len(self._sides[side])

    def reset(self) -> None:
        for levels in self._sides.values():
            levels.clear()

    def __len__(self) -> int:
        return sum(len(levels) for levels in self._sides.values())
