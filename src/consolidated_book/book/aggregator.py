"""Aggregator: collapses per-venue levels into one level per price.

Prices are rounded to the display precision before grouping so that feed
values such as 10.00001 and 9.99996 land in the same consolidated level.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from consolidated_book.models.level import AGGREGATED_VENUE, Level, LevelKey

PRICE_DECIMALS = 4


@dataclass
class _PriceGroup:
    key: LevelKey
    price: float
    quantity: int
    cumulative_quantity: int
    seeded_from_aggregate: bool


def price_bucket(price: float, decimals: int = PRICE_DECIMALS) -> str:
    """Grouping key for a price: its fixed-point text at the given precision."""
    return f"{price:.{decimals}f}"


def aggregate(
    levels: Mapping[LevelKey, Level],
    decimals: int = PRICE_DECIMALS,
) -> dict[LevelKey, Level]:
    """Return one aggregated level per rounded price, keyed by representative key.

    The first level seen at a price seeds the group and provides its key and
    raw price; the rounded bucket is only used for grouping. If
    the seed is itself an aggregated level, a later contributor's key is
    adopted instead, so repeated passes settle on a stable key.
    """
    groups: dict[str, _PriceGroup] = {}

    for level in levels.values():
        bucket = price_bucket(level.price, decimals)
        group = groups.get(bucket)
        if group is None:
            groups[bucket] = _PriceGroup(
                key=level.key,
                price=level.price,
                quantity=int(level.quantity),
                cumulative_quantity=level.cumulative_quantity,
                seeded_from_aggregate=level.is_aggregated,
            )
            continue

        group.quantity += int(level.quantity)
        group.cumulative_quantity += level.cumulative_quantity
        if group.seeded_from_aggregate:
            group.key = level.key

    return {
        group.key: Level(
            key=group.key,
            price=group.price,
            quantity=group.quantity,
            venue=AGGREGATED_VENUE,
            cumulative_quantity=group.cumulative_quantity,
        )
        for group in groups.values()
    }
