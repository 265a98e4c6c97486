"""VBBO: cumulative quantity and volume-weighted price for each displayed row."""

from collections.abc import Sequence

from consolidated_book.book.market_orders import MarketOrderTracker
from consolidated_book.models.level import BookRow, Level, MarketPrices


def compute_vbbo(sorted_levels: Sequence[Level], prices: MarketPrices) -> list[BookRow]:
    """Walk levels best-first, returning one BookRow per level.

    Stored levels are left untouched; the derived figures live on the rows.
    """
    tracker = MarketOrderTracker(prices)
    cumulative_qty = 0
    value = 0.0
    rows: list[BookRow] = []

    for level in sorted_levels:
        price = float(level.price)
        quantity = int(level.quantity)

        tracker.observe(price)

        cumulative_qty += quantity
        value += price * quantity

        rows.append(
            BookRow(
                level=level,
                cumulative_quantity=cumulative_qty,
                vbbo=tracker.price_for_level(price, value, cumulative_qty),
            )
        )

    return rows
