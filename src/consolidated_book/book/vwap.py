"""VWAP: average price achievable for a requested quantity."""

from collections.abc import Sequence

from consolidated_book.book.market_orders import MarketOrderTracker
from consolidated_book.models.level import Level, MarketPrices
from consolidated_book.models.quote import VwapFill


def vwap_for_quantity(
    requested_qty: int,
    sorted_levels: Sequence[Level],
    prices: MarketPrices,
) -> VwapFill:
    """Consume ``requested_qty`` from the levels, best first.

    Every level is observed even once the request is filled: a market order
    further down still switches the returned price to its marker.
    """
    tracker = MarketOrderTracker(prices)
    remaining = requested_qty
    used = 0
    value = 0.0
    last_level = -1

    for index, level in enumerate(sorted_levels):
        row_qty = int(level.quantity)
        row_price = float(level.price)

        tracker.observe(row_price)

        if remaining > 0 and row_qty > 0:
            fill = min(remaining, row_qty)
            remaining -= fill
            used += fill
            value += fill * row_price
            last_level = index

    return VwapFill(
        quantity=used,
        price=tracker.price_for_quantity(value, used),
        level=last_level,
    )
