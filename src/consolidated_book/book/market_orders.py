"""MarketOrderTracker: scan state for market orders within one pass.

A market order has no usable price, so once one is seen every later row in
the same pass has an indeterminate weighted price. The tracker moves from
CLEAN to TAINTED_BID or TAINTED_OFFER and never returns to CLEAN; the most
recent marker decides the polarity.
"""

from consolidated_book.models.enums import MarketOrderState
from consolidated_book.models.level import MarketPrices


class MarketOrderTracker:
    """Create one per side per pass; never reuse across passes."""

    def __init__(self, prices: MarketPrices) -> None:
        self._prices = prices
        self.state = MarketOrderState.CLEAN
        self.current_row_is_market = False

    @property
    def tainted(self) -> bool:
        return self.state is not MarketOrderState.CLEAN

    def observe(self, price: float) -> None:
        if price == self._prices.bid:
            self.state = MarketOrderState.TAINTED_BID
            self.current_row_is_market = True
        elif price == self._prices.offer:
            self.state = MarketOrderState.TAINTED_OFFER
            self.current_row_is_market = True
        else:
            self.current_row_is_market = False

    def price_for_level(self, price: float, cumulative_value: float, cumulative_qty: int) -> float:
        """Weighted price for a displayed row.

        A market row reports its own marker price; rows after a market order
        report the UNKNOWN marker for the tainted polarity.
        """
        if self.tainted:
            if self.current_row_is_market:
                return price
            if self.state is MarketOrderState.TAINTED_BID:
                return self._prices.unknown_bid
            return self._prices.unknown_offer

        return cumulative_value / cumulative_qty if cumulative_qty > 0 else 0.0

    def price_for_quantity(self, value: float, used_qty: int) -> float:
        """Average price for a fill; the BID/OFFER marker if any market order was seen."""
        if self.state is MarketOrderState.TAINTED_BID:
            return self._prices.bid
        if self.state is MarketOrderState.TAINTED_OFFER:
            return self._prices.offer

        return value / used_qty if used_qty > 0 else 0.0
