"""Configuration via environment variables with CONSOLIDATED_BOOK_ prefix."""

from pydantic_settings import BaseSettings

from consolidated_book.models.level import MarketPrices


class Settings(BaseSettings):
    model_config = {"env_prefix": "CONSOLIDATED_BOOK_"}

    # Display
    consolidated_depth: int = 5
    price_decimals: int = 4

    # Ordering
    preferred_venue: str = "XEQT"
    legacy_venue_tiebreak: bool = False

    # Reserved market-order prices
    bid_marker: float = 999999.0
    offer_marker: float = -999999.0
    unknown_bid: float = 999998.0
    unknown_offer: float = -999998.0

    # Metrics
    metrics_enabled: bool = False
    metrics_port: int = 9090

    # Logging
    log_level: str = "INFO"

    def market_prices(self) -> MarketPrices:
        return MarketPrices(
            bid=self.bid_marker,
            offer=self.offer_marker,
            unknown_bid=self.unknown_bid,
            unknown_offer=self.unknown_offer,
        )
