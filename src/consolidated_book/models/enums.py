"""Shared enums for the consolidated book."""

from enum import Enum


class Side(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class MarketOrderState(str, Enum):
    CLEAN = "Clean"
    TAINTED_BID = "TaintedBid"  # a BID marker was seen earlier in the pass
    TAINTED_OFFER = "TaintedOffer"  # an OFFER marker was seen earlier in the pass
