"""BookView: owns one instrument's book and drives the redisplay pass.

ingest -> (aggregate) -> sort -> truncate -> VBBO -> emit via callback
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

from consolidated_book.book.aggregator import aggregate
from consolidated_book.book.comparator import sort_side
from consolidated_book.book.store import PriceLevelStore
from consolidated_book.book.vbbo import compute_vbbo
from consolidated_book.book.vwap import vwap_for_quantity
from consolidated_book.config.settings import Settings
from consolidated_book.errors import InvalidQuoteRequest
from consolidated_book.metrics.prometheus import (
    REDISPLAY_LATENCY,
    REDISPLAYS_TOTAL,
    VWAP_QUOTES_TOTAL,
)
from consolidated_book.models.enums import Side
from consolidated_book.models.level import BookRow, BookRowUpdate, Level, format_price
from consolidated_book.models.quote import VwapFill, VwapFillText, VwapQuote, VwapQuoteText
from consolidated_book.validation.level_validator import validate_level

logger = logging.getLogger(__name__)

RedisplayListener = Callable[[], None]


class BookDisplay(Protocol):
    """Rendering callback fed by ``BookView.redisplay``."""

    def reset_with_count(self, row_count: int) -> None: ...

    def update_row(self, update: BookRowUpdate) -> None: ...


class BookView:
    """Consolidated, venue-aware book for a single instrument.

    All operations hold one re-entrant lock. Use ``batch()`` to keep a run of
    updates and the following redisplay together.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._prices = self._settings.market_prices()
        self._store = PriceLevelStore()
        self._snapshots: dict[Side, list[BookRow]] = {Side.BUY: [], Side.SELL: []}
        self._listeners: list[RedisplayListener] = []
        self._lock = threading.RLock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> PriceLevelStore:
        return self._store

    @contextmanager
    def batch(self) -> Iterator[BookView]:
        with self._lock:
            yield self

    # -- ingestion -------------------------------------------------------

    def upsert(self, depth_level: int, side: Side, quantity: int, price: float, venue: str) -> bool:
        """Apply one venue/level update. Returns False when the level was removed.

        Raises InvalidLevelData for non-numeric or negative input.
        """
        update = validate_level({
            "depth_level": depth_level,
            "side": side,
            "quantity": quantity,
            "price": price,
            "venue": venue,
        })
        with self._lock:
            return self._store.upsert(
                update.side, update.key, update.price, update.quantity, update.venue
            )

    def reset(self) -> None:
        with self._lock:
            cleared = len(self._store)
            self._store.reset()
            self._snapshots = {Side.BUY: [], Side.SELL: []}
        logger.info("Book reset, %d level(s) cleared", cleared)

    # -- display ---------------------------------------------------------

    def add_redisplay_listener(self, listener: RedisplayListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_redisplay_listener(self, listener: RedisplayListener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def redisplay(self, callback: BookDisplay, consolidated: bool = False) -> int:
        """Recompute both sides and stream them to ``callback``.

        Returns the row count passed to ``reset_with_count``.
        """
        start = time.perf_counter()
        with self._lock:
            buy_rows = self._build_rows(Side.BUY, consolidated)
            sell_rows = self._build_rows(Side.SELL, consolidated)
            self._snapshots = {Side.BUY: buy_rows, Side.SELL: sell_rows}

            row_count = max(len(buy_rows), len(sell_rows))
            callback.reset_with_count(row_count)
            self._emit_side(buy_rows, Side.BUY, callback)
            self._emit_side(sell_rows, Side.SELL, callback)

            for listener in list(self._listeners):
                listener()

            stored_buy = self._store.count(Side.BUY)
            stored_sell = self._store.count(Side.SELL)

        mode = "consolidated" if consolidated else "full"
        REDISPLAYS_TOTAL.labels(mode=mode).inc()
        REDISPLAY_LATENCY.observe(time.perf_counter() - start)
        logger.debug(
            "Redisplayed %s book: %d of %d buy, %d of %d sell levels shown",
            mode,
            len(buy_rows),
            stored_buy,
            len(sell_rows),
            stored_sell,
        )
        return row_count

    def snapshot(self, side: Side) -> list[BookRow]:
        """Rows produced by the last redisplay for one side."""
        with self._lock:
            return list(self._snapshots[side])

    def _build_rows(self, side: Side, consolidated: bool) -> list[BookRow]:
        levels = self._store.side(side)
        if consolidated:
            levels = aggregate(levels, self._settings.price_decimals)

        ordered = sort_side(
            levels.values(),
            side,
            preferred_venue=self._settings.preferred_venue,
            legacy_venue_tiebreak=self._settings.legacy_venue_tiebreak,
        )
        if consolidated:
            ordered = ordered[: self._settings.consolidated_depth]

        return compute_vbbo(ordered, self._prices)

    def _emit_side(self, rows: list[BookRow], side: Side, callback: BookDisplay) -> None:
        decimals = self._settings.price_decimals
        for index, row in enumerate(rows):
            callback.update_row(
                BookRowUpdate(
                    row_index=index,
                    side=side,
                    quantity=row.level.quantity,
                    price=format_price(row.level.price, decimals),
                    venue=row.level.venue,
                    cumulative_quantity=row.cumulative_quantity,
                    vbbo=format_price(row.vbbo, decimals),
                )
            )

    # -- VWAP ------------------------------------------------------------

    def vwap_quote(self, label: str, quantity: int) -> VwapQuote:
        """VWAP for ``quantity`` on both sides of the last displayed book."""
        if not isinstance(label, str):
            raise InvalidQuoteRequest(f"VWAP label must be text, got {label!r}")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidQuoteRequest(f"VWAP quantity must be a non-negative integer, got {quantity!r}")

        with self._lock:
            buy_levels = self._levels_of(self._snapshots[Side.BUY])
            sell_levels = self._levels_of(self._snapshots[Side.SELL])

        VWAP_QUOTES_TOTAL.inc()
        return VwapQuote(
            label=label,
            quantity=quantity,
            buy_side=vwap_for_quantity(quantity, buy_levels, self._prices),
            sell_side=vwap_for_quantity(quantity, sell_levels, self._prices),
        )

    def vwap_quote_text(self, label: str, quantity: int) -> VwapQuoteText:
        quote = self.vwap_quote(label, quantity)
        return VwapQuoteText(
            label=quote.label,
            quantity=str(quote.quantity),
            buy_side=self._fill_text(quote.buy_side),
            sell_side=self._fill_text(quote.sell_side),
        )

    def _fill_text(self, fill: VwapFill) -> VwapFillText:
        return VwapFillText(
            quantity=str(fill.quantity),
            price=format_price(fill.price, self._settings.price_decimals),
            level=fill.level,
        )

    @staticmethod
    def _levels_of(rows: list[BookRow]) -> list[Level]:
        return [row.level for row in rows]
