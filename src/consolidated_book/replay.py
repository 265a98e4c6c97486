"""Replay a JSON-lines feed file into a BookView.

Each record carries an ``op``:
  update     depth_level, side, quantity, price, venue
  reset
  redisplay  consolidated (optional, defaults to the replayer's mode)
  vwap       label, quantity
"""

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TextIO

from consolidated_book.book.view import BookView
from consolidated_book.errors import BookError, InvalidFeedRecord
from consolidated_book.metrics.prometheus import FEED_RECORDS_SKIPPED_TOTAL
from consolidated_book.models.level import BookRowUpdate
from consolidated_book.models.quote import VwapQuoteText

logger = logging.getLogger(__name__)


class PrintingDisplay:
    """Rendering callback that writes rows as aligned text."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def reset_with_count(self, row_count: int) -> None:
        self._stream.write(f"--- {row_count} row(s) ---\n")

    def update_row(self, update: BookRowUpdate) -> None:
        self._stream.write(
            f"{update.side.value:<4} {update.row_index:>3} {update.venue or '-':<6}"
            f" {update.quantity:>10} {update.price:>14}"
            f" {update.cumulative_quantity:>10} {update.vbbo:>14}\n"
        )


@dataclass
class ReplayStats:
    applied: int = 0
    skipped: int = 0
    redisplays: int = 0
    quotes: list[VwapQuoteText] = field(default_factory=list)


class FeedReplayer:
    """Drives a book from feed records, skipping records it cannot apply."""

    def __init__(self, book: BookView, display: PrintingDisplay, consolidated: bool = False) -> None:
        self._book = book
        self._display = display
        self._consolidated = consolidated
        self._ops: dict[str, Callable[[dict[str, Any], ReplayStats], None]] = {
            "update": self._apply_update,
            "reset": self._apply_reset,
            "redisplay": self._apply_redisplay,
            "vwap": self._apply_vwap,
        }

    def replay(self, lines: Iterable[str]) -> ReplayStats:
        stats = ReplayStats()
        for line_no, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                self._skip(stats, "json_decode_error", "line %d: invalid JSON: %s", line_no, exc)
                continue

            op = record.get("op") if isinstance(record, dict) else None
            handler = self._ops.get(op) if isinstance(op, str) else None
            if handler is None:
                self._skip(stats, "unknown_op", "line %d: unknown op in %r", line_no, record)
                continue

            try:
                handler(record, stats)
            except (BookError, KeyError) as exc:
                self._skip(stats, "invalid_record", "line %d: %s", line_no, exc)
                continue
            stats.applied += 1

        return stats

    def finish(self, stats: ReplayStats) -> None:
        """Final redisplay so the last state is always shown."""
        self._book.redisplay(self._display, self._consolidated)
        stats.redisplays += 1

    def _skip(self, stats: ReplayStats, reason: str, message: str, *args: Any) -> None:
        FEED_RECORDS_SKIPPED_TOTAL.labels(reason=reason).inc()
        logger.warning(message, *args)
        stats.skipped += 1

    def _apply_update(self, record: dict[str, Any], stats: ReplayStats) -> None:
        self._book.upsert(
            record["depth_level"],
            record["side"],
            record["quantity"],
            record["price"],
            record["venue"],
        )

    def _apply_reset(self, record: dict[str, Any], stats: ReplayStats) -> None:
        self._book.reset()

    def _apply_redisplay(self, record: dict[str, Any], stats: ReplayStats) -> None:
        consolidated = record.get("consolidated", self._consolidated)
        if not isinstance(consolidated, bool):
            raise InvalidFeedRecord(f"consolidated must be true or false, got {consolidated!r}")
        self._book.redisplay(self._display, consolidated)
        stats.redisplays += 1

    def _apply_vwap(self, record: dict[str, Any], stats: ReplayStats) -> None:
        stats.quotes.append(self._book.vwap_quote_text(record["label"], record["quantity"]))
