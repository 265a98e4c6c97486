"""Entry point: replay a feed file into a book and print the result."""

import argparse
import logging
import sys

from consolidated_book.book.view import BookView
from consolidated_book.config.settings import Settings
from consolidated_book.errors import BookError
from consolidated_book.metrics.prometheus import start_metrics_server
from consolidated_book.replay import FeedReplayer, PrintingDisplay


def _parse_vwap(value: str) -> tuple[str, int]:
    label, sep, qty = value.partition("=")
    if not sep or not label:
        raise argparse.ArgumentTypeError(f"expected LABEL=QTY, got {value!r}")
    try:
        return label, int(qty)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"quantity must be an integer in {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="consolidated-book",
        description="Replay a JSON-lines level feed and display the consolidated book.",
    )
    parser.add_argument("feed", type=argparse.FileType("r"), help="feed file, or - for stdin")
    parser.add_argument(
        "--consolidated",
        action="store_true",
        help="aggregate venues by price and limit the display depth",
    )
    parser.add_argument(
        "--vwap",
        type=_parse_vwap,
        action="append",
        default=[],
        metavar="LABEL=QTY",
        help="print a VWAP quote for QTY after the replay (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger("consolidated_book")

    if settings.metrics_enabled:
        start_metrics_server(settings.metrics_port)
        logger.info("Prometheus metrics on port %d", settings.metrics_port)

    book = BookView(settings)
    replayer = FeedReplayer(book, PrintingDisplay(sys.stdout), consolidated=args.consolidated)

    with args.feed:
        stats = replayer.replay(args.feed)
    replayer.finish(stats)

    for label, qty in args.vwap:
        try:
            stats.quotes.append(book.vwap_quote_text(label, qty))
        except BookError as exc:
            logger.error("Cannot quote %s: %s", label, exc)
            return 2
    for quote in stats.quotes:
        sys.stdout.write(quote.model_dump_json() + "\n")

    logger.info(
        "Replay finished: %d applied, %d skipped, %d redisplay(s)",
        stats.applied,
        stats.skipped,
        stats.redisplays,
    )
    return 0 if stats.skipped == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
