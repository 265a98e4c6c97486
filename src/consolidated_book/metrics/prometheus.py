"""Prometheus metrics for the consolidated book."""

from prometheus_client import Counter, Histogram, start_http_server

# Level updates applied to storage
LEVEL_UPDATES_TOTAL = Counter(
    "consolidated_book_level_updates_total",
    "Total level updates applied to the book",
    ["side", "action"],
)

# Level updates rejected at the ingestion boundary
INVALID_UPDATES_TOTAL = Counter(
    "consolidated_book_invalid_updates_total",
    "Total level updates rejected by validation",
)

# Feed records skipped during replay
FEED_RECORDS_SKIPPED_TOTAL = Counter(
    "consolidated_book_feed_records_skipped_total",
    "Total feed records skipped during replay",
    ["reason"],
)

# Redisplay passes
REDISPLAYS_TOTAL = Counter(
    "consolidated_book_redisplays_total",
    "Total redisplay passes",
    ["mode"],
)

# Sort + VBBO + emit duration
REDISPLAY_LATENCY = Histogram(
    "consolidated_book_redisplay_seconds",
    "Redisplay pass duration in seconds",
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
)

# VWAP quotes served
VWAP_QUOTES_TOTAL = Counter(
    "consolidated_book_vwap_quotes_total",
    "Total VWAP quotes computed",
)


def start_metrics_server(port: int) -> None:
    """Start the Prometheus metrics HTTP server."""
    start_http_server(port)
