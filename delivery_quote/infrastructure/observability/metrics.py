"""Prometheus metrics for quote outcomes, fees, and venue API health"""

from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "delivery_quote_total",
    "Total delivery quotes computed",
    ["outcome", "reason"],  # success | rejected | failed
)

delivery_fee_histogram = Histogram(
    "delivery_fee_cents",
    "Delivery fees quoted, in cents",
    buckets=[200, 300, 400, 500, 600, 800, 1000, 1500],
)

delivery_distance_histogram = Histogram(
    "delivery_distance_meters",
    "Customer to venue distance of quoted deliveries",
    buckets=[250, 500, 1000, 1500, 2000, 5000],
)

# Venue API metrics
venue_fetch_failures_counter = Counter(
    "venue_fetch_failures_total",
    "Failed venue API calls",
    ["endpoint"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(outcome: str, reason: str = "", fee_cents: int | None = None, distance_meters: int | None = None) -> None:
    """Record one quote outcome; fee and distance are only observed when known"""
    quote_counter.labels(outcome=outcome, reason=reason).inc()

    if fee_cents is not None:
        delivery_fee_histogram.observe(fee_cents)
    if distance_meters is not None:
        delivery_distance_histogram.observe(distance_meters)
