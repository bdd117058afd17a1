"""Prometheus metrics for the averager service."""

from shared.metrics import get_counter, get_gauge, get_histogram

SERVICE = "averager"

# HTTP surface
NUMBERS_REQUESTS = get_counter(
    "numbers_requests_total", "Total /numbers requests", SERVICE, ["category"]
)
NUMBERS_REQUEST_ERRORS = get_counter(
    "numbers_request_errors_total", "Unhandled /numbers request errors", SERVICE
)
NUMBERS_LATENCY = get_histogram(
    "numbers_request_latency_seconds", "End-to-end /numbers latency", SERVICE
)

# Upstream
UPSTREAM_FAILURES = get_counter(
    "upstream_failures_total",
    "Upstream fetches that yielded no numbers due to an error",
    SERVICE,
    ["category", "reason"],
)
UPSTREAM_LATENCY = get_histogram(
    "upstream_fetch_latency_seconds",
    "Upstream fetch duration including timeouts",
    SERVICE,
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    labelnames=["category"],
)

# Window
WINDOW_SIZE = get_gauge("window_size", "Current number of values in the window", SERVICE)
WINDOW_AVERAGE = get_gauge("window_average", "Average of the current window", SERVICE)
WINDOW_ADMITTED = get_counter(
    "window_admitted_total", "Values admitted into the window", SERVICE
)
WINDOW_EVICTED = get_counter(
    "window_evicted_total", "Values evicted from the head of the window", SERVICE
)
WINDOW_DUPLICATES = get_counter(
    "window_duplicates_total", "Fetched values skipped as already present", SERVICE
)
