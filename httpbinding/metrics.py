"""Prometheus metrics for the HTTP binding."""
from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

DISPATCH_OUTCOMES = Counter(
    "httpbinding_dispatch_total",
    "Command dispatches by terminal outcome",
    labelnames=("outcome",),
)

HTTP_REQUESTS = Counter(
    "httpbinding_http_requests_total",
    "Outbound HTTP requests by method and result",
    labelnames=("method", "result"),
)

HTTP_LATENCY = Histogram(
    "httpbinding_http_latency_ms",
    "Outbound HTTP request latency (milliseconds)",
    labelnames=("method",),
    buckets=(5, 10, 20, 50, 100, 200, 500, 1000, 2000, 5000),
)

REGISTERED_PROVIDERS = Gauge(
    "httpbinding_registered_providers",
    "Mapping providers currently registered",
)
