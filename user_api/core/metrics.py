"""Prometheus metrics for user-api.

All metrics live here so there is one inventory of what the service
measures.  The HTTP metrics are fed by ``MetricsMiddleware``; the store
gauge is set by the user routes after every mutation.

Counters only go up and are never reset in-process, so scrape them with
``rate()``.  The duration histogram's buckets are tuned for an in-memory
service where almost everything should land under 25ms.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

USERS_STORED = Gauge(
    "users_stored",
    "Number of user records currently held in memory",
)
