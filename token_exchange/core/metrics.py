"""Prometheus metric inventory.

Every metric the service exposes is declared here; the modules that own
the behavior import and update them.  Counters only go up, so tests
assert on deltas against the global registry.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Token exchange is CPU-bound (Argon2 verify + ES256 signing), so
    # most requests land between 25ms and 250ms.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Token exchange
# ---------------------------------------------------------------------------

TOKEN_EXCHANGES = Counter(
    "token_exchanges_total",
    "Authorization code exchanges by outcome",
    # "issued", or the RFC 6749 error code: invalid_client, invalid_grant,
    # unsupported_grant_type
    ["outcome"],
)

ID_TOKENS_ISSUED = Counter(
    "id_tokens_issued_total",
    "Identity tokens issued alongside an access token",
)
