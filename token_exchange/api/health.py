"""Liveness and readiness endpoints.

/health: liveness plus a summary of token exchange outcomes read back
          from the in-process Prometheus registry.  Per-process only: with
          several replicas each one reports its own share.
/ready:  readiness.  Storage is in-memory, so an instance that can
          answer is ready.
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import REGISTRY

from token_exchange.api import oauth

router = APIRouter(tags=["health"])


def _sum_counter(metric_name: str, label_filter: dict | None = None) -> float:
    """Sum a counter's samples across all label combinations matching the filter."""
    total = 0.0
    for metric in REGISTRY.collect():
        for sample in metric.samples:
            if sample.name != metric_name:
                continue
            if label_filter and not all(
                sample.labels.get(k) == v for k, v in label_filter.items()
            ):
                continue
            total += sample.value
    return total


@router.get("/health")
async def health() -> dict:
    checks = {
        "auth_code_store": "in_memory",
        "client_store": "in_memory",
        "registered_clients": len(oauth.client_repo),
    }

    total = _sum_counter("token_exchanges_total")
    issued = _sum_counter("token_exchanges_total", {"outcome": "issued"})

    return {
        "status": "ok",
        "checks": checks,
        "token_exchanges": {
            "total": int(total),
            "issued": int(issued),
            "rejected": int(total - issued),
        },
    }


@router.get("/ready")
async def ready() -> Response:
    return Response(status_code=200)
