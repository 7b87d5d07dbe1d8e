"""Prometheus metrics for the HTTP service and the vote pipeline."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_LATENCY_SECONDS = Histogram(
    "http_request_latency_seconds",
    "Latency of HTTP requests in seconds.",
    labelnames=("method", "path"),
)
REQUEST_COUNTER = Counter(
    "http_requests_total",
    "Total number of HTTP requests processed.",
    labelnames=("method", "path", "status"),
)
REQUEST_ERROR_COUNTER = Counter(
    "http_request_errors_total",
    "Total number of HTTP requests that resulted in server errors.",
    labelnames=("method", "path", "status"),
)
VOTES_RECORDED_COUNTER = Counter(
    "votes_recorded_total",
    "Number of votes durably recorded.",
    labelnames=("party",),
)
VOTE_REJECTIONS_COUNTER = Counter(
    "vote_rejections_total",
    "Number of vote submissions rejected, by reason.",
    labelnames=("reason",),
)


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware that records request metrics for Prometheus scraping."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        method = request.method
        start_time = time.perf_counter()
        status = "500"

        try:
            response = await call_next(request)
            status = str(response.status_code)
            if response.status_code >= 500:
                REQUEST_ERROR_COUNTER.labels(method=method, path=_route_path(request), status=status).inc()
            return response
        except Exception:
            REQUEST_ERROR_COUNTER.labels(method=method, path=_route_path(request), status="500").inc()
            raise
        finally:
            path = _route_path(request)
            REQUEST_LATENCY_SECONDS.labels(method=method, path=path).observe(time.perf_counter() - start_time)
            REQUEST_COUNTER.labels(method=method, path=path, status=status).inc()


metrics_router = APIRouter(tags=["observability"])


@metrics_router.get("/metrics", include_in_schema=False)
def metrics_endpoint() -> Response:
    """Expose Prometheus metrics for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_vote_accepted(party: str) -> None:
    VOTES_RECORDED_COUNTER.labels(party=party).inc()


def record_vote_rejected(reason: str) -> None:
    VOTE_REJECTIONS_COUNTER.labels(reason=reason).inc()


__all__ = [
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "VOTES_RECORDED_COUNTER",
    "VOTE_REJECTIONS_COUNTER",
    "metrics_endpoint",
    "metrics_router",
    "record_vote_accepted",
    "record_vote_rejected",
]
