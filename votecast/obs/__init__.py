"""Observability utilities."""

from .audit import AuditLogRecord, AuditMiddleware
from .metrics import (
    REQUEST_COUNTER,
    REQUEST_ERROR_COUNTER,
    REQUEST_LATENCY_SECONDS,
    VOTE_REJECTIONS_COUNTER,
    VOTES_RECORDED_COUNTER,
    PrometheusMiddleware,
    metrics_router,
    record_vote_accepted,
    record_vote_rejected,
)
from .tracing import (
    initialise_tracing,
    instrument_fastapi_app,
    instrument_sqlalchemy_engine,
    traced,
)

__all__ = [
    "AuditLogRecord",
    "AuditMiddleware",
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "VOTES_RECORDED_COUNTER",
    "VOTE_REJECTIONS_COUNTER",
    "metrics_router",
    "record_vote_accepted",
    "record_vote_rejected",
    "initialise_tracing",
    "instrument_fastapi_app",
    "instrument_sqlalchemy_engine",
    "traced",
]
