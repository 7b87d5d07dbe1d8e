"""Request audit logging middleware."""
from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Keys whose values are never written to the audit trail in clear text.
_SECRET_KEYS = {"key", "x-admin-key", "code", "state", "access_token"}
_SENSITIVE_KEYS = {"email"}


def _mask_email(value: str) -> str:
    name, _, domain = value.partition("@")
    hidden = name[0] + "***" if name else "***"
    return f"{hidden}@{domain}" if domain else "***@***"


def _mask_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _mask_mapping(value)
    if isinstance(value, list):
        return [_mask_value(item) for item in value]
    if isinstance(value, str) and "@" in value:
        return _mask_email(value)
    return value


def _mask_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in mapping.items():
        lowered = key.lower()
        if lowered in _SECRET_KEYS:
            sanitized[key] = "***"
        elif lowered in _SENSITIVE_KEYS and isinstance(value, str):
            sanitized[key] = _mask_email(value)
        else:
            sanitized[key] = _mask_value(value)
    return sanitized


@dataclass(slots=True)
class AuditLogRecord:
    """Structured log entry emitted by the middleware."""

    timestamp: str
    request_id: str
    method: str
    path: str
    status: int
    duration_ms: float
    authenticated: bool
    ip_address: str | None
    query: dict[str, Any]
    body: Any

    def to_json(self) -> str:
        payload = asdict(self)
        payload["duration_ms"] = round(self.duration_ms, 2)
        return json.dumps(payload, default=str)

    def to_dict(self) -> dict[str, Any]:
        return json.loads(self.to_json())


class AuditMiddleware:
    """ASGI middleware writing one masked audit record per request.

    The request body is captured as the application reads it, so the receive
    channel is never replaced and disconnect messages still reach handlers.
    """

    def __init__(self, app: ASGIApp, *, logger: logging.Logger | None = None) -> None:
        self.app = app
        self._logger = logger or logging.getLogger("audit")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        chunks: list[bytes] = []
        status_code = 500

        async def receive_wrapper() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                chunks.append(message.get("body", b""))
            return message

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)["X-Request-ID"] = request_id
            await send(message)

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        finally:
            self._logger.info(
                self._build_record(
                    request,
                    request_id=request_id,
                    status_code=status_code,
                    duration_ms=(time.perf_counter() - start) * 1000,
                    body=b"".join(chunks),
                ).to_json()
            )

    @staticmethod
    def _build_record(
        request: Request, *, request_id: str, status_code: int, duration_ms: float, body: bytes
    ) -> AuditLogRecord:
        masked_body = None
        if body:
            try:
                masked_body = _mask_value(json.loads(body))
            except (json.JSONDecodeError, UnicodeDecodeError):
                masked_body = "<binary>"

        return AuditLogRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=status_code,
            duration_ms=duration_ms,
            authenticated=bool(request.scope.get("state", {}).get("authenticated", False)),
            ip_address=request.client.host if request.client else None,
            query=_mask_mapping(dict(request.query_params.multi_items())),
            body=masked_body,
        )


__all__ = ["AuditLogRecord", "AuditMiddleware"]
