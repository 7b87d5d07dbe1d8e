"""Server-side login sessions and the signed cookie that points at them."""
from __future__ import annotations

import json
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from jose import jws  # type: ignore[import-untyped]
from jose.exceptions import JWSError  # type: ignore[import-untyped]

from votecast.services.identity import Identity

_COOKIE_ALGORITHM = "HS256"


@dataclass(slots=True, frozen=True)
class _SessionEntry:
    identity: Identity
    expires_at: float


class SessionStore:
    """In-memory store mapping opaque session tokens to identities."""

    def __init__(self, ttl_seconds: int, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _SessionEntry] = {}
        self._lock = Lock()

    def establish(self, identity: Identity) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._purge_expired()
            self._entries[token] = _SessionEntry(identity=identity, expires_at=self._clock() + self._ttl_seconds)
        return token

    def current_identity(self, token: str | None) -> Identity | None:
        if not token:
            return None
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[token]
                return None
            return entry.identity

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._entries.pop(token, None)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [token for token, entry in self._entries.items() if entry.expires_at <= now]
        for token in expired:
            del self._entries[token]


class SessionCookieCodec:
    """Signs session tokens so forged cookies are rejected before lookup."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def encode(self, token: str) -> str:
        return jws.sign({"sid": token}, self._secret, algorithm=_COOKIE_ALGORITHM)

    def decode(self, value: str | None) -> str | None:
        if not value:
            return None
        try:
            payload = jws.verify(value, self._secret, algorithms=[_COOKIE_ALGORITHM])
        except JWSError:
            return None
        try:
            sid = json.loads(payload).get("sid")
        except (ValueError, AttributeError):
            return None
        return sid if isinstance(sid, str) else None


__all__ = ["SessionCookieCodec", "SessionStore"]
