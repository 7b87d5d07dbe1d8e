"""Common dependencies for API and page routes."""
from __future__ import annotations

import secrets
from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from votecast.core.config import get_settings
from votecast.db.session import SessionLocal
from votecast.services.identity import GoogleIdentityProvider, Identity
from votecast.services.sessions import SessionCookieCodec, SessionStore

ADMIN_KEY_HEADER = "x-admin-key"
ADMIN_KEY_QUERY = "key"

session_store = SessionStore(ttl_seconds=get_settings().session_ttl_seconds)


def get_db_session() -> Iterator[Session]:
    """Yield a database session for FastAPI dependencies."""

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_identity_provider() -> Iterator[GoogleIdentityProvider]:
    provider = GoogleIdentityProvider(get_settings())
    try:
        yield provider
    finally:
        provider.close()


def get_cookie_codec() -> SessionCookieCodec:
    return SessionCookieCodec(get_settings().session_secret)


def session_token_from_request(request: Request, codec: SessionCookieCodec) -> str | None:
    return codec.decode(request.cookies.get(get_settings().session_cookie_name))


def get_optional_identity(
    request: Request,
    codec: SessionCookieCodec = Depends(get_cookie_codec),
) -> Identity | None:
    """Resolve the caller's identity from the session cookie, if any."""

    identity = session_store.current_identity(session_token_from_request(request, codec))
    request.state.authenticated = identity is not None
    return identity


def require_identity(identity: Identity | None = Depends(get_optional_identity)) -> Identity:
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return identity


def require_admin_key(request: Request) -> None:
    """Shared-secret check guarding the results endpoint.

    The key is static and never rotated; it grants read access to results
    regardless of login state.
    """

    expected = get_settings().admin_key
    supplied = request.headers.get(ADMIN_KEY_HEADER) or request.query_params.get(ADMIN_KEY_QUERY)
    if (
        not expected
        or supplied is None
        or not secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


__all__ = [
    "ADMIN_KEY_HEADER",
    "ADMIN_KEY_QUERY",
    "get_cookie_codec",
    "get_db_session",
    "get_identity_provider",
    "get_optional_identity",
    "require_admin_key",
    "require_identity",
    "session_store",
    "session_token_from_request",
]
