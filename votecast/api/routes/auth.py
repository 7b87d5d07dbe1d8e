"""Google login, callback, and logout endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from votecast.api.deps import (
    get_cookie_codec,
    get_identity_provider,
    session_store,
    session_token_from_request,
)
from votecast.core.config import Settings, get_settings
from votecast.services.identity import GoogleIdentityProvider, IdentityProviderError
from votecast.services.sessions import SessionCookieCodec

logger = logging.getLogger(__name__)

STATE_COOKIE_NAME = "votecast_oauth_state"
STATE_COOKIE_MAX_AGE = 600

router = APIRouter()


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


def _callback_url(request: Request, settings: Settings) -> str:
    if settings.callback_url.startswith(("http://", "https://")):
        return settings.callback_url
    return str(request.base_url).rstrip("/") + "/" + settings.callback_url.lstrip("/")


def _set_cookie(response: Response, *, name: str, value: str, max_age: int, settings: Settings) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.get("/google", summary="Start the Google sign-in flow")
def google_login(
    request: Request,
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
    codec: SessionCookieCodec = Depends(get_cookie_codec),
) -> RedirectResponse:
    settings = get_settings()
    if not provider.configured:
        logger.warning("google sign-in requested but the OAuth client is not configured")
        return _redirect("/")
    state = provider.new_state()
    response = _redirect(
        provider.authorization_url(redirect_uri=_callback_url(request, settings), state=state)
    )
    _set_cookie(
        response,
        name=STATE_COOKIE_NAME,
        value=codec.encode(state),
        max_age=STATE_COOKIE_MAX_AGE,
        settings=settings,
    )
    return response


@router.get("/google/callback", summary="Complete the Google sign-in flow")
def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
    codec: SessionCookieCodec = Depends(get_cookie_codec),
) -> RedirectResponse:
    settings = get_settings()
    failure = _redirect("/")
    failure.delete_cookie(STATE_COOKIE_NAME)

    if error:
        logger.info("sign-in declined by provider", extra={"error": error})
        return failure
    expected_state = codec.decode(request.cookies.get(STATE_COOKIE_NAME))
    if not code or not state or expected_state != state:
        logger.warning("sign-in callback rejected: missing code or state mismatch")
        return failure

    try:
        identity = provider.exchange_code(code=code, redirect_uri=_callback_url(request, settings))
    except IdentityProviderError as exc:
        logger.warning("sign-in failed: %s", exc)
        return failure

    session_store.destroy(session_token_from_request(request, codec))
    token = session_store.establish(identity)
    response = _redirect("/vote")
    response.delete_cookie(STATE_COOKIE_NAME)
    _set_cookie(
        response,
        name=settings.session_cookie_name,
        value=codec.encode(token),
        max_age=settings.session_ttl_seconds,
        settings=settings,
    )
    return response


@router.get("/logout", summary="End the current session")
def logout(
    request: Request,
    codec: SessionCookieCodec = Depends(get_cookie_codec),
) -> RedirectResponse:
    settings = get_settings()
    session_store.destroy(session_token_from_request(request, codec))
    response = _redirect("/")
    response.delete_cookie(settings.session_cookie_name)
    return response


__all__ = ["STATE_COOKIE_NAME", "google_callback", "google_login", "logout", "router"]
