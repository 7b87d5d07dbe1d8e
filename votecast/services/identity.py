"""Google OAuth2 authorization-code adapter."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from votecast.core.config import Settings

logger = logging.getLogger(__name__)

SCOPES = ("profile", "email")


class IdentityProviderError(RuntimeError):
    """Raised when the provider refuses or fails to identify the user."""


@dataclass(slots=True, frozen=True)
class Identity:
    """Minimal verified identity handed to the session layer."""

    subject_id: str
    email: str
    display_name: str


class GoogleIdentityProvider:
    """Synchronous wrapper around Google's OAuth2 endpoints."""

    def __init__(self, settings: Settings, *, client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._client = client or httpx.Client(timeout=settings.oauth_timeout_seconds)
        self._owns_client = client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def configured(self) -> bool:
        """True when both halves of the OAuth client credential are set."""
        return bool(self._settings.google_client_id and self._settings.google_client_secret)

    @staticmethod
    def new_state() -> str:
        return secrets.token_urlsafe(24)

    def authorization_url(self, *, redirect_uri: str, state: str) -> str:
        params = {
            "client_id": self._settings.google_client_id or "",
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
        }
        return f"{self._settings.google_authorize_url}?{urlencode(params)}"

    def exchange_code(self, *, code: str, redirect_uri: str) -> Identity:
        """Trade an authorization code for the caller's identity."""

        token = self._request(
            "POST",
            self._settings.google_token_url,
            data={
                "code": code,
                "client_id": self._settings.google_client_id or "",
                "client_secret": self._settings.google_client_secret or "",
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        access_token = token.get("access_token")
        if not access_token:
            raise IdentityProviderError("Token response did not include an access token")

        profile = self._request(
            "GET",
            self._settings.google_userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return _identity_from_profile(profile)

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise IdentityProviderError(
                f"Identity provider returned {exc.response.status_code} for {url}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise IdentityProviderError(f"Identity provider request to {url} failed") from exc
        if not isinstance(payload, dict):
            raise IdentityProviderError(f"Unexpected payload from {url}")
        return payload


def _identity_from_profile(profile: dict[str, Any]) -> Identity:
    subject_id = profile.get("sub") or profile.get("id")
    email = profile.get("email")
    if not subject_id or not email:
        raise IdentityProviderError("Profile is missing subject or email")
    display_name = profile.get("name") or email
    return Identity(subject_id=str(subject_id), email=str(email), display_name=str(display_name))


__all__ = ["GoogleIdentityProvider", "Identity", "IdentityProviderError", "SCOPES"]
