from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from votecast.api.deps import get_identity_provider, session_store
from votecast.api.routes.auth import STATE_COOKIE_NAME
from votecast.core.config import get_settings
from votecast.main import app
from votecast.services.identity import GoogleIdentityProvider

PROFILE = {"sub": "110248", "email": "selvi@example.com", "name": "Selvi M"}


@pytest.fixture()
def provider_calls() -> list[str]:
    return []


@pytest.fixture(autouse=True)
def mock_provider(provider_calls: list[str]) -> Iterator[None]:
    def handler(request: httpx.Request) -> httpx.Response:
        provider_calls.append(request.url.path)
        if request.url.path == "/token":
            form = parse_qs(request.content.decode())
            if form["code"] == ["bad-code"]:
                return httpx.Response(400, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "access-xyz"})
        return httpx.Response(200, json=PROFILE)

    def override() -> Iterator[GoogleIdentityProvider]:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        yield GoogleIdentityProvider(get_settings(), client=client)
        client.close()

    app.dependency_overrides[get_identity_provider] = override
    yield
    app.dependency_overrides.pop(get_identity_provider, None)


def _start_login(client) -> str:  # type: ignore[no-untyped-def]
    response = client.get("/auth/google", follow_redirects=False)
    assert response.status_code == 302
    location = urlparse(response.headers["location"])
    assert location.netloc == "accounts.google.com"
    params = parse_qs(location.query)
    assert params["scope"] == ["profile email"]
    assert params["redirect_uri"] == ["http://testserver/auth/google/callback"]
    assert STATE_COOKIE_NAME in response.cookies
    return params["state"][0]


def test_login_establishes_session(client) -> None:
    state = _start_login(client)

    response = client.get(
        "/auth/google/callback",
        params={"code": "good-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/vote"
    assert get_settings().session_cookie_name in response.cookies
    assert len(session_store) == 1

    me = client.get("/api/me")
    assert me.status_code == 200
    assert me.json()["name"] == "Selvi M"
    assert me.json()["email"] == "selvi@example.com"


def test_denied_consent_redirects_home(client, provider_calls: list[str]) -> None:
    state = _start_login(client)

    response = client.get(
        "/auth/google/callback",
        params={"error": "access_denied", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert provider_calls == []
    assert len(session_store) == 0


def test_state_mismatch_redirects_home(client, provider_calls: list[str]) -> None:
    _start_login(client)

    response = client.get(
        "/auth/google/callback",
        params={"code": "good-code", "state": "forged-state"},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert provider_calls == []
    assert client.get("/api/me").status_code == 401


def test_provider_failure_redirects_home(client) -> None:
    state = _start_login(client)

    response = client.get(
        "/auth/google/callback",
        params={"code": "bad-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert len(session_store) == 0


def test_logout_destroys_session(client, login, voter) -> None:
    login(voter)
    assert client.get("/api/me").status_code == 200

    response = client.get("/auth/logout", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert len(session_store) == 0
    client.cookies.clear()
    assert client.get("/api/me").status_code == 401


def test_forged_session_cookie_is_ignored(client, voter) -> None:
    token = session_store.establish(voter)
    client.cookies.set(get_settings().session_cookie_name, token)

    assert client.get("/api/me").status_code == 401


def test_login_without_client_credentials_redirects_home(client, provider_calls: list[str]) -> None:
    settings = get_settings().model_copy(update={"google_client_id": None})

    def unconfigured() -> Iterator[GoogleIdentityProvider]:
        yield GoogleIdentityProvider(settings, client=httpx.Client())

    app.dependency_overrides[get_identity_provider] = unconfigured

    response = client.get("/auth/google", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert STATE_COOKIE_NAME not in response.cookies
    assert provider_calls == []
