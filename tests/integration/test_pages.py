from __future__ import annotations

from votecast.core.config import get_settings


def test_landing_page_for_anonymous_visitor(client) -> None:
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "/auth/google" in response.text


def test_landing_page_redirects_signed_in_voter(client, login, voter) -> None:
    login(voter)

    response = client.get("/", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/vote"


def test_vote_page_requires_session(client) -> None:
    response = client.get("/vote", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/"


def test_vote_page_for_signed_in_voter(client, login, voter) -> None:
    login(voter)

    response = client.get("/vote", follow_redirects=False)

    assert response.status_code == 200
    assert "/api/vote" in response.text


def test_admin_page_is_public(client) -> None:
    response = client.get("/admin")

    assert response.status_code == 200
    assert "x-admin-key" in response.text


def test_static_mount_serves_pages(client) -> None:
    assert client.get("/static/index.html").status_code == 200


def test_pages_served_with_audit_logging_enabled(client, login, voter) -> None:
    assert get_settings().audit_log_enabled

    assert client.get("/admin").status_code == 200
    assert client.get("/", follow_redirects=False).status_code == 200
    login(voter)
    assert client.get("/vote", follow_redirects=False).status_code == 200
