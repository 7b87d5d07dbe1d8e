from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from votecast.core.config import get_settings
from votecast.models import Party, Vote


def _seed(db_session: Session, parties: list[Party]) -> None:
    start = datetime(2026, 5, 1, 8, 30)
    for index, party in enumerate(parties):
        db_session.add(
            Vote(
                google_id=f"google-{index}",
                email=f"voter{index}@example.com",
                name=f"Voter {index}",
                party=party,
                voted_at=start + timedelta(minutes=index),
            )
        )
    db_session.commit()


def test_results_require_admin_key(client) -> None:
    response = client.get("/api/results")

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


def test_results_reject_wrong_key(client) -> None:
    by_header = client.get("/api/results", headers={"x-admin-key": "guess"})
    by_query = client.get("/api/results", params={"key": "guess"})

    assert by_header.status_code == 401
    assert by_query.status_code == 401
    assert "totals" not in by_header.json()


def test_results_do_not_depend_on_login(client, login, voter) -> None:
    login(voter)

    response = client.get("/api/results")

    assert response.status_code == 401


def test_empty_results(client, admin_headers) -> None:
    response = client.get("/api/results", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"totals": [], "total": 0, "recent": []}


def test_results_tally_and_recent(client, admin_headers, db_session: Session) -> None:
    _seed(db_session, [Party.DMK, Party.DMK, Party.ADMK])

    response = client.get("/api/results", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["totals"] == [{"party": "DMK", "count": 2}, {"party": "ADMK", "count": 1}]
    assert body["total"] == 3
    assert [entry["name"] for entry in body["recent"]] == ["Voter 2", "Voter 1", "Voter 0"]
    assert set(body["recent"][0]) == {"name", "email", "party", "voted_at"}
    assert body["recent"][0]["party"] == "ADMK"
    assert body["recent"][0]["email"] == "voter2@example.com"


def test_results_accept_query_key(client, db_session: Session) -> None:
    _seed(db_session, [Party.NTK])

    response = client.get("/api/results", params={"key": "test-admin-key"})

    assert response.status_code == 200
    assert response.json()["total"] == 1


def test_results_closed_when_key_unset(client, admin_headers, monkeypatch) -> None:
    monkeypatch.setattr(get_settings(), "admin_key", None)

    response = client.get("/api/results", headers=admin_headers)

    assert response.status_code == 401
