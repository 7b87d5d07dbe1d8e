from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Settings are cached on first import, so the test environment must be in place before it.
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["ENABLE_TRACING"] = "false"
os.environ["ADMIN_KEY"] = "test-admin-key"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from votecast.api.deps import get_cookie_codec, get_db_session, session_store
from votecast.core.config import get_settings
from votecast.main import app
from votecast.models import Base
from votecast.services.identity import Identity

DATABASE_URL = "sqlite+pysqlite://"

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def reset_sessions() -> Iterator[None]:
    session_store.reset()
    yield
    session_store.reset()


@pytest.fixture()
def db_session() -> Iterator[Session]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db_session: Session) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        try:
            yield db_session
        finally:
            db_session.rollback()

    app.dependency_overrides[get_db_session] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture()
def voter() -> Identity:
    return Identity(subject_id="google-1001", email="kavya@example.com", display_name="Kavya R")


@pytest.fixture()
def login(client: TestClient) -> Callable[[Identity], None]:
    """Attach a server-side session for ``identity`` to the test client."""

    def _login(identity: Identity) -> None:
        token = session_store.establish(identity)
        client.cookies.set(get_settings().session_cookie_name, get_cookie_codec().encode(token))

    return _login


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"x-admin-key": "test-admin-key"}
