"""SQLAlchemy engine and session management."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from votecast.core.config import Settings, get_settings
from votecast.models import Base
from votecast.obs import instrument_sqlalchemy_engine

logger = logging.getLogger(__name__)


def _connect_args(settings: Settings) -> dict[str, Any]:
    backend = make_url(settings.database_url).get_backend_name()
    if backend == "sqlite":
        return {"check_same_thread": False}
    if backend == "postgresql" and settings.database_require_ssl:
        return {"sslmode": "require"}
    return {}


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine shared by every request in this process."""
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        connect_args=_connect_args(settings),
    )
    if settings.enable_tracing:
        instrument_sqlalchemy_engine(engine)
    return engine


settings = get_settings()
engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_schema(bind: Engine | None = None) -> None:
    """Create the votes table if it does not exist yet."""
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("database schema ready", extra={"dialect": target.dialect.name})


@contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session: Session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["SessionLocal", "build_engine", "create_schema", "engine", "get_session"]
