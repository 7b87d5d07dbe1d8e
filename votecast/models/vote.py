"""Vote ORM model."""
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from votecast.models.base import Base


class Party(str, enum.Enum):
    DMK = "DMK"
    ADMK = "ADMK"
    TVK = "TVK"
    NTK = "NTK"


class Vote(Base):
    """A single ballot cast by an authenticated voter.

    Rows are written once by the vote service and never updated. Uniqueness of
    the voter is enforced by the table constraints, not by the application.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("google_id", name="uq_votes_google_id"),
        UniqueConstraint("email", name="uq_votes_email"),
        Index("ix_votes_voted_at", "voted_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    google_id: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    party: Mapped[Party] = mapped_column(
        Enum(Party, name="party", create_constraint=True, validate_strings=True), nullable=False
    )
    voted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


__all__ = ["Party", "Vote"]
