"""Create the votes table."""
from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from alembic import op

revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on: Iterable[str] | None = None

PARTIES = ("DMK", "ADMK", "TVK", "NTK")


def upgrade() -> None:  # noqa: D401
    """Create the votes table with its uniqueness constraints."""

    party = sa.Enum(*PARTIES, name="party", create_constraint=True)

    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("google_id", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("party", party, nullable=False),
        sa.Column("voted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("google_id", name="uq_votes_google_id"),
        sa.UniqueConstraint("email", name="uq_votes_email"),
    )
    op.create_index("ix_votes_voted_at", "votes", ["voted_at"])


def downgrade() -> None:
    op.drop_index("ix_votes_voted_at", table_name="votes")
    op.drop_table("votes")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute(sa.text("DROP TYPE IF EXISTS party"))
