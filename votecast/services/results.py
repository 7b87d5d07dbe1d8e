"""Read-only aggregation of recorded votes."""
from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from votecast.models import Party, Vote

RECENT_ACTIVITY_LIMIT = 20


@dataclass(slots=True, frozen=True)
class PartyTally:
    party: Party
    count: int


@dataclass(slots=True, frozen=True)
class ResultsSummary:
    totals: list[PartyTally] = field(default_factory=list)
    total: int = 0
    recent: list[Vote] = field(default_factory=list)


def compute_results(session: Session, *, recent_limit: int = RECENT_ACTIVITY_LIMIT) -> ResultsSummary:
    """Count votes per party and collect the most recent ballots."""

    vote_count = func.count(Vote.id).label("count")
    tally_rows = session.execute(
        select(Vote.party, vote_count).group_by(Vote.party).order_by(vote_count.desc(), Vote.party)
    ).all()
    totals = [PartyTally(party=party, count=int(count)) for party, count in tally_rows]

    total = session.scalar(select(func.count(Vote.id))) or 0

    recent = list(
        session.scalars(
            select(Vote).order_by(Vote.voted_at.desc(), Vote.id.desc()).limit(recent_limit)
        ).all()
    )
    return ResultsSummary(totals=totals, total=int(total), recent=recent)


__all__ = ["PartyTally", "RECENT_ACTIVITY_LIMIT", "ResultsSummary", "compute_results"]
