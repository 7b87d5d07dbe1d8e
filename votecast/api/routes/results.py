"""Administrative results endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from votecast.api.deps import get_db_session, require_admin_key
from votecast.schemas import PartyCount, RecentVote, ResultsResponse
from votecast.services.results import compute_results

router = APIRouter()


@router.get("/results", response_model=ResultsResponse, dependencies=[Depends(require_admin_key)])
def read_results(session: Session = Depends(get_db_session)) -> ResultsResponse:
    summary = compute_results(session)
    return ResultsResponse(
        totals=[PartyCount.model_validate(tally) for tally in summary.totals],
        total=summary.total,
        recent=[RecentVote.model_validate(vote) for vote in summary.recent],
    )


__all__ = ["read_results", "router"]
