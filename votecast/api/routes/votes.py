"""Voter-facing endpoints: profile status and vote submission."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from votecast.api.deps import get_db_session, require_identity
from votecast.schemas import MeResponse, VoteRecord, VoteRequest, VoteResponse
from votecast.services.identity import Identity
from votecast.services.votes import (
    DuplicateVoteError,
    InvalidSelectionError,
    VoteStorageError,
    get_vote_status,
    submit_vote,
)

router = APIRouter()


@router.get("/me", response_model=MeResponse)
def read_me(
    session: Session = Depends(get_db_session),
    identity: Identity = Depends(require_identity),
) -> MeResponse:
    vote_status = get_vote_status(session, identity=identity)
    vote = VoteRecord.model_validate(vote_status.record) if vote_status.record is not None else None
    return MeResponse(
        name=identity.display_name,
        email=identity.email,
        voted=vote_status.has_voted,
        vote=vote,
    )


@router.post("/vote", response_model=VoteResponse)
def cast_vote(
    payload: VoteRequest | None = None,
    session: Session = Depends(get_db_session),
    identity: Identity = Depends(require_identity),
) -> VoteResponse:
    try:
        submit_vote(session, identity=identity, party=payload.party if payload is not None else None)
    except InvalidSelectionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid party selection.") from exc
    except DuplicateVoteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already voted.") from exc
    except VoteStorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to record vote."
        ) from exc

    return VoteResponse(success=True, message="Vote submitted successfully!")


__all__ = ["cast_vote", "read_me", "router"]
