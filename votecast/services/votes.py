"""Business logic for casting and looking up votes."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from votecast.models import Party, Vote
from votecast.obs import record_vote_accepted, record_vote_rejected, traced
from votecast.services.identity import Identity

logger = logging.getLogger(__name__)


class VoteError(RuntimeError):
    """Base exception for vote service errors."""


class InvalidSelectionError(VoteError):
    """Raised when the submitted party is not one of the allowed options."""


class DuplicateVoteError(VoteError):
    """Raised when the voter already has a recorded vote."""


class VoteStorageError(VoteError):
    """Raised when the database fails for a reason other than a duplicate."""


@dataclass(slots=True, frozen=True)
class VoteStatus:
    has_voted: bool
    record: Vote | None = None


def parse_party(value: object) -> Party:
    """Return the matching ``Party`` or raise ``InvalidSelectionError``."""

    try:
        return Party(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSelectionError(f"{value!r} is not a valid party selection") from exc


def find_vote(session: Session, *, google_id: str) -> Vote | None:
    return session.scalars(select(Vote).where(Vote.google_id == google_id)).one_or_none()


def submit_vote(session: Session, *, identity: Identity, party: object) -> Vote:
    """Record a single vote for ``identity``.

    The lookup before the insert only short-circuits the common case. Two
    concurrent submissions can both pass it; the unique constraints on
    ``google_id`` and ``email`` then reject the second insert, which is
    reported as ``DuplicateVoteError`` like the sequential case.
    """

    try:
        selection = parse_party(party)
    except InvalidSelectionError:
        record_vote_rejected("invalid_selection")
        raise

    with traced("votes.submit", party=selection.value):
        try:
            if find_vote(session, google_id=identity.subject_id) is not None:
                record_vote_rejected("duplicate")
                raise DuplicateVoteError("Voter has already cast a vote")

            vote = Vote(
                google_id=identity.subject_id,
                email=identity.email,
                name=identity.display_name,
                party=selection,
            )
            session.add(vote)
            session.flush()
            vote_id = vote.id
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            record_vote_rejected("duplicate")
            raise DuplicateVoteError("Voter has already cast a vote") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            record_vote_rejected("storage_error")
            logger.exception("failed to record vote")
            raise VoteStorageError("Vote could not be stored") from exc

    record_vote_accepted(selection.value)
    logger.info("vote recorded", extra={"vote_id": vote_id, "party": selection.value})
    return vote


def get_vote_status(session: Session, *, identity: Identity) -> VoteStatus:
    vote = find_vote(session, google_id=identity.subject_id)
    return VoteStatus(has_voted=vote is not None, record=vote)


__all__ = [
    "DuplicateVoteError",
    "InvalidSelectionError",
    "VoteError",
    "VoteStatus",
    "VoteStorageError",
    "find_vote",
    "get_vote_status",
    "parse_party",
    "submit_vote",
]
