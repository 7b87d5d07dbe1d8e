"""Pydantic schemas package."""

from .vote import (
    MeResponse,
    PartyCount,
    RecentVote,
    ResultsResponse,
    VoteRecord,
    VoteRequest,
    VoteResponse,
)

__all__ = [
    "MeResponse",
    "PartyCount",
    "RecentVote",
    "ResultsResponse",
    "VoteRecord",
    "VoteRequest",
    "VoteResponse",
]
