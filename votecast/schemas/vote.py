"""Schemas for the vote and results endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from votecast.models import Party


class VoteRequest(BaseModel):
    # Untyped so every unknown selection, including non-strings, reaches the service and gets a 400.
    party: Any = None


class VoteResponse(BaseModel):
    success: bool
    message: str


class VoteRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    party: Party
    voted_at: datetime


class MeResponse(BaseModel):
    name: str
    email: str
    voted: bool
    vote: VoteRecord | None = None


class PartyCount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    party: Party
    count: int


class RecentVote(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    party: Party
    voted_at: datetime


class ResultsResponse(BaseModel):
    totals: list[PartyCount]
    total: int
    recent: list[RecentVote]


__all__ = [
    "MeResponse",
    "PartyCount",
    "RecentVote",
    "ResultsResponse",
    "VoteRecord",
    "VoteRequest",
    "VoteResponse",
]
