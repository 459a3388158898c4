from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

from hackathon.errors import InvalidVoterClass
from hackathon.models.vote import VOTER_CLASSES
from hackathon.schemas.event import PrizeConfig


class VoteCreate(BaseModel):
    event_id: int
    submission_id: int
    voter_address: str = Field(min_length=1, max_length=100)
    voter_type: str
    weight: Decimal | None = Field(default=None, ge=0)  # judge/sponsor weight comes from the event roster
    reason: str = ""
    signature: str = ""
    offchain_proof: str = ""

    @field_validator("voter_type")
    @classmethod
    def known_class(cls, v: str):
        if v not in VOTER_CLASSES:
            raise InvalidVoterClass(f"unsupported voter type: {v!r}")
        return v


class VotePublic(BaseModel):
    id: int
    event_id: int
    submission_id: int
    voter_address: str
    voter_type: str
    weight: Decimal
    reason: str
    created_at: datetime


class VoteSummaryPublic(BaseModel):
    submission_id: int
    submission_title: str = ""
    total_weight: Decimal
    judge_weight: Decimal
    sponsor_weight: Decimal
    public_weight: Decimal
    vote_count: int


class RankedEntryPublic(VoteSummaryPublic):
    rank: int
    prize: PrizeConfig | None = None
