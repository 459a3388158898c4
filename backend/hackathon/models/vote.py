from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from hackathon.models.event import Prize

VOTER_CLASSES = ("judge", "sponsor", "public")

ZERO = Decimal(0)


@dataclass(frozen=True)
class Vote:
    event_id: int
    submission_id: int
    voter_address: str
    voter_type: str  # judge | sponsor | public
    weight: Decimal = Decimal(1)
    reason: str = ""
    signature: str = ""  # carried verbatim, never verified here
    offchain_proof: str = ""
    id: int | None = None
    created_at: datetime | None = None


@dataclass
class VoteSummary:
    """Per-submission aggregate. Derived from the vote set, never stored."""
    submission_id: int
    total_weight: Decimal = ZERO
    judge_weight: Decimal = ZERO
    sponsor_weight: Decimal = ZERO
    public_weight: Decimal = ZERO
    vote_count: int = 0


@dataclass(frozen=True)
class RankedEntry:
    submission_id: int
    rank: int
    total_weight: Decimal
    judge_weight: Decimal
    sponsor_weight: Decimal
    public_weight: Decimal
    vote_count: int
    prize: Prize | None = None
