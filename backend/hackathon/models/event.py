from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Window:
    start: datetime | None = None
    end: datetime | None = None

    @property
    def configured(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, now: datetime) -> bool:
        # inclusive on both ends; unconfigured windows contain nothing
        return self.configured and self.start <= now <= self.end


@dataclass(frozen=True)
class EventWindows:
    overall: Window
    registration: Window = field(default_factory=Window)
    checkin: Window = field(default_factory=Window)
    submission: Window = field(default_factory=Window)
    voting: Window = field(default_factory=Window)


@dataclass(frozen=True)
class Prize:
    rank: int  # 1 = first place
    name: str
    amount: str  # tokens, ETH, ... kept verbatim
    description: str = ""
    count: int = 1  # how many prizes of this rank


@dataclass
class Event:
    id: int
    name: str
    organizer_address: str
    windows: EventWindows
    prizes: tuple[Prize, ...] = ()
    description: str = ""
    location: str = ""
    max_participants: int = 0  # 0 = unlimited
    allow_sponsor_voting: bool = False
    allow_public_voting: bool = False
    created_at: datetime | None = None


@dataclass
class EventJudge:
    """Judge whitelist entry. Weight is carried on every vote the judge casts."""
    id: int
    event_id: int
    address: str
    weight: Decimal
    max_votes: int
    created_at: datetime | None = None


@dataclass
class EventSponsor:
    id: int
    event_id: int
    address: str
    voting_power: Decimal
    created_at: datetime | None = None
