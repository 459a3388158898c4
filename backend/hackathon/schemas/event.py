from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field, field_validator, model_validator

from hackathon.models.event import Event, EventWindows, Prize, Window
from hackathon.services.ranking import prize_table
from hackathon.services.stages import Stage, as_utc, validate_windows


class PrizeConfig(BaseModel):
    rank: int = Field(gt=0, description="1 = first place")
    name: str = Field(min_length=1, max_length=120)
    description: str = ""
    amount: str = ""
    count: int = Field(gt=0, default=1, description="Number of prizes for this rank")

    def to_model(self) -> Prize:
        return Prize(rank=self.rank, name=self.name, description=self.description, amount=self.amount, count=self.count)

    @classmethod
    def from_model(cls, p: Prize) -> "PrizeConfig":
        return cls(rank=p.rank, name=p.name, description=p.description, amount=p.amount, count=p.count)


class EventTimes(BaseModel):
    start_time: datetime
    end_time: datetime
    registration_start_time: datetime | None = None
    registration_end_time: datetime | None = None
    checkin_start_time: datetime | None = None
    checkin_end_time: datetime | None = None
    submission_start_time: datetime | None = None
    submission_end_time: datetime | None = None
    voting_start_time: datetime | None = None
    voting_end_time: datetime | None = None

    @field_validator("*")
    @classmethod
    def to_utc(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    def windows(self) -> EventWindows:
        return EventWindows(
            overall=Window(self.start_time, self.end_time),
            registration=Window(self.registration_start_time, self.registration_end_time),
            checkin=Window(self.checkin_start_time, self.checkin_end_time),
            submission=Window(self.submission_start_time, self.submission_end_time),
            voting=Window(self.voting_start_time, self.voting_end_time),
        )

    @classmethod
    def from_windows(cls, w: EventWindows) -> dict:
        return dict(
            start_time=w.overall.start, end_time=w.overall.end,
            registration_start_time=w.registration.start, registration_end_time=w.registration.end,
            checkin_start_time=w.checkin.start, checkin_end_time=w.checkin.end,
            submission_start_time=w.submission.start, submission_end_time=w.submission.end,
            voting_start_time=w.voting.start, voting_end_time=w.voting.end,
        )


class EventCreate(EventTimes):
    name: str = Field(min_length=1, max_length=120)
    description: str = ""
    location: str = ""
    organizer_address: str = Field(min_length=1, max_length=255)
    max_participants: int = Field(ge=0, default=0, description="0 = unlimited")
    allow_sponsor_voting: bool = False
    allow_public_voting: bool = False
    prizes: List[PrizeConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_config(self):
        # InvalidWindowConfig / InvalidPrizeTable are ValueErrors -> 422
        validate_windows(self.windows())
        prize_table(p.to_model() for p in self.prizes)
        return self


class EventPublic(EventTimes):
    id: int
    name: str
    description: str
    location: str
    organizer_address: str
    max_participants: int
    allow_sponsor_voting: bool
    allow_public_voting: bool
    prizes: List[PrizeConfig]
    created_at: datetime
    current_stage: Stage
    open_operations: List[str]

    @classmethod
    def build(cls, ev: Event, stage: Stage, open_ops: list[str]) -> "EventPublic":
        return cls(
            id=ev.id, name=ev.name, description=ev.description, location=ev.location,
            organizer_address=ev.organizer_address, max_participants=ev.max_participants,
            allow_sponsor_voting=ev.allow_sponsor_voting, allow_public_voting=ev.allow_public_voting,
            prizes=[PrizeConfig.from_model(p) for p in sorted(ev.prizes, key=lambda p: p.rank)],
            created_at=ev.created_at,
            current_stage=stage, open_operations=open_ops,
            **EventTimes.from_windows(ev.windows),
        )


class StagePublic(BaseModel):
    event_id: int
    stage: Stage
    now: datetime
    open_operations: List[str]


class OrganizerAction(BaseModel):
    organizer_address: str = Field(min_length=1)


class JudgeCreate(OrganizerAction):
    address: str = Field(min_length=1, max_length=100)
    weight: Decimal | None = Field(default=None, gt=0)
    max_votes: int | None = Field(default=None, gt=0)


class JudgePublic(BaseModel):
    id: int
    event_id: int
    address: str
    weight: Decimal
    max_votes: int
    created_at: datetime


class SponsorCreate(OrganizerAction):
    address: str = Field(min_length=1, max_length=100)
    voting_power: Decimal = Field(default=Decimal(1), gt=0)


class SponsorPublic(BaseModel):
    id: int
    event_id: int
    address: str
    voting_power: Decimal
    created_at: datetime
