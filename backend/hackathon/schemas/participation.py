from __future__ import annotations
from pydantic import BaseModel, Field
from datetime import datetime


class RegistrationCreate(BaseModel):
    address: str = Field(min_length=1, max_length=255)
    team_id: int | None = None


class RegistrationPublic(BaseModel):
    id: int
    event_id: int
    address: str
    team_id: int | None
    status: str
    created_at: datetime


class CheckInCreate(BaseModel):
    address: str = Field(min_length=1, max_length=255)
    team_id: int | None = None
    signature: str = ""
    message: str = ""


class CheckInPublic(BaseModel):
    id: int
    event_id: int
    address: str
    team_id: int | None
    checked_in_at: datetime
