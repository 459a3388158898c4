from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Literal, List
from datetime import datetime

TeamStatus = Literal["pending", "approved", "rejected"]


class TeamCreate(BaseModel):
    event_id: int
    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    leader_address: str = Field(min_length=1, max_length=255)
    max_members: int = Field(default=4, gt=0, description="members besides the leader")
    members: List[str] = Field(default_factory=list)


class TeamMemberAdd(BaseModel):
    address: str = Field(min_length=1, max_length=255)


class TeamPublic(BaseModel):
    id: int
    event_id: int
    name: str
    description: str
    leader_address: str
    max_members: int
    members: List[str]
    status: TeamStatus
    created_at: datetime
