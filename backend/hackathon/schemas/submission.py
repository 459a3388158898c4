from __future__ import annotations
from pydantic import BaseModel, Field
from datetime import datetime


class SubmissionCreate(BaseModel):
    event_id: int
    team_id: int | None = None  # defaults to the team led by submitted_by
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    github_repo: str = ""
    demo_url: str = ""
    submitted_by: str = Field(min_length=1, max_length=255)


class SubmissionPublic(BaseModel):
    id: int
    event_id: int
    team_id: int
    title: str
    description: str
    github_repo: str
    demo_url: str
    submitted_by: str
    submitted_at: datetime
