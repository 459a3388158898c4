from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Submission:
    id: int
    event_id: int
    team_id: int
    title: str
    submitted_by: str  # wallet address
    submitted_at: datetime
    description: str = ""
    github_repo: str = ""
    demo_url: str = ""
