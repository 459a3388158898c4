from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Registration:
    id: int
    event_id: int
    address: str
    created_at: datetime
    team_id: int | None = None
    status: str = "pending"  # pending | approved | rejected


@dataclass(frozen=True)
class CheckIn:
    id: int
    event_id: int
    address: str
    checked_in_at: datetime
    team_id: int | None = None
    signature: str = ""
    message: str = ""
