from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

TEAM_STATUSES = ("pending", "approved", "rejected")


@dataclass(frozen=True)
class Team:
    id: int
    event_id: int
    name: str
    leader_address: str
    max_members: int  # members besides the leader
    description: str = ""
    members: tuple[str, ...] = ()
    status: str = "pending"  # pending | approved | rejected, set by the organizer
    created_at: datetime | None = None

    def has(self, address: str) -> bool:
        return address == self.leader_address or address in self.members
