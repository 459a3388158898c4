from __future__ import annotations
from fastapi import APIRouter, Depends, Query

from hackathon.models.team import Team
from hackathon.schemas.team import TeamCreate, TeamMemberAdd, TeamPublic
from hackathon.services import teams
from hackathon.store import EventStore, get_store

router = APIRouter(prefix="/teams", tags=["teams"])


def _pub(t: Team) -> TeamPublic:
    return TeamPublic(
        id=t.id,
        event_id=t.event_id,
        name=t.name,
        description=t.description,
        leader_address=t.leader_address,
        max_members=t.max_members,
        members=list(t.members),
        status=t.status,
        created_at=t.created_at,
    )


@router.post("", response_model=TeamPublic, status_code=201)
async def create_team(payload: TeamCreate, store: EventStore = Depends(get_store)):
    return _pub(teams.create_team(store, payload))


@router.get("", response_model=list[TeamPublic])
async def list_teams(event_id: int | None = Query(default=None), store: EventStore = Depends(get_store)):
    if event_id is not None:
        store.get_event(event_id)
    return [_pub(t) for t in store.list_teams(event_id)]


@router.get("/{team_id}", response_model=TeamPublic)
async def get_team(team_id: int, store: EventStore = Depends(get_store)):
    return _pub(store.get_team(team_id))


@router.post("/{team_id}/members", response_model=TeamPublic)
async def add_member(team_id: int, payload: TeamMemberAdd, store: EventStore = Depends(get_store)):
    return _pub(teams.add_member(store, team_id, payload.address))


@router.delete("/{team_id}/members/{address}", response_model=TeamPublic)
async def remove_member(team_id: int, address: str, store: EventStore = Depends(get_store)):
    return _pub(teams.remove_member(store, team_id, address))


@router.post("/{team_id}/approve", response_model=TeamPublic)
async def approve_team(team_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    return _pub(teams.set_team_status(store, team_id, organizer_address, "approved"))


@router.post("/{team_id}/reject", response_model=TeamPublic)
async def reject_team(team_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    return _pub(teams.set_team_status(store, team_id, organizer_address, "rejected"))
