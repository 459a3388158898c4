from __future__ import annotations
from dataclasses import replace
import structlog

from hackathon.errors import AlreadyExists, CapacityReached, UnknownMember
from hackathon.models.team import Team
from hackathon.schemas.team import TeamCreate
from hackathon.services.events import ensure_organizer
from hackathon.services.tally import normalize_address
from hackathon.store import EventStore

log = structlog.get_logger()


def create_team(store: EventStore, payload: TeamCreate) -> Team:
    """
    Form a team for an event. It starts out pending until the organizer approves it.

    An address leads or belongs to at most one team per event.
    """
    ev = store.get_event(payload.event_id)
    leader = normalize_address(payload.leader_address)
    members = tuple(dict.fromkeys(normalize_address(a) for a in payload.members if normalize_address(a)))
    if leader in members:
        raise AlreadyExists("the team leader cannot also be listed as a member")
    if len(members) > payload.max_members:
        raise CapacityReached("team size exceeds maximum allowed")
    with store.locked():
        for address in (leader, *members):
            if store.find_team_of(ev.id, address):
                raise AlreadyExists(f"{address} is already in a team for this event")
        team = store.add_team(Team(
            id=0,
            event_id=ev.id,
            name=payload.name,
            description=payload.description,
            leader_address=leader,
            max_members=payload.max_members,
            members=members,
        ))
    log.info("team_created", event_id=ev.id, team_id=team.id, leader=leader, members=len(members))
    return team


def add_member(store: EventStore, team_id: int, address: str) -> Team:
    address = normalize_address(address)
    with store.locked():
        team = store.get_team(team_id)
        if address == team.leader_address:
            raise AlreadyExists("the team leader cannot join their own team")
        if len(team.members) >= team.max_members:
            raise CapacityReached("team is full")
        if store.find_team_of(team.event_id, address):
            raise AlreadyExists(f"{address} is already in a team for this event")
        team = store.update_team(replace(team, members=team.members + (address,)))
    log.info("team_member_added", team_id=team.id, member=address)
    return team


def remove_member(store: EventStore, team_id: int, address: str) -> Team:
    address = normalize_address(address)
    with store.locked():
        team = store.get_team(team_id)
        if address not in team.members:
            raise UnknownMember(f"{address} is not a member of team {team.id}")
        team = store.update_team(replace(team, members=tuple(m for m in team.members if m != address)))
    log.info("team_member_removed", team_id=team.id, member=address)
    return team


def set_team_status(store: EventStore, team_id: int, organizer_address: str, status: str) -> Team:
    team = store.get_team(team_id)
    ensure_organizer(store.get_event(team.event_id), organizer_address)
    team = store.update_team(replace(team, status=status))
    log.info("team_reviewed", event_id=team.event_id, team_id=team.id, status=status)
    return team
