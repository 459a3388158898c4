from __future__ import annotations
from dataclasses import replace
from datetime import datetime
import structlog

from hackathon.errors import AlreadyExists, CapacityReached, NotRegistered, TeamNotApproved, UnknownRegistration, UnknownTeam
from hackathon.models.event import Event
from hackathon.models.participation import CheckIn, Registration
from hackathon.models.submission import Submission
from hackathon.models.team import Team
from hackathon.schemas.participation import CheckInCreate, RegistrationCreate
from hackathon.schemas.submission import SubmissionCreate
from hackathon.services.events import ensure_organizer
from hackathon.services.phase_gate import require_operation
from hackathon.services.tally import normalize_address
from hackathon.store import EventStore

log = structlog.get_logger()


def _event_team(store: EventStore, ev: Event, team_id: int) -> Team:
    team = store.get_team(team_id)
    if team.event_id != ev.id:
        raise UnknownTeam(f"team {team_id} is not part of this event")
    return team


def register(store: EventStore, event_id: int, payload: RegistrationCreate, now: datetime) -> Registration:
    ev = store.get_event(event_id)
    require_operation(now, ev.windows, "register")
    if payload.team_id is not None:
        team = _event_team(store, ev, payload.team_id)
        if team.status != "approved":
            raise TeamNotApproved("team must be approved before registration")
    with store.locked():
        if ev.max_participants and len(store.list_registrations(ev.id)) >= ev.max_participants:
            raise CapacityReached(f"event is full ({ev.max_participants} participants)")
        reg = store.add_registration(Registration(
            id=0, event_id=ev.id, address=normalize_address(payload.address),
            team_id=payload.team_id, created_at=now,
        ))
    log.info("registered", event_id=ev.id, address=reg.address, team_id=reg.team_id)
    return reg


def review_registration(store: EventStore, event_id: int, registration_id: int, organizer_address: str, status: str) -> Registration:
    """Organizer approves or rejects a registration."""
    ev = store.get_event(event_id)
    ensure_organizer(ev, organizer_address)
    reg = store.get_registration(registration_id)
    if reg.event_id != ev.id:
        raise UnknownRegistration("registration does not belong to this event")
    reg = store.update_registration(replace(reg, status=status))
    log.info("registration_reviewed", event_id=ev.id, registration_id=reg.id, status=status)
    return reg


def check_in(store: EventStore, event_id: int, payload: CheckInCreate, now: datetime) -> CheckIn:
    ev = store.get_event(event_id)
    require_operation(now, ev.windows, "checkin")
    address = normalize_address(payload.address)
    reg = store.find_registration(ev.id, address)
    if reg is None:
        raise NotRegistered()
    if reg.status == "rejected":
        raise NotRegistered("registration was rejected by the organizer")
    team_id = reg.team_id
    if payload.team_id is not None:
        if not _event_team(store, ev, payload.team_id).has(address):
            raise NotRegistered("address is not a member of the specified team")
        team_id = payload.team_id
    c = store.add_checkin(CheckIn(
        id=0, event_id=ev.id, address=address, team_id=team_id,
        checked_in_at=now, signature=payload.signature, message=payload.message,
    ))
    log.info("checked_in", event_id=ev.id, address=address)
    return c


def create_submission(store: EventStore, payload: SubmissionCreate, now: datetime) -> Submission:
    """
    One submission per team per event, made by an approved team.

    Without a team_id the team is the one `submitted_by` leads in the event.
    """
    ev = store.get_event(payload.event_id)
    require_operation(now, ev.windows, "submit")
    submitted_by = normalize_address(payload.submitted_by)
    if payload.team_id is not None:
        team = _event_team(store, ev, payload.team_id)
    else:
        team = store.find_team_of(ev.id, submitted_by)
        if team is None or team.leader_address != submitted_by:
            raise UnknownTeam("team not found for this leader address in this event")
    if team.status != "approved":
        raise TeamNotApproved()
    with store.locked():
        if store.find_submission_by_team(ev.id, team.id):
            raise AlreadyExists("team already submitted for this event")
        s = store.add_submission(Submission(
            id=0, event_id=ev.id, team_id=team.id, title=payload.title,
            description=payload.description, github_repo=payload.github_repo, demo_url=payload.demo_url,
            submitted_by=submitted_by, submitted_at=now,
        ))
    log.info("submission_created", event_id=ev.id, submission_id=s.id, team_id=s.team_id)
    return s
