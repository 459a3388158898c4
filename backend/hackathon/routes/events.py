from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from fastapi import APIRouter, Depends, Query

from hackathon.models.event import Event
from hackathon.models.participation import Registration
from hackathon.schemas.event import (
    EventCreate, EventPublic, StagePublic, PrizeConfig,
    JudgeCreate, JudgePublic, SponsorCreate, SponsorPublic,
)
from hackathon.schemas.participation import CheckInCreate, CheckInPublic, RegistrationCreate, RegistrationPublic
from hackathon.services import events as event_svc
from hackathon.services import participation
from hackathon.store import EventStore, get_store

router = APIRouter(prefix="/events", tags=["events"])


def _pub(ev: Event, now: datetime) -> EventPublic:
    stage, open_ops = event_svc.event_stage(ev, now)
    return EventPublic.build(ev, stage, open_ops)


def _registration(r: Registration) -> RegistrationPublic:
    return RegistrationPublic(
        id=r.id, event_id=r.event_id, address=r.address, team_id=r.team_id, status=r.status, created_at=r.created_at,
    )


@router.post("", response_model=EventPublic, status_code=201)
async def create_event(payload: EventCreate, store: EventStore = Depends(get_store)):
    ev = event_svc.create_event(store, payload)
    return _pub(ev, datetime.now(dt_tz.utc))


@router.get("", response_model=list[EventPublic])
async def list_events(store: EventStore = Depends(get_store)):
    now = datetime.now(dt_tz.utc)
    return [_pub(ev, now) for ev in store.list_events()]


@router.get("/{event_id}", response_model=EventPublic)
async def get_event(event_id: int, store: EventStore = Depends(get_store)):
    return _pub(store.get_event(event_id), datetime.now(dt_tz.utc))


@router.get("/{event_id}/stage", response_model=StagePublic)
async def get_stage(event_id: int, store: EventStore = Depends(get_store)):
    # recomputed per request; the stage is never cached
    ev = store.get_event(event_id)
    now = datetime.now(dt_tz.utc)
    stage, open_ops = event_svc.event_stage(ev, now)
    return StagePublic(event_id=ev.id, stage=stage, now=now, open_operations=open_ops)


@router.get("/{event_id}/prizes", response_model=list[PrizeConfig])
async def list_prizes(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [PrizeConfig.from_model(p) for p in ev.prizes]

# ---------- registrations / check-ins ----------

@router.post("/{event_id}/registrations", response_model=RegistrationPublic, status_code=201)
async def register(event_id: int, payload: RegistrationCreate, store: EventStore = Depends(get_store)):
    reg = participation.register(store, event_id, payload, datetime.now(dt_tz.utc))
    return _registration(reg)


@router.get("/{event_id}/registrations", response_model=list[RegistrationPublic])
async def list_registrations(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [_registration(r) for r in store.list_registrations(ev.id)]


@router.post("/{event_id}/registrations/{registration_id}/approve", response_model=RegistrationPublic)
async def approve_registration(event_id: int, registration_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    return _registration(participation.review_registration(store, event_id, registration_id, organizer_address, "approved"))


@router.post("/{event_id}/registrations/{registration_id}/reject", response_model=RegistrationPublic)
async def reject_registration(event_id: int, registration_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    return _registration(participation.review_registration(store, event_id, registration_id, organizer_address, "rejected"))


@router.post("/{event_id}/checkins", response_model=CheckInPublic, status_code=201)
async def check_in(event_id: int, payload: CheckInCreate, store: EventStore = Depends(get_store)):
    c = participation.check_in(store, event_id, payload, datetime.now(dt_tz.utc))
    return CheckInPublic(id=c.id, event_id=c.event_id, address=c.address, team_id=c.team_id, checked_in_at=c.checked_in_at)


@router.get("/{event_id}/checkins", response_model=list[CheckInPublic])
async def list_checkins(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [
        CheckInPublic(id=c.id, event_id=c.event_id, address=c.address, team_id=c.team_id, checked_in_at=c.checked_in_at)
        for c in store.list_checkins(ev.id)
    ]

# ---------- judges / sponsors ----------

@router.post("/{event_id}/judges", response_model=JudgePublic, status_code=201)
async def add_judge(event_id: int, payload: JudgeCreate, store: EventStore = Depends(get_store)):
    j = event_svc.add_judge(store, event_id, payload)
    return JudgePublic(id=j.id, event_id=j.event_id, address=j.address, weight=j.weight, max_votes=j.max_votes, created_at=j.created_at)


@router.get("/{event_id}/judges", response_model=list[JudgePublic])
async def list_judges(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [
        JudgePublic(id=j.id, event_id=j.event_id, address=j.address, weight=j.weight, max_votes=j.max_votes, created_at=j.created_at)
        for j in store.list_judges(ev.id)
    ]


@router.delete("/{event_id}/judges/{judge_id}")
async def remove_judge(event_id: int, judge_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    event_svc.remove_judge(store, event_id, judge_id, organizer_address)
    return {"message": "judge removed"}


@router.post("/{event_id}/sponsors", response_model=SponsorPublic, status_code=201)
async def add_sponsor(event_id: int, payload: SponsorCreate, store: EventStore = Depends(get_store)):
    s = event_svc.add_sponsor(store, event_id, payload)
    return SponsorPublic(id=s.id, event_id=s.event_id, address=s.address, voting_power=s.voting_power, created_at=s.created_at)


@router.get("/{event_id}/sponsors", response_model=list[SponsorPublic])
async def list_sponsors(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [
        SponsorPublic(id=s.id, event_id=s.event_id, address=s.address, voting_power=s.voting_power, created_at=s.created_at)
        for s in store.list_sponsors(ev.id)
    ]
