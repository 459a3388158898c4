from __future__ import annotations
from datetime import datetime
from decimal import Decimal
import structlog

from hackathon.config import settings
from hackathon.errors import NotOrganizer, UnknownJudge
from hackathon.models.event import Event, EventJudge, EventSponsor
from hackathon.schemas.event import EventCreate, JudgeCreate, SponsorCreate
from hackathon.services.phase_gate import open_operations
from hackathon.services.ranking import prize_table
from hackathon.services.stages import Stage, resolve, validate_windows
from hackathon.services.tally import normalize_address
from hackathon.store import EventStore

log = structlog.get_logger()


def create_event(store: EventStore, payload: EventCreate) -> Event:
    windows = validate_windows(payload.windows())
    prizes = [p.to_model() for p in payload.prizes]
    prize_table(prizes)
    ev = store.add_event(Event(
        id=0,
        name=payload.name,
        description=payload.description,
        location=payload.location,
        organizer_address=normalize_address(payload.organizer_address),
        windows=windows,
        prizes=tuple(sorted(prizes, key=lambda p: p.rank)),
        max_participants=payload.max_participants,
        allow_sponsor_voting=payload.allow_sponsor_voting,
        allow_public_voting=payload.allow_public_voting,
    ))
    log.info("event_created", event_id=ev.id, organizer=ev.organizer_address, prizes=len(ev.prizes))
    return ev


def event_stage(ev: Event, now: datetime) -> tuple[Stage, list[str]]:
    """Current stage label plus the operations open right now."""
    return resolve(now, ev.windows), open_operations(now, ev.windows)


def ensure_organizer(ev: Event, organizer_address: str) -> None:
    if normalize_address(organizer_address) != ev.organizer_address:
        raise NotOrganizer("only the organizer can manage this event")


# ---------- judges ----------

def add_judge(store: EventStore, event_id: int, payload: JudgeCreate) -> EventJudge:
    ev = store.get_event(event_id)
    ensure_organizer(ev, payload.organizer_address)
    judge = store.add_judge(EventJudge(
        id=0,
        event_id=ev.id,
        address=normalize_address(payload.address),
        weight=payload.weight if payload.weight is not None else Decimal(settings.default_judge_weight),
        max_votes=payload.max_votes or settings.default_judge_max_votes,
    ))
    log.info("judge_added", event_id=ev.id, judge=judge.address, weight=str(judge.weight))
    return judge


def remove_judge(store: EventStore, event_id: int, judge_id: int, organizer_address: str) -> None:
    ev = store.get_event(event_id)
    ensure_organizer(ev, organizer_address)
    judge = store.judges.get(judge_id)
    if judge is None or judge.event_id != ev.id:
        raise UnknownJudge("judge does not belong to this event")
    store.remove_judge(judge_id)
    log.info("judge_removed", event_id=ev.id, judge=judge.address)


def add_sponsor(store: EventStore, event_id: int, payload: SponsorCreate) -> EventSponsor:
    ev = store.get_event(event_id)
    ensure_organizer(ev, payload.organizer_address)
    sponsor = store.add_sponsor(EventSponsor(
        id=0,
        event_id=ev.id,
        address=normalize_address(payload.address),
        voting_power=payload.voting_power,
    ))
    log.info("sponsor_added", event_id=ev.id, sponsor=sponsor.address, voting_power=str(sponsor.voting_power))
    return sponsor
