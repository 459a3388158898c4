from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from fastapi import APIRouter, Depends, Query

from hackathon.models.vote import Vote, VoteSummary
from hackathon.schemas.event import PrizeConfig
from hackathon.schemas.vote import RankedEntryPublic, VoteCreate, VotePublic, VoteSummaryPublic
from hackathon.services import voting
from hackathon.store import EventStore, get_store

router = APIRouter(prefix="/votes", tags=["votes"])


def _pub(v: Vote) -> VotePublic:
    return VotePublic(
        id=v.id,
        event_id=v.event_id,
        submission_id=v.submission_id,
        voter_address=v.voter_address,
        voter_type=v.voter_type,
        weight=v.weight,
        reason=v.reason,
        created_at=v.created_at,
    )


def _title(store: EventStore, submission_id: int) -> str:
    s = store.submissions.get(submission_id)
    return s.title if s else ""


def _summary(store: EventStore, s: VoteSummary) -> VoteSummaryPublic:
    return VoteSummaryPublic(
        submission_id=s.submission_id,
        submission_title=_title(store, s.submission_id),
        total_weight=s.total_weight,
        judge_weight=s.judge_weight,
        sponsor_weight=s.sponsor_weight,
        public_weight=s.public_weight,
        vote_count=s.vote_count,
    )


@router.post("", response_model=VotePublic, status_code=201)
async def cast_vote(payload: VoteCreate, store: EventStore = Depends(get_store)):
    return _pub(voting.cast_vote(store, payload, datetime.now(dt_tz.utc)))


@router.get("/event/{event_id}", response_model=list[VotePublic])
async def list_votes_by_event(event_id: int, store: EventStore = Depends(get_store)):
    ev = store.get_event(event_id)
    return [_pub(v) for v in store.list_votes(event_id=ev.id)]


@router.get("/event/{event_id}/summary", response_model=list[VoteSummaryPublic])
async def event_summary(event_id: int, store: EventStore = Depends(get_store)):
    return [_summary(store, s) for s in voting.event_summary(store, event_id)]


@router.get("/event/{event_id}/ranking", response_model=list[RankedEntryPublic])
async def event_ranking(
    event_id: int,
    include_unvoted: int = Query(default=1, ge=0, le=1, description="1=rank submissions without votes too"),
    store: EventStore = Depends(get_store),
):
    return [
        RankedEntryPublic(
            rank=e.rank,
            submission_id=e.submission_id,
            submission_title=_title(store, e.submission_id),
            total_weight=e.total_weight,
            judge_weight=e.judge_weight,
            sponsor_weight=e.sponsor_weight,
            public_weight=e.public_weight,
            vote_count=e.vote_count,
            prize=PrizeConfig.from_model(e.prize) if e.prize else None,
        )
        for e in voting.leaderboard(store, event_id, include_unvoted=bool(include_unvoted))
    ]


@router.get("/submission/{submission_id}", response_model=list[VotePublic])
async def list_votes_by_submission(submission_id: int, store: EventStore = Depends(get_store)):
    s = store.get_submission(submission_id)
    return [_pub(v) for v in store.list_votes(submission_id=s.id)]


@router.get("/{vote_id}", response_model=VotePublic)
async def get_vote(vote_id: int, store: EventStore = Depends(get_store)):
    return _pub(store.get_vote(vote_id))


@router.delete("/{vote_id}")
async def delete_vote(vote_id: int, organizer_address: str = Query(..., min_length=1), store: EventStore = Depends(get_store)):
    voting.delete_vote(store, vote_id, organizer_address)
    return {"message": "vote deleted"}
