from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from fastapi import APIRouter, Depends, Query

from hackathon.models.submission import Submission
from hackathon.schemas.submission import SubmissionCreate, SubmissionPublic
from hackathon.services.participation import create_submission
from hackathon.store import EventStore, get_store

router = APIRouter(prefix="/submissions", tags=["submissions"])


def _pub(s: Submission) -> SubmissionPublic:
    return SubmissionPublic(
        id=s.id,
        event_id=s.event_id,
        team_id=s.team_id,
        title=s.title,
        description=s.description,
        github_repo=s.github_repo,
        demo_url=s.demo_url,
        submitted_by=s.submitted_by,
        submitted_at=s.submitted_at,
    )


@router.post("", response_model=SubmissionPublic, status_code=201)
async def submit(payload: SubmissionCreate, store: EventStore = Depends(get_store)):
    return _pub(create_submission(store, payload, datetime.now(dt_tz.utc)))


@router.get("", response_model=list[SubmissionPublic])
async def list_submissions(event_id: int | None = Query(default=None), store: EventStore = Depends(get_store)):
    if event_id is not None:
        store.get_event(event_id)
    return [_pub(s) for s in store.list_submissions(event_id)]


@router.get("/{submission_id}", response_model=SubmissionPublic)
async def get_submission(submission_id: int, store: EventStore = Depends(get_store)):
    return _pub(store.get_submission(submission_id))
