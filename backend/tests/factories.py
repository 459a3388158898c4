from __future__ import annotations
from datetime import datetime, timedelta, timezone

ORGANIZER = "0xOrganizer"


def now_plus(**delta) -> str:
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat()


def event_payload(**overrides) -> dict:
    """An event whose registration, check-in, submission and voting windows are all open now."""
    payload = {
        "name": "Open Hack",
        "description": "Build something",
        "location": "Online",
        "organizer_address": ORGANIZER,
        "start_time": now_plus(days=-2),
        "end_time": now_plus(days=10),
        "registration_start_time": now_plus(days=-2),
        "registration_end_time": now_plus(days=1),
        "checkin_start_time": now_plus(days=-1),
        "checkin_end_time": now_plus(days=1),
        "submission_start_time": now_plus(days=-1),
        "submission_end_time": now_plus(days=2),
        "voting_start_time": now_plus(hours=-1),
        "voting_end_time": now_plus(days=3),
        "allow_public_voting": True,
        "allow_sponsor_voting": True,
        "prizes": [
            {"rank": 2, "name": "Second Place", "amount": "500"},
            {"rank": 1, "name": "First Place", "amount": "1000", "description": "Grand prize"},
        ],
    }
    payload.update(overrides)
    return payload
