from __future__ import annotations
import itertools
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone as dt_tz
from typing import Iterator

from hackathon.errors import (
    AlreadyExists, DuplicateVote, UnknownEvent, UnknownJudge, UnknownRegistration, UnknownSubmission, UnknownTeam,
    UnknownVote,
)
from hackathon.models.event import Event, EventJudge, EventSponsor
from hackathon.models.participation import CheckIn, Registration
from hackathon.models.submission import Submission
from hackathon.models.team import Team
from hackathon.models.vote import Vote


class EventStore:
    """
    Process-local record keeper for events, teams, submissions and votes.

    Ids are sequential integers per record kind. Every write happens under one
    re-entrant lock; admission code holds `locked()` across its checks and the
    insert so that "check cap, then insert if absent" is atomic.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids: dict[str, Iterator[int]] = {}
        self.events: dict[int, Event] = {}
        self.submissions: dict[int, Submission] = {}
        self.votes: dict[int, Vote] = {}
        self.judges: dict[int, EventJudge] = {}
        self.sponsors: dict[int, EventSponsor] = {}
        self.registrations: dict[int, Registration] = {}
        self.checkins: dict[int, CheckIn] = {}
        self.teams: dict[int, Team] = {}
        # (event_id, submission_id, voter_address) -> vote id
        self._vote_keys: dict[tuple[int, int, str], int] = {}

    def _next_id(self, kind: str) -> int:
        counter = self._ids.setdefault(kind, itertools.count(1))
        return next(counter)

    @contextmanager
    def locked(self):
        with self._lock:
            yield self

    # ---------- events ----------

    def add_event(self, event: Event) -> Event:
        with self._lock:
            ev = replace(event, id=self._next_id("event"), created_at=datetime.now(dt_tz.utc))
            self.events[ev.id] = ev
            return ev

    def get_event(self, event_id: int) -> Event:
        ev = self.events.get(event_id)
        if ev is None:
            raise UnknownEvent(f"event {event_id} not found")
        return ev

    def list_events(self) -> list[Event]:
        return sorted(self.events.values(), key=lambda e: e.id, reverse=True)

    # ---------- judges / sponsors ----------

    def add_judge(self, judge: EventJudge) -> EventJudge:
        with self._lock:
            if self.find_judge(judge.event_id, judge.address):
                raise AlreadyExists("address already exists in judge whitelist")
            j = replace(judge, id=self._next_id("judge"), created_at=datetime.now(dt_tz.utc))
            self.judges[j.id] = j
            return j

    def find_judge(self, event_id: int, address: str) -> EventJudge | None:
        for j in self.judges.values():
            if j.event_id == event_id and j.address == address:
                return j
        return None

    def list_judges(self, event_id: int) -> list[EventJudge]:
        return [j for j in self.judges.values() if j.event_id == event_id]

    def remove_judge(self, judge_id: int) -> EventJudge:
        with self._lock:
            j = self.judges.pop(judge_id, None)
            if j is None:
                raise UnknownJudge(f"judge {judge_id} not found")
            return j

    def add_sponsor(self, sponsor: EventSponsor) -> EventSponsor:
        with self._lock:
            if self.find_sponsor(sponsor.event_id, sponsor.address):
                raise AlreadyExists("sponsor already exists for this event")
            s = replace(sponsor, id=self._next_id("sponsor"), created_at=datetime.now(dt_tz.utc))
            self.sponsors[s.id] = s
            return s

    def find_sponsor(self, event_id: int, address: str) -> EventSponsor | None:
        for s in self.sponsors.values():
            if s.event_id == event_id and s.address == address:
                return s
        return None

    def list_sponsors(self, event_id: int) -> list[EventSponsor]:
        return [s for s in self.sponsors.values() if s.event_id == event_id]

    # ---------- registrations / check-ins ----------

    def add_registration(self, reg: Registration) -> Registration:
        with self._lock:
            if self.find_registration(reg.event_id, reg.address):
                raise AlreadyExists("address is already registered for this event")
            r = replace(reg, id=self._next_id("registration"))
            self.registrations[r.id] = r
            return r

    def get_registration(self, registration_id: int) -> Registration:
        r = self.registrations.get(registration_id)
        if r is None:
            raise UnknownRegistration(f"registration {registration_id} not found")
        return r

    def update_registration(self, reg: Registration) -> Registration:
        with self._lock:
            self.get_registration(reg.id)
            self.registrations[reg.id] = reg
            return reg

    def find_registration(self, event_id: int, address: str) -> Registration | None:
        for r in self.registrations.values():
            if r.event_id == event_id and r.address == address:
                return r
        return None

    def list_registrations(self, event_id: int) -> list[Registration]:
        return [r for r in self.registrations.values() if r.event_id == event_id]

    def add_checkin(self, checkin: CheckIn) -> CheckIn:
        with self._lock:
            for c in self.checkins.values():
                if c.event_id == checkin.event_id and c.address == checkin.address:
                    raise AlreadyExists("address has already checked in")
            c = replace(checkin, id=self._next_id("checkin"))
            self.checkins[c.id] = c
            return c

    def list_checkins(self, event_id: int) -> list[CheckIn]:
        return [c for c in self.checkins.values() if c.event_id == event_id]

    # ---------- teams ----------

    def add_team(self, team: Team) -> Team:
        with self._lock:
            t = replace(team, id=self._next_id("team"), created_at=datetime.now(dt_tz.utc))
            self.teams[t.id] = t
            return t

    def get_team(self, team_id: int) -> Team:
        t = self.teams.get(team_id)
        if t is None:
            raise UnknownTeam(f"team {team_id} not found")
        return t

    def update_team(self, team: Team) -> Team:
        with self._lock:
            self.get_team(team.id)
            self.teams[team.id] = team
            return team

    def list_teams(self, event_id: int | None = None) -> list[Team]:
        rows = self.teams.values()
        if event_id is not None:
            rows = [t for t in rows if t.event_id == event_id]
        return sorted(rows, key=lambda t: t.id)

    def find_team_of(self, event_id: int, address: str) -> Team | None:
        """The team in this event that `address` leads or belongs to."""
        for t in self.teams.values():
            if t.event_id == event_id and t.has(address):
                return t
        return None

    # ---------- submissions ----------

    def add_submission(self, submission: Submission) -> Submission:
        with self._lock:
            s = replace(submission, id=self._next_id("submission"))
            self.submissions[s.id] = s
            return s

    def find_submission_by_team(self, event_id: int, team_id: int) -> Submission | None:
        for s in self.submissions.values():
            if s.event_id == event_id and s.team_id == team_id:
                return s
        return None

    def get_submission(self, submission_id: int) -> Submission:
        s = self.submissions.get(submission_id)
        if s is None:
            raise UnknownSubmission(f"submission {submission_id} not found")
        return s

    def list_submissions(self, event_id: int | None = None) -> list[Submission]:
        rows = self.submissions.values()
        if event_id is not None:
            rows = [s for s in rows if s.event_id == event_id]
        return sorted(rows, key=lambda s: s.id)

    # ---------- votes ----------

    def insert_vote(self, vote: Vote) -> Vote:
        """Insert unless (event, submission, voter) already voted; raises DuplicateVote."""
        key = (vote.event_id, vote.submission_id, vote.voter_address)
        with self._lock:
            if key in self._vote_keys:
                raise DuplicateVote()
            v = replace(vote, id=self._next_id("vote"), created_at=datetime.now(dt_tz.utc))
            self.votes[v.id] = v
            self._vote_keys[key] = v.id
            return v

    def has_vote(self, event_id: int, submission_id: int, address: str) -> bool:
        return (event_id, submission_id, address) in self._vote_keys

    def get_vote(self, vote_id: int) -> Vote:
        v = self.votes.get(vote_id)
        if v is None:
            raise UnknownVote(f"vote {vote_id} not found")
        return v

    def delete_vote(self, vote_id: int) -> Vote:
        with self._lock:
            v = self.get_vote(vote_id)
            del self.votes[vote_id]
            self._vote_keys.pop((v.event_id, v.submission_id, v.voter_address), None)
            return v

    def list_votes(self, event_id: int | None = None, submission_id: int | None = None) -> list[Vote]:
        rows = list(self.votes.values())
        if event_id is not None:
            rows = [v for v in rows if v.event_id == event_id]
        if submission_id is not None:
            rows = [v for v in rows if v.submission_id == submission_id]
        # newest first
        return sorted(rows, key=lambda v: v.id, reverse=True)

    def count_votes_by_voter(self, event_id: int, address: str, voter_type: str) -> int:
        """Number of distinct submissions this voter has voted on in the event as `voter_type`."""
        return len({
            v.submission_id for v in self.votes.values()
            if v.event_id == event_id and v.voter_address == address and v.voter_type == voter_type
        })


store = EventStore()


def get_store() -> EventStore:
    return store
