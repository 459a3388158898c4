"""
Domain error taxonomy.

Every rejection raised by the services is a DomainError carrying the HTTP status
the API answers with. Errors that also subclass ValueError may be raised from
inside pydantic validators, where FastAPI turns them into 422 responses.
"""
from __future__ import annotations


class DomainError(Exception):
    status_code: int = 400
    default_message = "request rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


# ---------- configuration ----------

class InvalidWindowConfig(DomainError, ValueError):
    status_code = 422
    default_message = "invalid time window configuration"


class InvalidPrizeTable(DomainError, ValueError):
    status_code = 422
    default_message = "prize ranks must be unique positive integers"


class InvalidVoterClass(DomainError, ValueError):
    status_code = 422
    default_message = "voter_type must be one of judge, sponsor, public"


# ---------- lookups ----------

class UnknownEvent(DomainError):
    status_code = 404
    default_message = "event not found"


class UnknownSubmission(DomainError):
    status_code = 404
    default_message = "submission not found"


class UnknownVote(DomainError):
    status_code = 404
    default_message = "vote not found"


class UnknownJudge(DomainError):
    status_code = 404
    default_message = "judge not found"


class UnknownTeam(DomainError):
    status_code = 404
    default_message = "team not found"


class UnknownMember(DomainError):
    status_code = 404
    default_message = "member not found"


class UnknownRegistration(DomainError):
    status_code = 404
    default_message = "registration not found"


# ---------- conflicts ----------

class DuplicateVote(DomainError):
    status_code = 409
    default_message = "you already voted for this submission"


class AlreadyExists(DomainError):
    status_code = 409
    default_message = "already exists"


# ---------- admission policy ----------

class PhaseClosed(DomainError):
    status_code = 400
    default_message = "operation is not open at this time"


class VoteCapExceeded(DomainError):
    status_code = 400
    default_message = "vote limit reached"


class CapacityReached(DomainError):
    status_code = 400
    default_message = "event is full"


class NotRegistered(DomainError):
    status_code = 400
    default_message = "address is not registered for this event"


class TeamNotApproved(DomainError):
    status_code = 400
    default_message = "team must be approved by the organizer first"


class VoterNotEligible(DomainError):
    status_code = 403
    default_message = "voter is not eligible"


class NotOrganizer(DomainError):
    status_code = 403
    default_message = "only the organizer can do this"
