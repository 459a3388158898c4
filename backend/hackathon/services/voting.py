from __future__ import annotations
from datetime import datetime
from decimal import Decimal
import structlog

from hackathon.config import settings
from hackathon.errors import DomainError, DuplicateVote, UnknownSubmission, VoteCapExceeded, VoterNotEligible
from hackathon.models.event import Event
from hackathon.models.vote import RankedEntry, Vote, VoteSummary
from hackathon.schemas.vote import VoteCreate
from hackathon.services.events import ensure_organizer
from hackathon.services.phase_gate import require_operation
from hackathon.services.ranking import prize_table, rank
from hackathon.services.tally import PUBLIC_WEIGHT, normalize_address, tally
from hackathon.store import EventStore

log = structlog.get_logger()


def _resolve_weight(store: EventStore, ev: Event, payload: VoteCreate, address: str) -> Decimal:
    """Weight carried on the admitted vote, per voter class."""
    if payload.voter_type == "judge":
        judge = store.find_judge(ev.id, address)
        if judge is None:
            raise VoterNotEligible("address is not on the judge whitelist")
        used = store.count_votes_by_voter(ev.id, address, "judge")
        if judge.max_votes > 0 and used >= judge.max_votes:
            raise VoteCapExceeded(f"judge vote limit ({judge.max_votes}) reached")
        weight = judge.weight
    elif payload.voter_type == "sponsor":
        if not ev.allow_sponsor_voting:
            raise VoterNotEligible("sponsor voting is disabled for this event")
        sponsor = store.find_sponsor(ev.id, address)
        if sponsor is None:
            raise VoterNotEligible("sponsor with this address not found")
        weight = sponsor.voting_power
    else:
        if not ev.allow_public_voting:
            raise VoterNotEligible("public voting is disabled for this event")
        used = store.count_votes_by_voter(ev.id, address, "public")
        if used >= settings.public_vote_cap:
            raise VoteCapExceeded(f"public voters can only vote {settings.public_vote_cap} times per event")
        return PUBLIC_WEIGHT

    if payload.weight is not None and payload.weight != weight:
        raise VoterNotEligible(f"weight {payload.weight} does not match the configured weight {weight}")
    return weight


def cast_vote(store: EventStore, payload: VoteCreate, now: datetime) -> Vote:
    """
    Admit a single vote.

    Order of checks: event exists, voting window open, submission belongs to the
    event, not already voted on, voter eligibility and caps, then insert-if-absent.
    A repeat cast is a DuplicateVote even for a voter whose cap is used up. The
    duplicate check, the caps and the insert share the store lock.
    """
    address = normalize_address(payload.voter_address)
    if not address:
        raise VoterNotEligible("invalid voter address")
    ev = store.get_event(payload.event_id)
    try:
        require_operation(now, ev.windows, "vote")
        sub = store.get_submission(payload.submission_id)
        if sub.event_id != ev.id:
            raise UnknownSubmission("submission does not belong to this event")
        with store.locked():
            if store.has_vote(ev.id, sub.id, address):
                raise DuplicateVote()
            weight = _resolve_weight(store, ev, payload, address)
            vote = store.insert_vote(Vote(
                event_id=ev.id,
                submission_id=sub.id,
                voter_address=address,
                voter_type=payload.voter_type,
                weight=weight,
                reason=payload.reason,
                signature=payload.signature,
                offchain_proof=payload.offchain_proof,
            ))
    except DomainError as e:
        log.warning("vote_rejected", event_id=ev.id, submission_id=payload.submission_id,
                    voter=address, voter_type=payload.voter_type, reason=type(e).__name__)
        raise
    log.info("vote_admitted", event_id=ev.id, submission_id=vote.submission_id, voter=address,
             voter_type=vote.voter_type, weight=str(vote.weight))
    return vote


def delete_vote(store: EventStore, vote_id: int, organizer_address: str) -> Vote:
    vote = store.get_vote(vote_id)
    ev = store.get_event(vote.event_id)
    ensure_organizer(ev, organizer_address)
    store.delete_vote(vote_id)
    log.info("vote_deleted", event_id=ev.id, vote_id=vote_id)
    return vote


def event_summaries(store: EventStore, event_id: int, include_unvoted: bool = False) -> dict[int, VoteSummary]:
    ev = store.get_event(event_id)
    seed = [s.id for s in store.list_submissions(ev.id)] if include_unvoted else ()
    return tally(store.list_votes(event_id=ev.id), submission_ids=seed)


def event_summary(store: EventStore, event_id: int) -> list[VoteSummary]:
    """Voted submissions only, in ranking order."""
    summaries = event_summaries(store, event_id)
    order = rank(summaries, {})
    return [summaries[e.submission_id] for e in order]


def leaderboard(store: EventStore, event_id: int, include_unvoted: bool = True) -> list[RankedEntry]:
    ev = store.get_event(event_id)
    entries = rank(event_summaries(store, ev.id, include_unvoted), prize_table(ev.prizes))
    log.info("leaderboard_computed", event_id=ev.id, entries=len(entries),
             winner=entries[0].submission_id if entries else None)
    return entries
