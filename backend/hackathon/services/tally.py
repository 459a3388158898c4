from __future__ import annotations
from decimal import Decimal
from typing import Iterable
import structlog

from hackathon.errors import DuplicateVote, InvalidVoterClass
from hackathon.models.vote import VOTER_CLASSES, Vote, VoteSummary

log = structlog.get_logger()

PUBLIC_WEIGHT = Decimal(1)


def normalize_address(address: str) -> str:
    return (address or "").strip().lower()


def check_voter_class(vote: Vote) -> Vote:
    if vote.voter_type not in VOTER_CLASSES:
        raise InvalidVoterClass(f"unsupported voter type: {vote.voter_type!r}")
    return vote


def effective_weight(vote: Vote) -> Decimal:
    """Public votes always count 1; judge/sponsor votes count their carried weight."""
    if vote.voter_type == "public":
        return PUBLIC_WEIGHT
    return Decimal(vote.weight)


def tally(votes: Iterable[Vote], submission_ids: Iterable[int] = ()) -> dict[int, VoteSummary]:
    """
    Aggregate admitted votes into per-submission summaries.

    The whole vote set is checked before anything is summed:
      - a vote whose class is outside judge/sponsor/public fails check_voter_class;
        that vote is logged and left out, the rest of the run goes on
      - two votes on the same (event, submission, voter address) -> DuplicateVote,
        which aborts the run

    Sums are Decimal, so the result does not depend on vote order.
    `submission_ids` seeds empty summaries for submissions that got no votes.
    """
    accepted: list[Vote] = []
    seen: set[tuple[int, int, str]] = set()
    for v in votes:
        try:
            check_voter_class(v)
        except InvalidVoterClass as e:
            log.warning("vote_rejected", event_id=v.event_id, submission_id=v.submission_id,
                        voter=v.voter_address, reason=str(e))
            continue
        key = (v.event_id, v.submission_id, normalize_address(v.voter_address))
        if key in seen:
            raise DuplicateVote(
                f"duplicate vote by {key[2]} on submission {v.submission_id} in event {v.event_id}"
            )
        seen.add(key)
        accepted.append(v)

    summaries: dict[int, VoteSummary] = {sid: VoteSummary(submission_id=sid) for sid in submission_ids}
    for v in accepted:
        s = summaries.get(v.submission_id)
        if s is None:
            s = summaries[v.submission_id] = VoteSummary(submission_id=v.submission_id)
        w = effective_weight(v)
        s.total_weight += w
        if v.voter_type == "judge":
            s.judge_weight += w
        elif v.voter_type == "sponsor":
            s.sponsor_weight += w
        else:
            s.public_weight += w
        s.vote_count += 1
    return summaries
