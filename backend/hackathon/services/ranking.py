from __future__ import annotations
from typing import Iterable, Mapping

from hackathon.errors import InvalidPrizeTable
from hackathon.models.event import Prize
from hackathon.models.vote import RankedEntry, VoteSummary


def prize_table(prizes: Iterable[Prize]) -> dict[int, Prize]:
    """rank -> prize. Ranks must be unique positive integers."""
    table: dict[int, Prize] = {}
    for p in prizes:
        if p.rank <= 0:
            raise InvalidPrizeTable(f"prize rank must be positive, got {p.rank}")
        if p.rank in table:
            raise InvalidPrizeTable(f"duplicate prize rank {p.rank}")
        table[p.rank] = p
    return table


def _sort_key(s: VoteSummary):
    # total weight desc, then vote count desc, then lowest submission id
    return (-s.total_weight, -s.vote_count, s.submission_id)


def rank(summaries: Mapping[int, VoteSummary], prizes: Mapping[int, Prize]) -> list[RankedEntry]:
    """
    Order summaries and bind prizes by rank position.

    Every submission gets a distinct 1-based rank; ties are broken by vote count
    and then by ascending submission id, so reruns on the same input always
    produce the same order. A rank without a configured prize binds None.
    """
    ordered = sorted(summaries.values(), key=_sort_key)
    return [
        RankedEntry(
            submission_id=s.submission_id,
            rank=pos,
            total_weight=s.total_weight,
            judge_weight=s.judge_weight,
            sponsor_weight=s.sponsor_weight,
            public_weight=s.public_weight,
            vote_count=s.vote_count,
            prize=prizes.get(pos),
        )
        for pos, s in enumerate(ordered, start=1)
    ]
