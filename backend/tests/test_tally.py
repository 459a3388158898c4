from __future__ import annotations
from decimal import Decimal
from itertools import permutations
import pytest

from hackathon.errors import DuplicateVote, InvalidVoterClass
from hackathon.models.vote import Vote
from hackathon.services.tally import check_voter_class, tally


def _v(sub, addr, kind="judge", weight="1", event=1):
    return Vote(event_id=event, submission_id=sub, voter_address=addr, voter_type=kind, weight=Decimal(weight))


def test_buckets_by_voter_class():
    res = tally([
        _v(1, "0xj1", "judge", "5"),
        _v(1, "0xs1", "sponsor", "2.5"),
        _v(1, "0xp1", "public"),
        _v(2, "0xj1", "judge", "5"),
    ])
    s1 = res[1]
    assert s1.total_weight == Decimal("8.5")
    assert (s1.judge_weight, s1.sponsor_weight, s1.public_weight) == (Decimal(5), Decimal("2.5"), Decimal(1))
    assert s1.vote_count == 3
    assert res[2].total_weight == Decimal(5) and res[2].vote_count == 1


def test_order_does_not_matter():
    votes = [_v(1, "0xa", "judge", "0.1"), _v(1, "0xb", "sponsor", "0.2"), _v(1, "0xc", "public")]
    results = [tally(list(p))[1] for p in permutations(votes)]
    assert all(r == results[0] for r in results)
    assert results[0].total_weight == Decimal("1.3")


def test_public_weight_is_always_one():
    res = tally([_v(1, "0xp", "public", "9")])
    assert res[1].public_weight == Decimal(1)
    assert res[1].total_weight == Decimal(1)


def test_duplicate_vote_is_rejected():
    with pytest.raises(DuplicateVote):
        tally([_v(1, "0xA", "judge", "5"), _v(1, " 0xa ", "judge", "5")])


def test_same_voter_different_submissions_is_fine():
    res = tally([_v(1, "0xa", "public"), _v(2, "0xa", "public")])
    assert res[1].vote_count == res[2].vote_count == 1


def test_same_voter_same_submission_other_event_is_fine():
    res = tally([_v(1, "0xa", event=1), _v(1, "0xa", event=2)])
    assert res[1].vote_count == 2


def test_unknown_voter_class_is_rejected():
    with pytest.raises(InvalidVoterClass):
        check_voter_class(_v(1, "0xa", "organizer"))


def test_unknown_voter_class_drops_only_that_vote():
    res = tally([_v(1, "0xa", "organizer", "50"), _v(1, "0xb", "judge", "2"), _v(2, "0xa", "public")])
    assert res[1].total_weight == Decimal(2) and res[1].vote_count == 1
    assert res[2].vote_count == 1


def test_seeded_submissions_get_empty_summaries():
    res = tally([_v(2, "0xa")], submission_ids=[1, 2, 3])
    assert set(res) == {1, 2, 3}
    assert res[1].total_weight == 0 and res[1].vote_count == 0
    assert res[2].vote_count == 1


def test_no_lossy_accumulation():
    votes = [_v(1, f"0x{i}", "sponsor", "0.1") for i in range(1000)]
    assert tally(votes)[1].total_weight == Decimal("100.0")
