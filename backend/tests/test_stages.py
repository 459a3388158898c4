from __future__ import annotations
from datetime import datetime, timedelta, timezone
import pytest

from hackathon.errors import InvalidWindowConfig
from hackathon.models.event import EventWindows, Window
from hackathon.services.stages import STAGES, resolve, validate_windows

T0 = datetime(2025, 3, 1, tzinfo=timezone.utc)


def D(days: float) -> datetime:
    return T0 + timedelta(days=days)


def _full_windows() -> EventWindows:
    """overall [D0,D10] with sequential sub-windows and a gap before voting."""
    return EventWindows(
        overall=Window(D(0), D(10)),
        registration=Window(D(0), D(2)),
        checkin=Window(D(2), D(3)),
        submission=Window(D(3), D(6)),
        voting=Window(D(7), D(9)),
    )


def test_voting_beats_submission_when_overlapping():
    w = EventWindows(overall=Window(D(0), D(10)), voting=Window(D(1), D(3)), submission=Window(D(1), D(9)))
    assert resolve(D(2), w) == "voting"
    # after voting closes the submission window still claims the instant
    assert resolve(D(5), w) == "submission"


def test_before_overall_start_is_registration():
    assert resolve(D(-1), _full_windows()) == "registration"


def test_overall_start_is_inclusive():
    w = EventWindows(overall=Window(D(0), D(10)), checkin=Window(D(0), D(1)))
    assert resolve(D(0), w) == "checkin"


def test_overall_end_is_not_ended_but_one_ms_later_is():
    w = _full_windows()
    assert resolve(D(10), w) != "ended"
    assert resolve(D(10) + timedelta(milliseconds=1), w) == "ended"


@pytest.mark.parametrize("when,expected", [
    (D(1), "registration"),
    (D(2.5), "checkin"),
    (D(4), "submission"),
    (D(6.5), "submission"),   # gap before voting: conservative default
    (D(8), "voting"),
    (D(9.5), "awards"),       # after voting end, inside overall
    (D(11), "ended"),
])
def test_sequential_pipeline(when, expected):
    assert resolve(when, _full_windows()) == expected


def test_sub_window_boundaries_are_inclusive():
    w = _full_windows()
    assert resolve(D(7), w) == "voting"
    assert resolve(D(9), w) == "voting"


def test_no_sub_windows_defaults_to_submission():
    w = EventWindows(overall=Window(D(0), D(10)))
    assert resolve(D(5), w) == "submission"


def test_half_configured_window_is_ignored():
    w = EventWindows(overall=Window(D(0), D(10)), voting=Window(D(1), None))
    assert resolve(D(2), w) == "submission"


def test_awards_requires_voting_end():
    w = EventWindows(overall=Window(D(0), D(10)), voting=Window(None, D(3)))
    # voting window is not configured, but its end alone still marks the awards period
    assert resolve(D(5), w) == "awards"


def test_naive_now_is_treated_as_utc():
    w = _full_windows()
    assert resolve(D(8).replace(tzinfo=None), w) == "voting"


def test_naive_window_bounds_are_treated_as_utc():
    naive = lambda day: D(day).replace(tzinfo=None)
    w = EventWindows(overall=Window(naive(0), naive(10)), voting=Window(naive(7), naive(9)))
    assert resolve(D(8), w) == "voting"
    assert resolve(D(9.5), w) == "awards"
    assert validate_windows(w).overall.start == D(0)


def test_resolve_is_total_over_every_hour():
    w = _full_windows()
    t = D(-2)
    while t <= D(12):
        assert resolve(t, w) in STAGES
        t += timedelta(hours=1)


def test_resolve_is_idempotent():
    w = _full_windows()
    assert resolve(D(8), w) == resolve(D(8), w)


def test_validate_accepts_well_formed_windows():
    w = _full_windows()
    assert validate_windows(w) is w


@pytest.mark.parametrize("windows", [
    EventWindows(overall=Window(D(10), D(0))),
    EventWindows(overall=Window(D(0), D(0))),
    EventWindows(overall=Window(D(0), None)),
    EventWindows(overall=Window(D(0), D(10)), voting=Window(D(5), D(4))),
    EventWindows(overall=Window(D(0), D(10)), submission=Window(D(-1), D(4))),
    EventWindows(overall=Window(D(0), D(10)), registration=Window(D(9), D(11))),
])
def test_validate_rejects_bad_windows(windows):
    with pytest.raises(InvalidWindowConfig):
        validate_windows(windows)
