from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from typing import Literal

from hackathon.errors import InvalidWindowConfig
from hackathon.models.event import EventWindows, Window

Stage = Literal["registration", "checkin", "submission", "voting", "awards", "ended"]
STAGES: tuple[str, ...] = ("registration", "checkin", "submission", "voting", "awards", "ended")

SUB_WINDOWS = ("registration", "checkin", "submission", "voting")


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_tz.utc)
    return dt.astimezone(dt_tz.utc)


def utc_window(w: Window) -> Window:
    return Window(
        as_utc(w.start) if w.start is not None else None,
        as_utc(w.end) if w.end is not None else None,
    )


def utc_windows(windows: EventWindows) -> EventWindows:
    """Same windows with every set bound made UTC-aware."""
    return EventWindows(**{name: utc_window(getattr(windows, name)) for name in ("overall", *SUB_WINDOWS)})


def resolve(now: datetime, windows: EventWindows) -> Stage:
    """
    Derive the single current stage of an event from its time windows.

    Sub-windows may overlap or leave gaps, so they are checked with later pipeline
    stages first: a voting window nested inside the submission window reports
    "voting". Instants inside the overall window that no sub-window claims fall
    back to "awards" once voting is over and to "submission" otherwise.

    The function is total over validated windows and keeps no state; call it on
    every query. Naive instants, in `now` or in the windows, are read as UTC.

    Examples:
        >>> from datetime import datetime, timezone
        >>> d = lambda day: datetime(2025, 3, day, tzinfo=timezone.utc)
        >>> w = EventWindows(overall=Window(d(1), d(11)), voting=Window(d(2), d(4)), submission=Window(d(2), d(10)))
        >>> resolve(d(3), w)
        'voting'
        >>> resolve(d(5), w)
        'submission'
    """
    now = as_utc(now)
    windows = utc_windows(windows)
    overall = windows.overall
    if now < overall.start:
        return "registration"
    if now > overall.end:
        return "ended"

    if windows.voting.contains(now):
        return "voting"
    if windows.submission.contains(now):
        return "submission"
    if windows.checkin.contains(now):
        return "checkin"
    if windows.registration.contains(now):
        return "registration"

    if windows.voting.end is not None and now > windows.voting.end:
        return "awards"
    return "submission"


def validate_windows(windows: EventWindows) -> EventWindows:
    """
    Reject window sets the resolver must never see.

    overall needs both bounds with end > start; every configured sub-window needs
    end > start and must sit inside the overall window.
    """
    windows = utc_windows(windows)
    overall = windows.overall
    if not overall.configured:
        raise InvalidWindowConfig("overall start and end times are required")
    if overall.end <= overall.start:
        raise InvalidWindowConfig("end time must be after start time")

    for name in SUB_WINDOWS:
        w: Window = getattr(windows, name)
        if not w.configured:
            continue
        if w.end <= w.start:
            raise InvalidWindowConfig(f"{name} end time must be after its start time")
        if w.start < overall.start or w.end > overall.end:
            raise InvalidWindowConfig(f"{name} window must fall within the event start and end times")
    return windows
