from __future__ import annotations
from datetime import datetime
from typing import Literal

from hackathon.errors import PhaseClosed
from hackathon.models.event import EventWindows
from hackathon.services.stages import as_utc, utc_window

Operation = Literal["register", "checkin", "submit", "vote"]

# operation -> the window that governs it
OPERATION_WINDOWS: dict[str, str] = {
    "register": "registration",
    "checkin": "checkin",
    "submit": "submission",
    "vote": "voting",
}


def is_operation_allowed(now: datetime, windows: EventWindows, operation: Operation) -> bool:
    """
    True iff `now` lies inside the operation's own window.

    Independent of the stage label: check-in stays open while the resolver
    reports "voting" if the two windows overlap. An operation whose window is
    not fully configured is closed.
    """
    try:
        window_name = OPERATION_WINDOWS[operation]
    except KeyError:
        raise ValueError(f"unknown operation: {operation!r}") from None
    return utc_window(getattr(windows, window_name)).contains(as_utc(now))


def require_operation(now: datetime, windows: EventWindows, operation: Operation) -> None:
    if not is_operation_allowed(now, windows, operation):
        window = utc_window(getattr(windows, OPERATION_WINDOWS[operation]))
        if not window.configured:
            raise PhaseClosed(f"{OPERATION_WINDOWS[operation]} window is not configured for this event")
        if as_utc(now) < window.start:
            raise PhaseClosed(f"{OPERATION_WINDOWS[operation]} has not started yet")
        raise PhaseClosed(f"{OPERATION_WINDOWS[operation]} has already ended")


def open_operations(now: datetime, windows: EventWindows) -> list[str]:
    return [op for op in OPERATION_WINDOWS if is_operation_allowed(now, windows, op)]
