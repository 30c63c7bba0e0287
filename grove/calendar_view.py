"""Calendar aggregation: per-day completion quality over a trailing window."""

from __future__ import annotations

from grove.dates import window
from grove.ledger import is_done
from grove.models import AppState, CalendarDay

UNRECORDED = "unrecorded"
MISSED = "missed"
PARTIAL = "partial"
DONE = "done"

QUALITIES = (UNRECORDED, MISSED, PARTIAL, DONE)

DEFAULT_WINDOW_DAYS = 28


def day_quality(state: AppState, day: str) -> str:
    """Classify a day against the full current habit set."""
    if day not in state.completions:
        return UNRECORDED

    total = len(state.habits)
    if total == 0:
        return UNRECORDED

    done_count = sum(1 for h in state.habits if is_done(state, h.id, day))
    if done_count == 0:
        return MISSED
    if done_count == total:
        return DONE
    return PARTIAL


def rolling_window(state: AppState, today: str, size: int = DEFAULT_WINDOW_DAYS) -> list[CalendarDay]:
    """Quality of each of the *size* days ending today, oldest first."""
    return [CalendarDay(day=d, quality=day_quality(state, d)) for d in window(today, size)]
