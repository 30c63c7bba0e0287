"""Completion ledger: sparse day -> habit -> done mapping.

A day entry is created on first write and never removed; clearing a day
leaves an empty record so the day still shows as touched. Score changes are
derived only from single transitions here, never from rescanning history.
"""

from __future__ import annotations

from grove.dates import parse_day_key
from grove.models import AppState, HistoryEntry, TransitionResult

POINTS_PER_COMPLETION = 5


def is_done(state: AppState, habit_id: str, day: str) -> bool:
    record = state.completions.get(day)
    return bool(record.get(habit_id, False)) if record else False


def set_done(state: AppState, habit_id: str, day: str, done: bool) -> TransitionResult:
    """Record *done* for (habit, day) and return the score delta of the transition."""
    parse_day_key(day)
    was = is_done(state, habit_id, day)
    done = bool(done)
    state.completions.setdefault(day, {})[habit_id] = done

    if not was and done:
        return TransitionResult(points_delta=POINTS_PER_COMPLETION)
    if was and not done:
        return TransitionResult(points_delta=-POINTS_PER_COMPLETION)
    return TransitionResult(points_delta=0)


def clear_day(state: AppState, day: str) -> TransitionResult:
    """Reset a touched day to an empty record, taking back points for done habits."""
    parse_day_key(day)
    record = state.completions.get(day)
    if not record:
        return TransitionResult(points_delta=0)

    done_count = sum(1 for v in record.values() if v)
    state.completions[day] = {}
    return TransitionResult(points_delta=-POINTS_PER_COMPLETION * done_count)


def entries_by_date_descending(state: AppState) -> list[tuple[str, dict[str, bool]]]:
    """All touched days, most recent first."""
    return sorted(state.completions.items(), key=lambda kv: kv[0], reverse=True)


def history_for_habit(state: AppState, habit_id: str) -> list[HistoryEntry]:
    """Done/missed for one habit on every touched day, most recent first."""
    return [
        HistoryEntry(day=day, done=bool(record.get(habit_id, False)))
        for day, record in entries_by_date_descending(state)
    ]


def earliest_day(state: AppState) -> str | None:
    return min(state.completions) if state.completions else None
