"""Per-habit completion streaks."""

from __future__ import annotations

from datetime import timedelta

from grove.dates import parse_day_key, to_day_key
from grove.ledger import earliest_day, is_done
from grove.models import AppState

MAX_STREAK_DAYS = 3660


def compute_streak(
    state: AppState,
    habit_id: str,
    today: str,
    max_days: int = MAX_STREAK_DAYS,
) -> int:
    """Consecutive done days for *habit_id*, counting back from *today* inclusive.

    No grace day: a habit not done today has a streak of 0. The walk never goes
    past the earliest recorded day or *max_days* steps.
    """
    first = earliest_day(state)
    if first is None:
        return 0

    cursor = parse_day_key(today)
    floor = parse_day_key(first)
    streak = 0
    while streak < max_days and cursor >= floor:
        if not is_done(state, habit_id, to_day_key(cursor)):
            break
        streak += 1
        if cursor == floor:
            break
        cursor -= timedelta(days=1)
    return streak


def streak_label(streak: int) -> str:
    if streak:
        return f"{streak} day streak"
    return "No streak yet – start today"
