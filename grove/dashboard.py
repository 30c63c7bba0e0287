"""Dashboard snapshot: everything a presentation surface needs, derived on demand.

Aggregates today's habit list with streaks, the score and level, the history
of one selected habit, and the rolling calendar into one JSON-ready dict.
Nothing here is cached or persisted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from grove.actions import load_current_state
from grove.calendar_view import DEFAULT_WINDOW_DAYS, rolling_window
from grove.config import load_profile
from grove.dates import format_label, parse_day_key, weekday_of
from grove.ledger import POINTS_PER_COMPLETION, history_for_habit, is_done
from grove.models import AppState, Tier
from grove.registry import find_habit, list_habits
from grove.scoring import level_info
from grove.streaks import compute_streak, streak_label

TODAY_LABEL_FORMAT = "Today · {weekday}, {month} {day}"


def build_dashboard(
    state: AppState,
    today: str,
    tiers: list[Tier] | None = None,
    calendar_days: int = DEFAULT_WINDOW_DAYS,
    history_habit_id: str | None = None,
) -> dict[str, Any]:
    """Build the read-only dashboard for *today*."""
    habits = list_habits(state)

    habit_rows = []
    for h in habits:
        streak = compute_streak(state, h.id, today)
        habit_rows.append({
            "id": h.id,
            "name": h.name,
            "order": h.order,
            "createdAt": h.created_at,
            "doneToday": is_done(state, h.id, today),
            "streak": streak,
            "streakLabel": streak_label(streak),
            "pointsPill": f"+{POINTS_PER_COMPLETION} pts",
        })

    # Unknown ids fall back to the first habit in display order
    selected = history_habit_id if history_habit_id and find_habit(state, history_habit_id) else None
    if selected is None and habits:
        selected = habits[0].id

    history = []
    if selected is not None:
        history = [
            {"day": e.day, "label": format_label(e.day), "done": e.done}
            for e in history_for_habit(state, selected)
        ]

    calendar = []
    for cell in rolling_window(state, today, calendar_days):
        calendar.append({
            "day": cell.day,
            "dayNumber": parse_day_key(cell.day).day,
            "weekday": weekday_of(cell.day, "{weekday_initial}"),
            "quality": cell.quality,
        })

    return {
        "today": today,
        "todayLabel": format_label(today, TODAY_LABEL_FORMAT),
        "habits": habit_rows,
        "points": state.points,
        "level": level_info(state.points, tiers).to_dict(),
        "historyHabitId": selected,
        "history": history,
        "calendar": calendar,
    }


def load_dashboard(root: Path | None = None, history_habit_id: str | None = None) -> dict[str, Any]:
    """Build the dashboard for today from the process-owned state."""
    state, today = load_current_state(root)
    profile = load_profile(root)
    return build_dashboard(
        state,
        today,
        tiers=profile.tiers,
        calendar_days=profile.calendar_days,
        history_habit_id=history_habit_id,
    )
