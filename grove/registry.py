"""Habit registry: append-only, ordered set of habit definitions."""

from __future__ import annotations

import secrets

from grove.errors import ValidationError
from grove.models import AppState, Habit, StarterHabit

DEFAULT_HABITS = [
    StarterHabit(id="water", name="Drink 6 glasses of water"),
    StarterHabit(id="move", name="Move your body for 20 minutes"),
    StarterHabit(id="read", name="Read for 10 minutes"),
]


def default_state(today: str, starter_habits: list[StarterHabit] | None = None) -> AppState:
    """Fresh state with the starter habits, an empty ledger and zero points."""
    starters = starter_habits or DEFAULT_HABITS
    habits = [
        Habit(id=h.id, name=h.name, created_at=today, order=i)
        for i, h in enumerate(starters)
    ]
    return AppState(habits=habits, completions={}, points=0)


def _new_habit_id(existing: set[str]) -> str:
    while True:
        habit_id = f"habit_{secrets.token_hex(4)}"
        if habit_id not in existing:
            return habit_id


def add_habit(state: AppState, name: str, today: str) -> Habit:
    """Append a new habit. Raises ValidationError if *name* is blank."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Habit name must not be empty")

    order = 1 + max((h.order for h in state.habits), default=-1)
    habit = Habit(
        id=_new_habit_id({h.id for h in state.habits}),
        name=name,
        created_at=today,
        order=order,
    )
    state.habits.append(habit)
    return habit


def list_habits(state: AppState) -> list[Habit]:
    """Habits in display order; ties keep insertion order (sorted() is stable)."""
    return sorted(state.habits, key=lambda h: h.order)


def find_habit(state: AppState, habit_id: str) -> Habit | None:
    for h in state.habits:
        if h.id == habit_id:
            return h
    return None
