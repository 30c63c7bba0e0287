"""Tests for grove/registry.py."""

import pytest

from grove.errors import ValidationError
from grove.models import AppState, Habit, StarterHabit
from grove.registry import add_habit, default_state, find_habit, list_habits


def test_default_state_has_starter_habits():
    s = default_state("2026-02-11")
    assert [h.id for h in s.habits] == ["water", "move", "read"]
    assert [h.order for h in s.habits] == [0, 1, 2]
    assert all(h.created_at == "2026-02-11" for h in s.habits)
    assert s.completions == {}
    assert s.points == 0


def test_default_state_custom_starters():
    s = default_state("2026-02-11", [StarterHabit(id="walk", name="Walk")])
    assert [h.id for h in s.habits] == ["walk"]


def test_add_habit_to_empty_registry():
    s = AppState()
    habit = add_habit(s, "Stretch", "2026-02-11")
    assert habit.order == 0
    assert habit.name == "Stretch"
    assert habit.created_at == "2026-02-11"
    assert s.habits == [habit]


def test_add_habit_order_follows_max(state):
    state.habits[1].order = 7
    habit = add_habit(state, "  Journal  ", "2026-02-11")
    assert habit.order == 8
    assert habit.name == "Journal"


def test_add_habit_ids_are_unique(state):
    ids = {add_habit(state, f"Habit {i}", "2026-02-11").id for i in range(20)}
    assert len(ids) == 20
    assert not ids & {"water", "move", "read"}


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_habit_blank_name_rejected(state, name):
    before = list(state.habits)
    with pytest.raises(ValidationError):
        add_habit(state, name, "2026-02-11")
    assert state.habits == before


def test_list_habits_sorted_and_stable():
    s = AppState(habits=[
        Habit(id="c", order=2),
        Habit(id="a", order=1),
        Habit(id="b", order=1),
        Habit(id="z", order=0),
    ])
    assert [h.id for h in list_habits(s)] == ["z", "a", "b", "c"]


def test_find_habit(state):
    assert find_habit(state, "move").name == "Move"
    assert find_habit(state, "missing") is None
