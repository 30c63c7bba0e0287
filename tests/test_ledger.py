"""Tests for grove/ledger.py — completion transitions and history."""

import pytest

from grove.calendar_view import MISSED, day_quality
from grove.errors import ValidationError
from grove.ledger import (
    clear_day,
    entries_by_date_descending,
    history_for_habit,
    is_done,
    set_done,
)

DAY = "2026-02-11"


def test_is_done_defaults_to_false(state):
    assert is_done(state, "water", DAY) is False
    state.completions[DAY] = {}
    assert is_done(state, "water", DAY) is False
    assert is_done(state, "unknown", DAY) is False


def test_set_done_round_trip(state):
    set_done(state, "water", DAY, True)
    assert is_done(state, "water", DAY) is True
    set_done(state, "water", DAY, False)
    assert is_done(state, "water", DAY) is False


def test_set_done_deltas(state):
    assert set_done(state, "water", DAY, True).points_delta == 5
    assert set_done(state, "water", DAY, True).points_delta == 0
    assert set_done(state, "water", DAY, False).points_delta == -5
    assert set_done(state, "water", DAY, False).points_delta == 0


def test_set_done_false_materializes_day(state):
    result = set_done(state, "water", DAY, False)
    assert result.points_delta == 0
    assert state.completions == {DAY: {"water": False}}


def test_set_done_rejects_bad_day(state):
    with pytest.raises(ValidationError):
        set_done(state, "water", "2026-13-01", True)
    assert state.completions == {}


def test_clear_day_takes_back_done_points(state):
    set_done(state, "water", DAY, True)
    set_done(state, "move", DAY, False)
    result = clear_day(state, DAY)
    assert result.points_delta == -5
    assert state.completions[DAY] == {}
    assert day_quality(state, DAY) == MISSED


def test_clear_day_counts_every_done_habit(state):
    for h in ("water", "move", "read"):
        set_done(state, h, DAY, True)
    assert clear_day(state, DAY).points_delta == -15


def test_clear_absent_day_is_noop(state):
    result = clear_day(state, DAY)
    assert result.points_delta == 0
    assert DAY not in state.completions


def test_clear_empty_day_is_noop(state):
    state.completions[DAY] = {}
    assert clear_day(state, DAY).points_delta == 0
    assert state.completions[DAY] == {}


def test_entries_by_date_descending(state):
    set_done(state, "water", "2026-01-31", True)
    set_done(state, "water", "2026-02-11", True)
    set_done(state, "move", "2026-02-01", True)
    days = [day for day, _record in entries_by_date_descending(state)]
    assert days == ["2026-02-11", "2026-02-01", "2026-01-31"]


def test_history_for_habit(state):
    set_done(state, "water", "2026-02-10", True)
    set_done(state, "move", "2026-02-11", True)
    history = history_for_habit(state, "water")
    assert [(e.day, e.done) for e in history] == [
        ("2026-02-11", False),
        ("2026-02-10", True),
    ]
