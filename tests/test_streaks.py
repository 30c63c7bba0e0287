"""Tests for grove/streaks.py."""

from grove.dates import offset
from grove.ledger import set_done
from grove.streaks import MAX_STREAK_DAYS, compute_streak, streak_label

TODAY = "2026-02-11"


def test_no_completions(state):
    assert compute_streak(state, "water", TODAY) == 0


def test_three_day_streak(state):
    for delta in (0, -1, -2):
        set_done(state, "water", offset(TODAY, delta), True)
    set_done(state, "water", offset(TODAY, -3), False)
    set_done(state, "water", offset(TODAY, -4), True)
    assert compute_streak(state, "water", TODAY) == 3


def test_no_grace_day(state):
    set_done(state, "water", offset(TODAY, -1), True)
    set_done(state, "water", offset(TODAY, -2), True)
    assert compute_streak(state, "water", TODAY) == 0


def test_unrecorded_gap_breaks_streak(state):
    set_done(state, "water", TODAY, True)
    set_done(state, "water", offset(TODAY, -2), True)
    assert compute_streak(state, "water", TODAY) == 1


def test_streak_is_per_habit(state):
    set_done(state, "water", TODAY, True)
    set_done(state, "move", offset(TODAY, -1), True)
    assert compute_streak(state, "move", TODAY) == 0
    assert compute_streak(state, "unknown", TODAY) == 0


def test_streak_crosses_month_boundary(state):
    for delta in range(15):
        set_done(state, "water", offset("2026-03-05", -delta), True)
    assert compute_streak(state, "water", "2026-03-05") == 15


def test_streak_is_bounded(state):
    for delta in range(MAX_STREAK_DAYS + 40):
        set_done(state, "water", offset(TODAY, -delta), True)
    assert compute_streak(state, "water", TODAY) == MAX_STREAK_DAYS
    assert compute_streak(state, "water", TODAY, max_days=10) == 10


def test_streak_label():
    assert streak_label(0) == "No streak yet – start today"
    assert streak_label(4) == "4 day streak"


def test_streak_stops_at_first_calendar_day(state):
    set_done(state, "water", "0001-01-01", True)
    set_done(state, "water", "0001-01-02", True)
    assert compute_streak(state, "water", "0001-01-02") == 2
