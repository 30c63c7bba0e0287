"""Tests for grove/models.py — snapshot normalization and serialization."""

from grove.models import AppState, Habit, Profile, Tier


def test_app_state_round_trip():
    data = {
        "habits": [{"id": "water", "name": "Water", "createdAt": "2026-02-01", "order": 0}],
        "completions": {"2026-02-11": {"water": True}},
        "points": 5,
    }
    s = AppState.from_dict(data)
    assert s.habits == [Habit(id="water", name="Water", created_at="2026-02-01", order=0)]
    assert s.completions == {"2026-02-11": {"water": True}}
    assert s.points == 5
    assert s.to_dict() == data


def test_app_state_missing_completions():
    s = AppState.from_dict({"habits": [], "points": 10})
    assert s.completions == {}
    assert s.points == 10


def test_app_state_from_garbage():
    assert AppState.from_dict(None) == AppState()
    assert AppState.from_dict([]) == AppState()


def test_app_state_normalizes_habits():
    data = {
        "habits": [
            {"id": "a", "name": "A", "order": "3"},
            {"id": "a", "name": "Duplicate"},
            {"name": "No id"},
            "not a habit",
            {"id": "b", "name": "B", "createdAt": "yesterday"},
        ],
    }
    s = AppState.from_dict(data, today="2026-02-11")
    assert [h.id for h in s.habits] == ["a", "b"]
    assert s.habits[0].order == 3
    assert s.habits[0].created_at == "2026-02-11"
    assert s.habits[1].order == 4  # falls back to list position
    assert s.habits[1].created_at == "2026-02-11"


def test_app_state_normalizes_completions():
    data = {
        "completions": {
            "2026-02-10": {"water": 1, "move": 0},
            "2026-02-11": None,
            "garbage": {"water": True},
        },
    }
    s = AppState.from_dict(data)
    assert s.completions == {
        "2026-02-10": {"water": True, "move": False},
        "2026-02-11": {},
    }


def test_app_state_clamps_points():
    assert AppState.from_dict({"points": -20}).points == 0
    assert AppState.from_dict({"points": "lots"}).points == 0
    assert AppState.from_dict({"points": True}).points == 0


def test_profile_from_dict():
    p = Profile.from_dict({
        "timezone": "Europe/Berlin",
        "tiers": [{"label": "A", "threshold": 0}, {"label": "B", "threshold": 10}],
        "starter_habits": [{"id": "walk", "name": "Walk"}, {"id": "incomplete"}],
        "calendar_days": 14,
        "log_level": "debug",
    })
    assert p.timezone == "Europe/Berlin"
    assert p.tiers == [Tier("A", 0), Tier("B", 10)]
    assert [h.id for h in p.starter_habits] == ["walk"]
    assert p.calendar_days == 14
    assert p.log_level == "DEBUG"


def test_profile_from_empty():
    p = Profile.from_dict({})
    assert p.tiers == []
    assert p.calendar_days == 28
    assert p.log_level == "INFO"
