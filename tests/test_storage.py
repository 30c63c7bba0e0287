"""Tests for grove/storage.py — snapshot load/save and fallbacks."""

import json
from unittest.mock import patch

from grove.models import AppState, Habit
from grove.storage import load_state, open_state, save_state
from grove.workspace import state_path


def test_load_missing_returns_none(tmp_path):
    assert load_state(tmp_path) is None


def test_load_blank_returns_none(tmp_path):
    state_path(tmp_path).write_text("  \n", encoding="utf-8")
    assert load_state(tmp_path) is None


def test_load_malformed_json_returns_none(tmp_path):
    state_path(tmp_path).write_text("{not json", encoding="utf-8")
    assert load_state(tmp_path) is None


def test_load_wrong_shape_returns_none(tmp_path):
    state_path(tmp_path).write_text("[1, 2, 3]", encoding="utf-8")
    assert load_state(tmp_path) is None
    state_path(tmp_path).write_text('{"unrelated": true}', encoding="utf-8")
    assert load_state(tmp_path) is None


def test_save_then_load(tmp_path):
    s = AppState(
        habits=[Habit(id="water", name="Water", created_at="2026-02-11", order=0)],
        completions={"2026-02-11": {"water": True}},
        points=5,
    )
    assert save_state(s, tmp_path) is True
    data = json.loads(state_path(tmp_path).read_text(encoding="utf-8"))
    assert data["completions"] == {"2026-02-11": {"water": True}}
    assert AppState.from_dict(load_state(tmp_path)) == s


def test_save_failure_is_not_fatal(tmp_path):
    with patch("grove.storage.write_json_atomic", side_effect=OSError("disk full")):
        assert save_state(AppState(), tmp_path) is False
    assert not state_path(tmp_path).exists()


def test_open_state_default_when_missing(tmp_path):
    s = open_state("2026-02-11", tmp_path)
    assert [h.id for h in s.habits] == ["water", "move", "read"]
    assert s.points == 0


def test_open_state_default_when_malformed(tmp_path):
    state_path(tmp_path).write_text("{oops", encoding="utf-8")
    s = open_state("2026-02-11", tmp_path)
    assert len(s.habits) == 3


def test_open_state_patches_partial_snapshot(tmp_path):
    state_path(tmp_path).write_text(
        json.dumps({"habits": [{"id": "x", "name": "X"}], "points": 15}),
        encoding="utf-8",
    )
    s = open_state("2026-02-11", tmp_path)
    assert [h.id for h in s.habits] == ["x"]
    assert s.completions == {}
    assert s.points == 15


def test_open_state_from_workspace(workspace):
    s = open_state("2026-02-11", workspace)
    assert s.points == 30
    assert s.completions["2026-02-10"] == {"water": True, "move": False}
