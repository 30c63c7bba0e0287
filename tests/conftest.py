"""Shared test fixtures for HabitGrove tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from grove.actions import release_state
from grove.models import AppState, Habit

TODAY = "2026-02-11"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile and a saved snapshot."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    profile = {
        "timezone": "UTC",
        "calendar_days": 28,
        "log_level": "DEBUG",
    }
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    snapshot = {
        "habits": [
            {"id": "water", "name": "Drink 6 glasses of water", "createdAt": "2026-02-01", "order": 0},
            {"id": "move", "name": "Move your body for 20 minutes", "createdAt": "2026-02-01", "order": 1},
            {"id": "read", "name": "Read for 10 minutes", "createdAt": "2026-02-01", "order": 2},
        ],
        "completions": {
            "2026-02-09": {"water": True, "move": True, "read": True},
            "2026-02-10": {"water": True, "move": False},
            "2026-02-11": {"water": True},
        },
        "points": 30,
    }
    (root / "habitGroveState_v1.json").write_text(
        json.dumps(snapshot, indent=2), encoding="utf-8"
    )

    os.environ["HABITGROVE_ROOT"] = str(root)
    yield root
    release_state(root)
    if "HABITGROVE_ROOT" in os.environ:
        del os.environ["HABITGROVE_ROOT"]


@pytest.fixture
def state() -> AppState:
    """In-memory state with three habits and an empty ledger."""
    return AppState(
        habits=[
            Habit(id="water", name="Water", created_at="2026-02-01", order=0),
            Habit(id="move", name="Move", created_at="2026-02-01", order=1),
            Habit(id="read", name="Read", created_at="2026-02-01", order=2),
        ],
    )
