"""Snapshot persistence for HabitGrove.

The whole AppState is one JSON object stored under the storage key
(``habitGroveState_v1.json``). Failures here are never fatal: loads fall back
to a fresh default state and saves leave the in-memory state intact.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from grove.errors import PersistenceError
from grove.fileio import read_json, write_json_atomic
from grove.log import get_logger
from grove.models import AppState, StarterHabit
from grove.registry import default_state
from grove.workspace import state_path, workspace_root

logger = get_logger(__name__)

SNAPSHOT_KEYS = ("habits", "completions", "points")


def _read_snapshot(path: Path) -> Any:
    try:
        return read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PersistenceError(f"Could not load habit data from {path}: {e}") from e


def load_state(root: Path | None = None) -> dict[str, Any] | None:
    """Read the raw snapshot, or None if missing, blank or unreadable."""
    path = state_path(root)
    try:
        data = _read_snapshot(path)
    except PersistenceError as e:
        logger.warning("state_load_failed", path=str(path), error=str(e))
        return None
    if data is None:
        return None
    if not isinstance(data, dict) or not any(k in data for k in SNAPSHOT_KEYS):
        logger.warning("state_malformed", path=str(path), kind=type(data).__name__)
        return None
    return data


def save_state(state: AppState, root: Path | None = None) -> bool:
    """Write the snapshot atomically. Returns False (and warns) on failure."""
    path = state_path(root)
    try:
        write_json_atomic(path, state.to_dict())
    except (OSError, TypeError, ValueError) as e:
        logger.warning("state_save_failed", path=str(path), error=str(e))
        return False
    return True


def open_state(
    today: str,
    root: Path | None = None,
    starter_habits: list[StarterHabit] | None = None,
) -> AppState:
    """Load and normalize the snapshot, or build the default state."""
    if root is None:
        root = workspace_root()
    data = load_state(root)
    if data is None:
        logger.debug("state_default", root=str(root))
        return default_state(today, starter_habits)
    return AppState.from_dict(data, today=today)
