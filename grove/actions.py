"""Write-through mutations for HabitGrove.

The snapshot is loaded and normalized once per workspace root into a
process-owned AppState. Each action mutates that state, folds the score delta
in, and saves. A failed save leaves the mutation in memory; the next
successful save makes it durable. Used by both the HTTP UI and the TUI.
All access to the held state runs under one lock.
"""

from __future__ import annotations

import copy
import threading
from pathlib import Path
from typing import Any

from grove.config import load_profile
from grove.dates import parse_day_key
from grove.errors import ValidationError
from grove.ledger import clear_day, set_done
from grove.log import get_logger
from grove.models import AppState
from grove.registry import add_habit, find_habit
from grove.scoring import apply_delta
from grove.storage import open_state, save_state
from grove.workspace import today_str, workspace_root

logger = get_logger(__name__)

_state_lock = threading.Lock()
_states: dict[Path, AppState] = {}


def _resolve(root: Path | None) -> Path:
    return workspace_root() if root is None else Path(root).resolve()


def _held_state(root: Path, today: str) -> AppState:
    # Caller holds _state_lock
    state = _states.get(root)
    if state is None:
        state = open_state(today, root, load_profile(root).starter_habits)
        _states[root] = state
    return state


def init_state(root: Path | None = None) -> AppState:
    """Load the snapshot from disk into the process-owned state, replacing any held one."""
    root = _resolve(root)
    with _state_lock:
        _states.pop(root, None)
        state = _held_state(root, today_str(root))
    logger.info("state_opened", root=str(root), habits=len(state.habits), points=state.points)
    return state


def release_state(root: Path | None = None) -> None:
    """Drop the held state for *root*; the next access loads from disk again."""
    root = _resolve(root)
    with _state_lock:
        _states.pop(root, None)


def load_current_state(root: Path | None = None) -> tuple[AppState, str]:
    """Consistent copy of the held state plus today's DayKey, for read-only queries."""
    root = _resolve(root)
    today = today_str(root)
    with _state_lock:
        return copy.deepcopy(_held_state(root, today)), today


def create_habit(name: str, root: Path | None = None) -> dict[str, Any]:
    """Add a habit and persist. Blank names are rejected without mutation."""
    root = _resolve(root)
    today = today_str(root)
    with _state_lock:
        state = _held_state(root, today)
        try:
            habit = add_habit(state, name, today)
        except ValidationError as e:
            logger.info("habit_rejected", reason=str(e))
            return {"ok": False, "reason": "validation", "error": str(e)}
        saved = save_state(state, root)
    logger.info("habit_added", habit_id=habit.id, order=habit.order)
    return {"ok": True, "habit": habit.to_dict(), "saved": saved}


def toggle_habit(
    habit_id: str,
    done: bool,
    day: str | None = None,
    root: Path | None = None,
) -> dict[str, Any]:
    """Set a registered habit's done-state for *day* (default today) and persist."""
    root = _resolve(root)
    today = today_str(root)
    day = day or today
    try:
        parse_day_key(day)
    except ValidationError as e:
        return {"ok": False, "reason": "validation", "error": str(e)}

    with _state_lock:
        state = _held_state(root, today)
        if find_habit(state, habit_id) is None:
            logger.info("habit_unknown", habit_id=habit_id)
            return {"ok": False, "reason": "not_found", "error": f"No habit with id {habit_id!r}"}
        result = set_done(state, habit_id, day, done)
        points = apply_delta(state, result.points_delta)
        saved = save_state(state, root)
    logger.debug("habit_toggled", habit_id=habit_id, day=day, done=bool(done), delta=result.points_delta)
    return {
        "ok": True,
        "day": day,
        "habitId": habit_id,
        "done": bool(done),
        "pointsDelta": result.points_delta,
        "points": points,
        "saved": saved,
    }


def reset_day(day: str | None = None, root: Path | None = None) -> dict[str, Any]:
    """Clear every completion for *day* (default today) and persist."""
    root = _resolve(root)
    today = today_str(root)
    day = day or today
    try:
        parse_day_key(day)
    except ValidationError as e:
        return {"ok": False, "reason": "validation", "error": str(e)}

    with _state_lock:
        state = _held_state(root, today)
        result = clear_day(state, day)
        points = apply_delta(state, result.points_delta)
        saved = save_state(state, root) if day in state.completions else True
    logger.info("day_cleared", day=day, delta=result.points_delta)
    return {
        "ok": True,
        "day": day,
        "pointsDelta": result.points_delta,
        "points": points,
        "saved": saved,
    }
