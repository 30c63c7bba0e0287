"""Workspace root, timezone, path helpers for HabitGrove."""

from __future__ import annotations

import os
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from grove.fileio import read_yaml

STORAGE_KEY = "habitGroveState_v1"


def workspace_root() -> Path:
    """Get the workspace root directory (holds the snapshot and profile.yaml)."""
    return Path(
        os.environ.get("HABITGROVE_ROOT", str(Path.home() / "habitgrove"))
    ).expanduser().resolve()


def get_user_timezone(root: Path | None = None) -> tzinfo:
    """Get the user's timezone from profile.yaml, defaulting to the machine's local zone."""
    if root is None:
        root = workspace_root()
    try:
        profile = read_yaml(profile_path(root))
    except (OSError, yaml.YAMLError):
        profile = {}
    name = profile.get("timezone")
    if name:
        try:
            return ZoneInfo(str(name))
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return datetime.now().astimezone().tzinfo


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    return now_local(root).date().isoformat()


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in user's timezone."""
    return datetime.now(get_user_timezone(root))


# ── Path helpers ──────────────────────────────────────────────

def state_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / f"{STORAGE_KEY}.json"


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"
