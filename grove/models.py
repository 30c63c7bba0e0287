"""Typed dataclasses for the HabitGrove data model.

All persisted models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from grove.dates import is_day_key


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# ── Profile ───────────────────────────────────────────────────


@dataclass
class Tier:
    label: str
    threshold: int

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Tier:
        return cls(label=str(d.get("label", "")), threshold=_as_int(d.get("threshold"), -1))

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "threshold": self.threshold}


@dataclass
class StarterHabit:
    id: str
    name: str


@dataclass
class Profile:
    timezone: str | None = None
    tiers: list[Tier] = field(default_factory=list)  # empty = built-in table
    starter_habits: list[StarterHabit] = field(default_factory=list)  # empty = built-in set
    calendar_days: Any = 28
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        tiers = [Tier.from_dict(t) for t in (d.get("tiers") or []) if isinstance(t, dict)]
        starters = []
        for h in d.get("starter_habits") or []:
            if isinstance(h, dict) and h.get("id") and h.get("name"):
                starters.append(StarterHabit(id=str(h["id"]), name=str(h["name"])))
        return cls(
            timezone=d.get("timezone"),
            tiers=tiers,
            starter_habits=starters,
            calendar_days=d.get("calendar_days", 28),
            log_level=str(d.get("log_level", "INFO")).upper(),
        )


# ── Habits & state ────────────────────────────────────────────


@dataclass
class Habit:
    id: str = ""
    name: str = ""
    created_at: str = ""  # DayKey
    order: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any], position: int = 0, today: str = "") -> Habit:
        created = d.get("createdAt", d.get("created_at"))
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            created_at=created if is_day_key(created) else today,
            order=_as_int(d.get("order"), position),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "order": self.order,
        }


@dataclass
class AppState:
    """Aggregate root: habits, the completion ledger, and the point score.

    ``completions[day][habit_id]`` is the done-state; a missing day or a
    missing habit id both mean "not done".
    """

    habits: list[Habit] = field(default_factory=list)
    completions: dict[str, dict[str, bool]] = field(default_factory=dict)
    points: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any], today: str = "") -> AppState:
        """Normalize a deserialized snapshot into a state that holds every invariant."""
        if not d or not isinstance(d, dict):
            return cls()

        habits: list[Habit] = []
        seen: set[str] = set()
        for i, raw in enumerate(d.get("habits") or []):
            if not isinstance(raw, dict):
                continue
            habit = Habit.from_dict(raw, position=i, today=today)
            if not habit.id or habit.id in seen:
                continue
            seen.add(habit.id)
            habits.append(habit)

        completions: dict[str, dict[str, bool]] = {}
        raw_completions = d.get("completions")
        if isinstance(raw_completions, dict):
            for day, record in raw_completions.items():
                if not is_day_key(day):
                    continue
                if isinstance(record, dict):
                    completions[day] = {str(k): bool(v) for k, v in record.items()}
                else:
                    completions[day] = {}

        return cls(
            habits=habits,
            completions=completions,
            points=max(0, _as_int(d.get("points"), 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "habits": [h.to_dict() for h in self.habits],
            "completions": {day: dict(rec) for day, rec in self.completions.items()},
            "points": self.points,
        }


# ── Derived results ───────────────────────────────────────────


@dataclass
class TransitionResult:
    points_delta: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"pointsDelta": self.points_delta}


@dataclass
class LevelInfo:
    label: str = ""
    progress_percent: int = 0
    caption: str = ""
    next_label: str | None = None
    points_to_next: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "progressPercent": self.progress_percent,
            "caption": self.caption,
            "nextLabel": self.next_label,
            "pointsToNext": self.points_to_next,
        }


@dataclass
class CalendarDay:
    day: str = ""
    quality: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "quality": self.quality}


@dataclass
class HistoryEntry:
    day: str = ""
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "done": self.done}
