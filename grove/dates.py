"""DayKey helpers: canonical YYYY-MM-DD local-day keys and day arithmetic.

DayKeys are fixed-width, zero-padded ISO dates, so lexicographic order is
chronological order. All arithmetic goes through ``datetime.date`` so month
and year boundaries roll over correctly.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from pathlib import Path

from grove.errors import ValidationError
from grove.workspace import today_str

_DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_LABEL_FORMAT = "{month_short} {day}"
DEFAULT_WEEKDAY_FORMAT = "{weekday_short}"


def is_day_key(value: object) -> bool:
    """True if *value* is a well-formed DayKey naming a real calendar date."""
    if not isinstance(value, str) or not _DAY_KEY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_day_key(key: str) -> date:
    """Parse a DayKey, raising ValidationError if it is malformed."""
    if not is_day_key(key):
        raise ValidationError(f"Invalid day key: {key!r}")
    return date.fromisoformat(key)


def to_day_key(d: date) -> str:
    return d.isoformat()


def today(root: Path | None = None) -> str:
    """Current local date as a DayKey."""
    return today_str(root)


def offset(key: str, delta_days: int) -> str:
    """Return the DayKey *delta_days* after *key* (negative = past)."""
    try:
        return to_day_key(parse_day_key(key) + timedelta(days=delta_days))
    except OverflowError as e:
        raise ValidationError(f"{key} shifted by {delta_days} days is out of range") from e


def window(end_key_inclusive: str, size: int) -> list[str]:
    """*size* consecutive DayKeys ending at *end_key_inclusive*, oldest first."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ValidationError(f"Window size must be a positive integer, got {size!r}")
    end = parse_day_key(end_key_inclusive)
    if size - 1 > end.toordinal() - date.min.toordinal():
        raise ValidationError(f"Window of {size} days ending {end_key_inclusive} starts before year 1")
    return [to_day_key(end - timedelta(days=i)) for i in range(size - 1, -1, -1)]


def days_between(start_key: str, end_key: str) -> int:
    """Signed number of days from *start_key* to *end_key*."""
    return (parse_day_key(end_key) - parse_day_key(start_key)).days


# ── Presentation labels ───────────────────────────────────────
#
# Labels are built from English names by default; pass ``names`` to plug in
# another locale. They never feed back into stored data.

EN_NAMES = {
    "months": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    "weekdays": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}


def _fields(d: date, names: dict[str, list[str]]) -> dict[str, object]:
    month = names["months"][d.month - 1]
    weekday = names["weekdays"][d.weekday()]
    return {
        "year": d.year,
        "month": month,
        "month_short": month[:3],
        "day": d.day,
        "weekday": weekday,
        "weekday_short": weekday[:3],
        "weekday_initial": weekday[:1],
    }


def format_label(
    key: str,
    fmt: str = DEFAULT_LABEL_FORMAT,
    names: dict[str, list[str]] | None = None,
) -> str:
    """Human label for a DayKey, e.g. 'Oct 19'."""
    return fmt.format(**_fields(parse_day_key(key), names or EN_NAMES))


def weekday_of(
    key: str,
    fmt: str = DEFAULT_WEEKDAY_FORMAT,
    names: dict[str, list[str]] | None = None,
) -> str:
    """Weekday label for a DayKey, e.g. 'Mon'."""
    return fmt.format(**_fields(parse_day_key(key), names or EN_NAMES))
