"""HabitGrove core library — habit ledger, scoring and derived views.

Public API re-exports for convenient imports:
    from grove import today_str, set_done, compute_streak, level_info, ...
"""

# Errors
from grove.errors import (
    HabitGroveError,
    ValidationError,
    PersistenceError,
    ConfigurationError,
)

# Workspace & paths
from grove.workspace import (
    STORAGE_KEY,
    workspace_root,
    get_user_timezone,
    today_str,
    now_local,
    state_path,
    profile_path,
)

# File I/O
from grove.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
    replacing,
)

# Logging
from grove.log import setup_logging, get_logger

# Day keys
from grove.dates import (
    is_day_key,
    parse_day_key,
    offset,
    window,
    days_between,
    format_label,
    weekday_of,
)

# Models
from grove.models import (
    Tier,
    StarterHabit,
    Profile,
    Habit,
    AppState,
    TransitionResult,
    LevelInfo,
    CalendarDay,
    HistoryEntry,
)

# Config
from grove.config import load_profile

# Registry
from grove.registry import (
    DEFAULT_HABITS,
    default_state,
    add_habit,
    list_habits,
    find_habit,
)

# Ledger
from grove.ledger import (
    POINTS_PER_COMPLETION,
    is_done,
    set_done,
    clear_day,
    entries_by_date_descending,
    history_for_habit,
)

# Scoring
from grove.scoring import (
    DEFAULT_TIERS,
    validate_tiers,
    apply_delta,
    level_info,
)

# Streaks
from grove.streaks import MAX_STREAK_DAYS, compute_streak, streak_label

# Calendar
from grove.calendar_view import (
    UNRECORDED,
    MISSED,
    PARTIAL,
    DONE,
    day_quality,
    rolling_window,
)

# Persistence
from grove.storage import load_state, save_state, open_state

# Actions & dashboard
from grove.actions import (
    init_state,
    release_state,
    load_current_state,
    create_habit,
    toggle_habit,
    reset_day,
)
from grove.dashboard import build_dashboard, load_dashboard
