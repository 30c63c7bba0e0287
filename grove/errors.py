"""Error taxonomy for HabitGrove."""

from __future__ import annotations


class HabitGroveError(Exception):
    """Base class for all HabitGrove errors."""


class ValidationError(HabitGroveError, ValueError):
    """Invalid user input. The operation is a no-op."""


class PersistenceError(HabitGroveError):
    """Load/save failure against the snapshot store. Never fatal."""


class ConfigurationError(HabitGroveError):
    """Malformed configuration (tier table, window size). Fatal at startup."""
