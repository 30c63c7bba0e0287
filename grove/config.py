"""Profile loading and validation for HabitGrove.

profile.yaml is optional; every key falls back to a built-in default.
Invalid tier tables or window sizes raise ConfigurationError.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from grove.errors import ConfigurationError
from grove.fileio import read_yaml
from grove.models import Profile
from grove.scoring import DEFAULT_TIERS, validate_tiers
from grove.workspace import profile_path, workspace_root


def load_profile(root: Path | None = None) -> Profile:
    """Load and validate profile.yaml."""
    if root is None:
        root = workspace_root()
    try:
        data = read_yaml(profile_path(root))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"profile.yaml is not valid YAML: {e}") from e

    profile = Profile.from_dict(data)
    profile.tiers = validate_tiers(profile.tiers or list(DEFAULT_TIERS))

    days = profile.calendar_days
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ConfigurationError(f"calendar_days must be a positive integer, got {days!r}")
    return profile
