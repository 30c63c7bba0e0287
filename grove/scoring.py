"""Scoring engine: point clamping and tier/level progression."""

from __future__ import annotations

from grove.errors import ConfigurationError
from grove.models import AppState, LevelInfo, Tier

DEFAULT_TIERS = [
    Tier(label="Seedling", threshold=0),
    Tier(label="Sprout", threshold=40),
    Tier(label="Sapling", threshold=120),
    Tier(label="Young tree", threshold=260),
    Tier(label="Grove guardian", threshold=480),
]

TOP_TIER_CAPTION = "You reached the top tier – keep the grove thriving!"


def validate_tiers(tiers: list[Tier]) -> list[Tier]:
    """Check the tier table: non-empty, first threshold 0, strictly ascending.

    Raises ConfigurationError otherwise; equal adjacent thresholds would make
    the progress span zero.
    """
    if not tiers:
        raise ConfigurationError("Tier table must not be empty")
    for t in tiers:
        if not t.label:
            raise ConfigurationError("Every tier needs a label")
    if tiers[0].threshold != 0:
        raise ConfigurationError(
            f"First tier threshold must be 0, got {tiers[0].threshold}"
        )
    for prev, cur in zip(tiers, tiers[1:]):
        if cur.threshold <= prev.threshold:
            raise ConfigurationError(
                f"Tier thresholds must be strictly ascending: "
                f"{prev.label!r}={prev.threshold} then {cur.label!r}={cur.threshold}"
            )
    return tiers


def apply_delta(state: AppState, points_delta: int) -> int:
    """Apply a transition delta; points never drop below zero."""
    state.points = max(0, state.points + points_delta)
    return state.points


def level_info(points: int, tiers: list[Tier] | None = None) -> LevelInfo:
    """Current tier label, percent progress to the next tier, and a caption."""
    if tiers is None:
        tiers = DEFAULT_TIERS

    idx = 0
    for i, tier in enumerate(tiers):
        if points >= tier.threshold:
            idx = i
    current = tiers[idx]
    nxt = tiers[idx + 1] if idx + 1 < len(tiers) else None

    if nxt is None:
        return LevelInfo(label=current.label, progress_percent=100, caption=TOP_TIER_CAPTION)

    span = nxt.threshold - current.threshold
    if span <= 0:
        raise ConfigurationError(f"Tiers {current.label!r} and {nxt.label!r} share a threshold")
    into = points - current.threshold
    # half-up rounding
    pct = max(0, min(100, int(100 * into / span + 0.5)))
    remaining = nxt.threshold - points
    return LevelInfo(
        label=current.label,
        progress_percent=pct,
        caption=f"{remaining} points until {nxt.label}.",
        next_label=nxt.label,
        points_to_next=remaining,
    )
