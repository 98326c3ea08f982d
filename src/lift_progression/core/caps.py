"""
Percentage caps on weight increases.

A proposed increase is clamped to current × (1 + max% / 100), where max%
comes from MAX_PERCENT_INCREASE keyed by (is_compound, experience_level):

                 BEGINNER  INTERMEDIATE  ADVANCED
  compound         15.0        10.0         7.5
  isolation        12.5        10.0         7.5

Light loads get more headroom (a single plate is a big relative jump):
  current < 10 kg  →  ×1.5
  current < 20 kg  →  ×1.25
  dumbbell < 5 kg  →  at least 25 %

The cap is an upper bound only. It never raises a weight; an increase only
lands below the current weight when that weight is off the loadable grid.
"""

from __future__ import annotations

from .config import (
    DEFAULT_EXPERIENCE_LEVEL,
    LIGHT_LOAD_CAP_SCALING,
    MAX_PERCENT_INCREASE,
    VERY_LIGHT_DUMBBELL_MAX,
    VERY_LIGHT_DUMBBELL_MIN_PERCENT,
)
from .equipment import floor_to_increment, next_increment_above, round_to_increment
from .models import DEFAULT_SETTINGS, EquipmentSettings

# Tolerance when comparing a snapped weight to the cap limit
_EPS = 1e-9


def _experience(settings: EquipmentSettings | None) -> str:
    level = (settings or DEFAULT_SETTINGS).experience_level
    if (True, level) not in MAX_PERCENT_INCREASE:
        return DEFAULT_EXPERIENCE_LEVEL
    return level


def max_percentage_increase(
    current_weight: float,
    is_compound: bool,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Return the largest allowed single-session increase, in percent.

    Args:
        current_weight: Load used last session (kg)
        is_compound: Multi-joint movement
        equipment_type: Equipment the load is on
        settings: User settings (experience level); defaults when None

    Returns:
        Maximum increase in percent of current_weight
    """
    pct = MAX_PERCENT_INCREASE[(is_compound, _experience(settings))]

    for below, factor in LIGHT_LOAD_CAP_SCALING:
        if current_weight < below:
            pct *= factor
            break

    if equipment_type == "DUMBBELL" and current_weight < VERY_LIGHT_DUMBBELL_MAX:
        pct = max(pct, VERY_LIGHT_DUMBBELL_MIN_PERCENT)

    return pct


def cap_limit(
    current_weight: float,
    is_compound: bool,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """Heaviest weight the cap allows for the next session."""
    pct = max_percentage_increase(current_weight, is_compound, equipment_type, settings)
    return current_weight * (1 + pct / 100)


def apply_percentage_cap(
    current_weight: float,
    proposed_weight: float,
    is_compound: bool,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Clamp proposed_weight to the cap limit for current_weight.

    Returns:
        min(proposed_weight, current × (1 + max% / 100))
    """
    return min(
        proposed_weight,
        cap_limit(current_weight, is_compound, equipment_type, settings),
    )


def snap_within_cap(
    current_weight: float,
    proposed_weight: float,
    is_compound: bool,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Cap a proposed weight, then snap it to a loadable increment.

    For increases the nearest multiple can overshoot the cap limit
    (8 kg dumbbell: limit 9.5 kg rounds to 10 kg); in that case the floor
    multiple is used instead. An off-grid current_weight moves up to the
    next multiple when the cap allows it, otherwise down to the floor
    multiple (21 kg on a 5 kg machine with limit 22.6 kg gives 20 kg).
    Decreases and holds are simply rounded.

    Returns:
        Snapped weight (≥ 0)
    """
    proposed_weight = max(0.0, proposed_weight)
    capped = apply_percentage_cap(
        current_weight, proposed_weight, is_compound, equipment_type, settings
    )
    snapped = round_to_increment(capped, equipment_type, settings)

    if proposed_weight <= current_weight:
        return snapped

    limit = cap_limit(current_weight, is_compound, equipment_type, settings)
    if snapped > limit + _EPS:
        snapped = floor_to_increment(capped, equipment_type, settings)
    if snapped < current_weight:
        above = next_increment_above(current_weight, equipment_type, settings)
        if above <= limit + _EPS:
            snapped = above
        else:
            snapped = max(snapped, floor_to_increment(current_weight, equipment_type, settings))
    return snapped
