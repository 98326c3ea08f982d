"""
Progression engine: one-shot decision for the next session's target.

Branch order for a single call:

  1. rating outside 1–5                 → record unchanged
  2. load-free bodyweight movement      → bodyweight rep table
  3. resolve increment, rating multiplier for the style
  4. STRENGTH                           → weight only, capped and snapped
  5. HYPERTROPHY
     a. compound (unless negotiated)    → strength path
     b. reps at the ceiling             → rep cycling
     c. rating 4–5                      → weight-only hold / decrease
     d. rating 1–3                      → volume lever selection

Every call is a pure function of its arguments; no input is mutated and
nothing outlives the call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping

from .bodyweight import is_load_free_bodyweight, progress_bodyweight
from .caps import snap_within_cap
from .config import (
    HYPERTROPHY_MULTIPLIERS,
    MAX_REPS,
    MIN_REPS,
    RATING_MAX,
    RATING_MIN,
    STRENGTH_MULTIPLIERS,
    TRAINING_STYLES,
)
from .cycling import cycle_reps
from .equipment import get_increment, next_increment_above, round_to_increment
from .models import (
    DEFAULT_POLICY,
    DEFAULT_SETTINGS,
    EquipmentSettings,
    PerformanceRecord,
    ProgressionPolicy,
    ProgressionResult,
)
from .transitions import TransitionLookup
from .volume import progress_by_volume

logger = logging.getLogger(__name__)


def clamp_reps(reps: int) -> int:
    """Clamp a rep count to [MIN_REPS, MAX_REPS]."""
    return max(MIN_REPS, min(MAX_REPS, reps))


def _normalize_style(style: str) -> str:
    normalized = str(style).upper()
    if normalized not in TRAINING_STYLES:
        logger.warning("Unknown training style %r; using STRENGTH", style)
        return "STRENGTH"
    return normalized


def _weight_only(
    record: PerformanceRecord,
    increment: float,
    multipliers: Mapping[int, int],
    settings: EquipmentSettings,
    policy: ProgressionPolicy,
) -> ProgressionResult:
    """Move weight by the rating's multiplier; reps are kept."""
    multiplier = multipliers[record.rating]
    raw = max(0.0, record.weight + increment * multiplier)
    new_weight = snap_within_cap(
        record.weight, raw, record.is_compound, record.equipment_type, settings
    )
    if multiplier > 0 and new_weight <= record.weight and policy.guarantee_minimum_step:
        new_weight = next_increment_above(record.weight, record.equipment_type, settings)
        logger.debug("Cap left no room; minimum step to %s", new_weight)
    return ProgressionResult(
        new_weight=new_weight,
        new_reps=clamp_reps(record.reps),
        deload=record.rating == RATING_MAX and new_weight < record.weight,
    )


def _hypertrophy(
    record: PerformanceRecord,
    increment: float,
    settings: EquipmentSettings,
    policy: ProgressionPolicy,
) -> ProgressionResult:
    if record.is_compound and not policy.negotiate_compound_volume:
        logger.debug("Compound lift: hypertrophy uses the strength path")
        return _weight_only(record, increment, STRENGTH_MULTIPLIERS, settings, policy)

    if record.reps >= MAX_REPS:
        return cycle_reps(record, settings)

    if record.rating >= 4:
        return _weight_only(record, increment, HYPERTROPHY_MULTIPLIERS, settings, policy)

    return progress_by_volume(record, increment, settings, HYPERTROPHY_MULTIPLIERS)


def calculate_progression(
    record: PerformanceRecord,
    style: str,
    settings: EquipmentSettings | None = None,
    *,
    policy: ProgressionPolicy | None = None,
    transitions: TransitionLookup | None = None,
) -> ProgressionResult:
    """
    Compute the next session's weight and reps for one exercise.

    Never raises for a well-formed PerformanceRecord: an out-of-range rating
    returns the record's own weight and reps.

    Args:
        record: Last performance, including the difficulty rating
        style: "STRENGTH" or "HYPERTROPHY"
        settings: User equipment settings; DEFAULT_SETTINGS when None
        policy: Engine toggles; DEFAULT_POLICY when None
        transitions: Optional advisory lookup (exercise_id, new_weight) → suggestion

    Returns:
        ProgressionResult
    """
    logger.debug(
        "Calculate progression for %s: weight=%s reps=%s sets=%s rating=%s equipment=%s style=%s",
        record.exercise_name or record.exercise_id,
        record.weight,
        record.reps,
        record.sets,
        record.rating,
        record.equipment_type,
        style,
    )

    if not RATING_MIN <= record.rating <= RATING_MAX:
        logger.warning("Rating %r outside %s-%s; keeping current target", record.rating, RATING_MIN, RATING_MAX)
        return ProgressionResult(new_weight=record.weight, new_reps=record.reps)

    if settings is None:
        settings = DEFAULT_SETTINGS
    if policy is None:
        policy = DEFAULT_POLICY

    if is_load_free_bodyweight(record):
        result = progress_bodyweight(record)
    else:
        style = _normalize_style(style)
        increment = get_increment(record.equipment_type, record.weight, settings)
        if style == "STRENGTH":
            result = _weight_only(record, increment, STRENGTH_MULTIPLIERS, settings, policy)
        else:
            result = _hypertrophy(record, increment, settings, policy)

    if transitions is not None:
        suggestion = transitions(record.exercise_id, result.new_weight)
        if suggestion is not None:
            result = replace(result, suggestion=suggestion)

    logger.debug("Result: weight=%s reps=%s deload=%s", result.new_weight, result.new_reps, result.deload)
    return result


def round_to_closest_increment(
    weight: float,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Round a weight to the caller's nearest valid increment.

    Client-side helper for displaying user-entered weights.
    """
    return round_to_increment(weight, equipment_type, settings)
