"""
Rep cycling at the hypertrophy rep ceiling.

Once reps reach MAX_REPS they reset to CYCLING_TARGET_REPS and the weight
goes up to roughly preserve session volume. Holding volume exactly would
need 20/15 ≈ 1.333× the weight; the ratio used shrinks as the load gets
heavier:

  weight ≥ 100 kg  →  1.25
  weight ≥  50 kg  →  1.28
  weight ≥  20 kg  →  1.30
  lighter          →  1.33

ADVANCED lifters get a further ×0.95. The result is capped and snapped like
any other increase, so the cap usually binds well before the ratio does.
When the cap leaves no room for a single increment, the weight still moves
up one increment: reps never drop at the same load.
"""

import logging

from .caps import snap_within_cap
from .config import ADVANCED_CYCLING_DISCOUNT, CYCLING_TARGET_REPS, CYCLING_VOLUME_RATIOS
from .equipment import next_increment_above
from .models import DEFAULT_SETTINGS, EquipmentSettings, PerformanceRecord, ProgressionResult

logger = logging.getLogger(__name__)


def cycling_volume_ratio(weight: float, experience_level: str = "BEGINNER") -> float:
    """
    Return the weight multiplier applied when cycling reps down.

    Args:
        weight: Current load (kg)
        experience_level: BEGINNER, INTERMEDIATE or ADVANCED

    Returns:
        Multiplier (< 20/15)
    """
    ratio = CYCLING_VOLUME_RATIOS[-1][1]
    for at_least, band_ratio in CYCLING_VOLUME_RATIOS:
        if weight >= at_least:
            ratio = band_ratio
            break
    if experience_level == "ADVANCED":
        ratio *= ADVANCED_CYCLING_DISCOUNT
    return ratio


def cycle_reps(
    record: PerformanceRecord,
    settings: EquipmentSettings | None = None,
) -> ProgressionResult:
    """
    Reset reps to the cycling target and raise weight conservatively.

    Args:
        record: Performance at (or above) the rep ceiling
        settings: User settings; DEFAULT_SETTINGS when None

    Returns:
        ProgressionResult with CYCLING_TARGET_REPS reps
    """
    if settings is None:
        settings = DEFAULT_SETTINGS
    ratio = cycling_volume_ratio(record.weight, settings.experience_level)
    new_weight = snap_within_cap(
        record.weight,
        record.weight * ratio,
        record.is_compound,
        record.equipment_type,
        settings,
    )
    if new_weight <= record.weight:
        # Dropping reps must come with more load, even past the cap
        new_weight = next_increment_above(record.weight, record.equipment_type, settings)
    logger.debug(
        "Cycling reps %s -> %s, weight %s -> %s (ratio=%.4f)",
        record.reps,
        CYCLING_TARGET_REPS,
        record.weight,
        new_weight,
        ratio,
    )
    return ProgressionResult(new_weight=new_weight, new_reps=CYCLING_TARGET_REPS)
