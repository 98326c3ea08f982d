"""
Equipment-aware weight steps.

Every weight the engine returns must be loadable on real equipment:

  get_increment         smallest valid step for an equipment type at a load
  round_to_increment    snap a weight to the nearest multiple of that step
  floor_to_increment    largest multiple not above a weight
  next_increment_above  smallest loadable weight strictly above a weight

Increment resolution
--------------------
  BARBELL / CABLE / MACHINE  →  their own EquipmentSettings field
  DUMBBELL / BODYWEIGHT      →  dumbbell_increment (belt/vest loading)
  DUMBBELL at ≤ 10 kg        →  1 kg, regardless of settings
  unknown equipment          →  2.5 kg

A zero or missing settings field falls back to DEFAULT_INCREMENTS.
"""

from __future__ import annotations

from .config import (
    DEFAULT_INCREMENTS,
    FALLBACK_INCREMENT,
    INCREMENT_FIELDS,
    LIGHT_DUMBBELL_INCREMENT,
    LIGHT_DUMBBELL_MAX,
)
from .models import DEFAULT_SETTINGS, EquipmentSettings

# Strip float noise such as 102.50000000000001 from snapped weights
_WEIGHT_DIGITS = 6
_STEP_EPS = 1e-9


def _in_light_band(equipment_type: str, weight: float) -> bool:
    return equipment_type == "DUMBBELL" and weight <= LIGHT_DUMBBELL_MAX


def _configured_increment(equipment_type: str, settings: EquipmentSettings | None) -> float:
    field_name = INCREMENT_FIELDS.get(equipment_type)
    if field_name is None:
        return FALLBACK_INCREMENT

    if settings is None:
        settings = DEFAULT_SETTINGS
    configured = getattr(settings, field_name, None)
    if not configured or configured <= 0:
        return DEFAULT_INCREMENTS[field_name]
    return float(configured)


def get_increment(
    equipment_type: str,
    current_weight: float,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Return the weight step for an equipment type at the given load.

    Args:
        equipment_type: BARBELL, DUMBBELL, CABLE, MACHINE or BODYWEIGHT
        current_weight: Load the step is taken from (kg)
        settings: User settings; DEFAULT_SETTINGS when None

    Returns:
        A positive increment in kg
    """
    if _in_light_band(equipment_type, current_weight):
        return LIGHT_DUMBBELL_INCREMENT
    return _configured_increment(equipment_type, settings)


def _to_grid(steps: int, increment: float) -> float:
    return max(0.0, round(steps * increment, _WEIGHT_DIGITS))


def round_to_increment(
    weight: float,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Snap a weight to the nearest multiple of its increment.

    Ties go to the even multiple (Python's round()), so 9.5 kg on a 1 kg
    dumbbell step becomes 10 kg and 10.5 kg becomes 10 kg. A dumbbell
    result that lands in the light band is snapped again on the 1 kg step,
    so rounding twice gives the same weight as rounding once.

    Args:
        weight: Raw weight in kg
        equipment_type: Equipment the weight is loaded on
        settings: User settings; DEFAULT_SETTINGS when None

    Returns:
        Rounded weight (≥ 0)
    """
    increment = get_increment(equipment_type, weight, settings)
    snapped = _to_grid(round(weight / increment), increment)
    if increment != LIGHT_DUMBBELL_INCREMENT and _in_light_band(equipment_type, snapped):
        snapped = _to_grid(round(snapped / LIGHT_DUMBBELL_INCREMENT), LIGHT_DUMBBELL_INCREMENT)
    return snapped


def floor_to_increment(
    weight: float,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """Largest increment multiple not above weight."""
    increment = get_increment(equipment_type, weight, settings)
    # Nudge before flooring so 9.999999 / 1.0 doesn't drop a whole step
    floored = _to_grid(int(weight / increment + _STEP_EPS), increment)
    if increment != LIGHT_DUMBBELL_INCREMENT and _in_light_band(equipment_type, floored):
        light = min(weight, LIGHT_DUMBBELL_MAX)
        floored = _to_grid(int(light / LIGHT_DUMBBELL_INCREMENT + _STEP_EPS), LIGHT_DUMBBELL_INCREMENT)
    return floored


def next_increment_above(
    weight: float,
    equipment_type: str,
    settings: EquipmentSettings | None = None,
) -> float:
    """
    Smallest loadable weight strictly above weight.

    Light dumbbells step by 1 kg up to LIGHT_DUMBBELL_MAX; past it the
    configured dumbbell increment applies (10 kg → 12 kg by default).
    """
    if _in_light_band(equipment_type, weight):
        steps = int(weight / LIGHT_DUMBBELL_INCREMENT + _STEP_EPS) + 1
        candidate = _to_grid(steps, LIGHT_DUMBBELL_INCREMENT)
        if candidate <= LIGHT_DUMBBELL_MAX:
            return candidate
        weight = LIGHT_DUMBBELL_MAX
    increment = _configured_increment(equipment_type, settings)
    return _to_grid(int(weight / increment + _STEP_EPS) + 1, increment)
