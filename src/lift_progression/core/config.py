"""
Configuration constants for the progression engine.

All rule tables are centralized here so each entry can be audited and
unit-tested on its own. Tables are wrapped in MappingProxyType so they stay
read-only for the life of the process.
"""

from types import MappingProxyType
from typing import Final, Mapping

# =============================================================================
# REP BOUNDS
# =============================================================================

MIN_REPS: Final[int] = 1  # Floor for any recommended rep count
MAX_REPS: Final[int] = 20  # Rep ceiling; reaching it triggers cycling
CYCLING_TARGET_REPS: Final[int] = 15  # Reps after cycling down from MAX_REPS

BODYWEIGHT_MIN_REPS: Final[int] = 1
BODYWEIGHT_MAX_REPS: Final[int] = 20

# =============================================================================
# EQUIPMENT INCREMENTS (kg)
# =============================================================================

EQUIPMENT_TYPES: Final[tuple[str, ...]] = (
    "BARBELL",
    "DUMBBELL",
    "CABLE",
    "MACHINE",
    "BODYWEIGHT",
)

DEFAULT_INCREMENTS: Final[Mapping[str, float]] = MappingProxyType({
    "barbell_increment": 2.5,
    "dumbbell_increment": 2.0,
    "cable_increment": 2.5,
    "machine_increment": 5.0,
})

# Equipment type → EquipmentSettings field holding its increment.
# Weighted bodyweight work (belt, vest) is loaded in dumbbell-sized steps.
INCREMENT_FIELDS: Final[Mapping[str, str]] = MappingProxyType({
    "BARBELL": "barbell_increment",
    "DUMBBELL": "dumbbell_increment",
    "CABLE": "cable_increment",
    "MACHINE": "machine_increment",
    "BODYWEIGHT": "dumbbell_increment",
})

FALLBACK_INCREMENT: Final[float] = 2.5  # Unknown equipment type

LIGHT_DUMBBELL_MAX: Final[float] = 10.0  # Inclusive upper bound of "light" dumbbells
LIGHT_DUMBBELL_INCREMENT: Final[float] = 1.0

# =============================================================================
# EXPERIENCE LEVELS
# =============================================================================

EXPERIENCE_LEVELS: Final[tuple[str, ...]] = ("BEGINNER", "INTERMEDIATE", "ADVANCED")
DEFAULT_EXPERIENCE_LEVEL: Final[str] = "BEGINNER"

# =============================================================================
# PERCENTAGE CAPS
# =============================================================================

# Max % increase per session, keyed by (is_compound, experience_level)
MAX_PERCENT_INCREASE: Final[Mapping[tuple[bool, str], float]] = MappingProxyType({
    (True, "BEGINNER"): 15.0,
    (True, "INTERMEDIATE"): 10.0,
    (True, "ADVANCED"): 7.5,
    (False, "BEGINNER"): 12.5,
    (False, "INTERMEDIATE"): 10.0,
    (False, "ADVANCED"): 7.5,
})

# Low absolute loads get proportionally more headroom: (weight below, factor)
LIGHT_LOAD_CAP_SCALING: Final[tuple[tuple[float, float], ...]] = (
    (10.0, 1.5),
    (20.0, 1.25),
)

VERY_LIGHT_DUMBBELL_MAX: Final[float] = 5.0  # Exclusive
VERY_LIGHT_DUMBBELL_MIN_PERCENT: Final[float] = 25.0  # e.g. 2 kg → 2.5 kg

# =============================================================================
# RATING TABLES
# =============================================================================

RATING_MIN: Final[int] = 1  # Very easy
RATING_MAX: Final[int] = 5  # Too hard

RATING_LABELS: Final[Mapping[int, str]] = MappingProxyType({
    1: "very easy",
    2: "easy",
    3: "moderate",
    4: "hard",
    5: "too hard",
})

TRAINING_STYLES: Final[tuple[str, ...]] = ("STRENGTH", "HYPERTROPHY")

# Weight change in increments per rating
STRENGTH_MULTIPLIERS: Final[Mapping[int, int]] = MappingProxyType({
    1: 3,
    2: 2,
    3: 1,
    4: 0,
    5: -1,
})

HYPERTROPHY_MULTIPLIERS: Final[Mapping[int, int]] = MappingProxyType({
    1: 2,
    2: 1,
    3: 1,
    4: 0,
    5: -1,
})

STYLE_MULTIPLIERS: Final[Mapping[str, Mapping[int, int]]] = MappingProxyType({
    "STRENGTH": STRENGTH_MULTIPLIERS,
    "HYPERTROPHY": HYPERTROPHY_MULTIPLIERS,
})

# Bodyweight-only movements: rep change per rating, weight untouched
BODYWEIGHT_REP_CHANGES: Final[Mapping[int, int]] = MappingProxyType({
    1: 2,
    2: 1,
    3: 1,
    4: 0,
    5: -2,
})

SPECIAL_BODYWEIGHT_EXERCISES: Final[frozenset[str]] = frozenset({
    "PULL UP",
    "CHIN UP",
    "DIP",
    "PUSH UP",
    "PUSH UP DEFICIT",
})

# =============================================================================
# VOLUME EVALUATION
# =============================================================================

CLOSE_DELTA_RATIO: Final[float] = 1.1  # Deltas within 10% count as "close"
EFFICIENCY_DOMINANCE: Final[float] = 1.5  # Efficiency ratio that breaks a close call
EASY_FALLBACK_REP_STEP: Final[int] = 2  # Rating 2 when the aggressive lever is stuck

# =============================================================================
# REP CYCLING
# =============================================================================

# Exact volume preservation from 20 → 15 reps would be 20/15 ≈ 1.333.
# (weight at or above, ratio), checked top-down
CYCLING_VOLUME_RATIOS: Final[tuple[tuple[float, float], ...]] = (
    (100.0, 1.25),
    (50.0, 1.28),
    (20.0, 1.30),
    (0.0, 1.33),
)

ADVANCED_CYCLING_DISCOUNT: Final[float] = 0.95
