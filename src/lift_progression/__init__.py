"""
lift-progression: next-session weight and rep targets from a difficulty rating.

    from lift_progression import PerformanceRecord, calculate_progression

    record = PerformanceRecord(
        sets=3, reps=5, weight=100.0, rating=3,
        equipment_type="BARBELL", is_compound=True,
    )
    calculate_progression(record, "STRENGTH").new_weight   # 102.5
"""

from .core.config import DEFAULT_INCREMENTS, MAX_REPS, MIN_REPS
from .core.models import (
    DEFAULT_SETTINGS,
    EquipmentSettings,
    EquipmentType,
    ExerciseTransition,
    ExperienceLevel,
    PerformanceRecord,
    ProgressionPolicy,
    ProgressionResult,
    ProgressionSuggestion,
    TrainingStyle,
)
from .core.progression import calculate_progression, round_to_closest_increment

__all__ = [
    "calculate_progression",
    "round_to_closest_increment",
    "PerformanceRecord",
    "EquipmentSettings",
    "ProgressionPolicy",
    "ProgressionResult",
    "ProgressionSuggestion",
    "ExerciseTransition",
    "EquipmentType",
    "ExperienceLevel",
    "TrainingStyle",
    "MIN_REPS",
    "MAX_REPS",
    "DEFAULT_SETTINGS",
    "DEFAULT_INCREMENTS",
]
