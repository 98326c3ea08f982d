"""
Rep-only progression for load-free bodyweight movements.

Only named movements on SPECIAL_BODYWEIGHT_EXERCISES qualify, and only when
no external load is used. Equipment type is not consulted: a weighted pull-up
logged as BODYWEIGHT equipment with a 10 kg belt takes the weighted path.
"""

import logging

from .config import (
    BODYWEIGHT_MAX_REPS,
    BODYWEIGHT_MIN_REPS,
    BODYWEIGHT_REP_CHANGES,
    RATING_MAX,
    SPECIAL_BODYWEIGHT_EXERCISES,
)
from .models import PerformanceRecord, ProgressionResult

logger = logging.getLogger(__name__)


def normalize_exercise_name(name: str) -> str:
    """Upper-case and collapse whitespace: ' push  up ' → 'PUSH UP'."""
    return " ".join(name.split()).upper()


def is_special_bodyweight_exercise(name: str) -> bool:
    """Return True if name is on the bodyweight allow-list (case-insensitive)."""
    return normalize_exercise_name(name) in SPECIAL_BODYWEIGHT_EXERCISES


def is_load_free_bodyweight(record: PerformanceRecord) -> bool:
    """
    Precondition for the bodyweight rule table.

    True when the record carries no external load AND names an
    allow-listed movement.
    """
    return record.weight == 0 and is_special_bodyweight_exercise(record.exercise_name)


def progress_bodyweight(record: PerformanceRecord) -> ProgressionResult:
    """
    Apply the bodyweight rep table.

    very easy +2, easy +1, moderate +1, hard 0, too hard −2;
    clamped to [1, 20]. Weight is returned unchanged.

    Args:
        record: A record for which is_load_free_bodyweight() holds

    Returns:
        ProgressionResult with the same weight and adjusted reps
    """
    change = BODYWEIGHT_REP_CHANGES.get(record.rating, 0)
    new_reps = max(BODYWEIGHT_MIN_REPS, min(BODYWEIGHT_MAX_REPS, record.reps + change))
    logger.debug(
        "Bodyweight progression: %s reps %s -> %s (rating=%s)",
        record.exercise_name,
        record.reps,
        new_reps,
        record.rating,
    )
    return ProgressionResult(
        new_weight=record.weight,
        new_reps=new_reps,
        deload=record.rating == RATING_MAX and new_reps < record.reps,
    )
