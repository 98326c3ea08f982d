"""
JSON serialization for progression data models.

Handles conversion between the engine dataclasses and JSON-compatible
dicts. Both snake_case keys and the camelCase keys used by the
workout-tracking client (equipmentType, isCompound, exerciseName,
exerciseId, barbellIncrement, ...) are accepted on input.
"""

import json
from typing import Any

from ..core.config import DEFAULT_INCREMENTS, EQUIPMENT_TYPES, EXPERIENCE_LEVELS, TRAINING_STYLES
from ..core.models import EquipmentSettings, PerformanceRecord, ProgressionResult


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


_RECORD_ALIASES: dict[str, str] = {
    "equipmentType": "equipment_type",
    "isCompound": "is_compound",
    "exerciseName": "exercise_name",
    "exerciseId": "exercise_id",
}

_SETTINGS_ALIASES: dict[str, str] = {
    "barbellIncrement": "barbell_increment",
    "dumbbellIncrement": "dumbbell_increment",
    "cableIncrement": "cable_increment",
    "machineIncrement": "machine_increment",
    "experienceLevel": "experience_level",
}


def _normalize_keys(data: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    return {aliases.get(k, k): v for k, v in data.items()}


def validate_positive_int(value: Any, name: str) -> int:
    """
    Validate that a value is a positive integer.

    Raises:
        ValidationError: If value is not an int > 0 (bools rejected)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(value: Any, name: str) -> float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is not numeric or is negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return float(value)


def validate_equipment_type(equipment_type: Any) -> str:
    """
    Validate and upper-case an equipment type.

    Raises:
        ValidationError: If equipment type is not one of EQUIPMENT_TYPES
    """
    normalized = str(equipment_type).upper()
    if normalized not in EQUIPMENT_TYPES:
        raise ValidationError(
            f"Invalid equipment_type: {equipment_type}. Must be one of {EQUIPMENT_TYPES}"
        )
    return normalized


def validate_style(style: Any) -> str:
    """
    Validate and upper-case a training style.

    Raises:
        ValidationError: If style is not STRENGTH or HYPERTROPHY
    """
    normalized = str(style).upper()
    if normalized not in TRAINING_STYLES:
        raise ValidationError(f"Invalid style: {style}. Must be one of {TRAINING_STYLES}")
    return normalized


def record_from_dict(data: dict[str, Any]) -> PerformanceRecord:
    """
    Convert a dict to a PerformanceRecord.

    The rating must be an integer but is not range-checked; the engine
    answers an out-of-range rating with an unchanged target.

    Args:
        data: Dictionary with record fields

    Returns:
        PerformanceRecord

    Raises:
        ValidationError: If a field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Performance record must be an object, got {type(data).__name__}")
    d = _normalize_keys(data, _RECORD_ALIASES)

    required = ("sets", "reps", "weight", "rating", "equipment_type", "is_compound")
    missing = [k for k in required if k not in d]
    if missing:
        raise ValidationError(f"Performance record missing fields: {missing}")

    rating = d["rating"]
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"rating must be an integer, got {rating!r}")
    if not isinstance(d["is_compound"], bool):
        raise ValidationError(f"is_compound must be a boolean, got {d['is_compound']!r}")

    return PerformanceRecord(
        sets=validate_positive_int(d["sets"], "sets"),
        reps=validate_positive_int(d["reps"], "reps"),
        weight=validate_non_negative(d["weight"], "weight"),
        rating=rating,
        equipment_type=validate_equipment_type(d["equipment_type"]),  # type: ignore[arg-type]
        is_compound=d["is_compound"],
        exercise_name=str(d.get("exercise_name") or ""),
        exercise_id=d.get("exercise_id"),
    )


def record_to_dict(record: PerformanceRecord) -> dict[str, Any]:
    """Convert a PerformanceRecord to a dict."""
    return {
        "sets": record.sets,
        "reps": record.reps,
        "weight": record.weight,
        "rating": record.rating,
        "equipment_type": record.equipment_type,
        "is_compound": record.is_compound,
        "exercise_name": record.exercise_name,
        "exercise_id": record.exercise_id,
    }


def settings_from_dict(data: dict[str, Any]) -> EquipmentSettings:
    """
    Convert a dict to EquipmentSettings.

    Absent or zero increments keep the default.

    Raises:
        ValidationError: If an increment is negative/non-numeric or the
            experience level is unknown
    """
    d = _normalize_keys(data, _SETTINGS_ALIASES)
    kwargs: dict[str, Any] = {}
    for name in DEFAULT_INCREMENTS:
        if d.get(name) is not None:
            kwargs[name] = validate_non_negative(d[name], name)
    if d.get("experience_level") is not None:
        level = str(d["experience_level"]).upper()
        if level not in EXPERIENCE_LEVELS:
            raise ValidationError(
                f"Invalid experience_level: {d['experience_level']}. Must be one of {EXPERIENCE_LEVELS}"
            )
        kwargs["experience_level"] = level
    return EquipmentSettings(**kwargs)


def settings_to_dict(settings: EquipmentSettings) -> dict[str, Any]:
    """Convert EquipmentSettings to a dict."""
    return {
        "barbell_increment": settings.barbell_increment,
        "dumbbell_increment": settings.dumbbell_increment,
        "cable_increment": settings.cable_increment,
        "machine_increment": settings.machine_increment,
        "experience_level": settings.experience_level,
    }


def parse_record_json(text: str) -> PerformanceRecord:
    """
    Parse a JSON document into a PerformanceRecord.

    Raises:
        ValidationError: If the text is not valid JSON or the record is malformed
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    return record_from_dict(data)


def result_to_json(result: ProgressionResult) -> str:
    """Serialize a ProgressionResult to an indented JSON string."""
    return json.dumps(result.to_dict(), indent=2)
