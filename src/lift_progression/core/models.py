"""
Data models for lift-progression.

Frozen dataclasses for the decision engine's inputs and outputs.
Rating is deliberately not validated here: an out-of-range rating is a
well-typed input that the engine answers with an identity result.
"""

from dataclasses import dataclass
from typing import Literal

from .config import DEFAULT_INCREMENTS

EquipmentType = Literal["BARBELL", "DUMBBELL", "CABLE", "MACHINE", "BODYWEIGHT"]
TrainingStyle = Literal["STRENGTH", "HYPERTROPHY"]
ExperienceLevel = Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]
SuggestionKind = Literal["ADD_WEIGHT", "CHANGE_EXERCISE"]


@dataclass(frozen=True)
class PerformanceRecord:
    """
    The lifter's last performance of one exercise.

    weight == 0 means bodyweight only. exercise_name drives bodyweight
    allow-list matching; exercise_id is only used for transition lookups.
    """

    sets: int
    reps: int
    weight: float
    rating: int  # 1 = very easy ... 5 = too hard
    equipment_type: EquipmentType
    is_compound: bool
    exercise_name: str = ""
    exercise_id: int | str | None = None

    def __post_init__(self) -> None:
        """Validate record data."""
        if self.sets <= 0:
            raise ValueError("sets must be positive")
        if self.reps <= 0:
            raise ValueError("reps must be positive")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")

    @property
    def volume(self) -> float:
        """sets × reps × weight for this record."""
        return self.sets * self.reps * self.weight


@dataclass(frozen=True)
class EquipmentSettings:
    """
    Per-user equipment configuration.

    A zero increment means "not configured" and is replaced by the
    process-wide default when the increment is resolved.
    """

    barbell_increment: float = DEFAULT_INCREMENTS["barbell_increment"]
    dumbbell_increment: float = DEFAULT_INCREMENTS["dumbbell_increment"]
    cable_increment: float = DEFAULT_INCREMENTS["cable_increment"]
    machine_increment: float = DEFAULT_INCREMENTS["machine_increment"]
    experience_level: ExperienceLevel = "BEGINNER"


DEFAULT_SETTINGS = EquipmentSettings()


@dataclass(frozen=True)
class ProgressionPolicy:
    """
    Engine-wide behaviour toggles.

    negotiate_compound_volume: when False (default) compound lifts in the
    hypertrophy style always take the weight-only strength path. When True
    they go through the same weight-vs-reps negotiation as isolation work.

    guarantee_minimum_step: when False (default) a weight-only increase that
    the cap leaves no room for keeps the current weight (a 10 kg dumbbell
    stays at 10 kg). When True it moves up one increment instead, past the
    cap if necessary.
    """

    negotiate_compound_volume: bool = False
    guarantee_minimum_step: bool = False


DEFAULT_POLICY = ProgressionPolicy()


@dataclass(frozen=True)
class ProgressionSuggestion:
    """Advisory note attached to a result; never changes the numbers."""

    kind: SuggestionKind
    message: str
    suggested_exercise_id: int | str | None = None


@dataclass(frozen=True)
class ExerciseTransition:
    """
    A configured hand-off to a harder exercise once a weight ceiling is hit.
    """

    exercise_id: int | str
    weight_ceiling: float
    suggested_exercise_id: int | str | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.weight_ceiling <= 0:
            raise ValueError("weight_ceiling must be positive")


@dataclass(frozen=True)
class ProgressionResult:
    """Recommended target for the next session."""

    new_weight: float
    new_reps: int
    deload: bool = False
    suggestion: ProgressionSuggestion | None = None

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        d: dict = {
            "new_weight": self.new_weight,
            "new_reps": self.new_reps,
            "deload": self.deload,
        }
        if self.suggestion is not None:
            d["suggestion"] = {
                "kind": self.suggestion.kind,
                "message": self.suggestion.message,
                "suggested_exercise_id": self.suggestion.suggested_exercise_id,
            }
        return d
