"""
Exercise transition advisories.

When a lifter's recommended weight reaches a configured ceiling for an
exercise, a harder successor exercise can be suggested. This is advice
only: the engine attaches it to the result and never changes the numbers
because of it.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .models import ExerciseTransition, ProgressionSuggestion

DEFAULT_TRANSITION_MESSAGE = "Consider progressing to a more advanced exercise."

# (exercise_id, new_weight) -> suggestion or None
TransitionLookup = Callable[[int | str | None, float], ProgressionSuggestion | None]


class TransitionAdvisor:
    """Lookup table of ExerciseTransition entries keyed by exercise_id."""

    def __init__(self, transitions: Iterable[ExerciseTransition] = ()) -> None:
        self._by_id: dict[str, ExerciseTransition] = {
            str(t.exercise_id): t for t in transitions
        }

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, exercise_id: int | str | None) -> ExerciseTransition | None:
        """Return the transition configured for exercise_id, if any."""
        if exercise_id is None:
            return None
        return self._by_id.get(str(exercise_id))

    def __call__(
        self,
        exercise_id: int | str | None,
        new_weight: float,
    ) -> ProgressionSuggestion | None:
        """
        Suggest a successor exercise once new_weight reaches the ceiling.

        Args:
            exercise_id: Identity of the exercise just performed
            new_weight: Weight the engine is about to recommend

        Returns:
            CHANGE_EXERCISE suggestion, or None
        """
        transition = self.get(exercise_id)
        if transition is None or transition.suggested_exercise_id is None:
            return None
        if new_weight < transition.weight_ceiling:
            return None
        return ProgressionSuggestion(
            kind="CHANGE_EXERCISE",
            message=transition.message or DEFAULT_TRANSITION_MESSAGE,
            suggested_exercise_id=transition.suggested_exercise_id,
        )
