"""
Integration tests for calculate_progression.

Covers the worked examples for each branch, the identity answer for a bad
rating, the policy toggle for compound hypertrophy work, transition
advisories, and properties that must hold over a broad grid of inputs
(bounds, cap, monotonicity in the rating).
"""

import itertools
import logging

import pytest

from lift_progression import (
    MAX_REPS,
    MIN_REPS,
    ExerciseTransition,
    PerformanceRecord,
    ProgressionPolicy,
    ProgressionSuggestion,
    calculate_progression,
    round_to_closest_increment,
)
from lift_progression.core.caps import cap_limit
from lift_progression.core.models import DEFAULT_SETTINGS, EquipmentSettings
from lift_progression.core.transitions import DEFAULT_TRANSITION_MESSAGE, TransitionAdvisor


def _record(
    weight: float,
    reps: int,
    rating: int,
    *,
    sets: int = 3,
    equipment: str = "BARBELL",
    compound: bool = True,
    name: str = "",
    exercise_id=None,
) -> PerformanceRecord:
    return PerformanceRecord(
        sets=sets,
        reps=reps,
        weight=weight,
        rating=rating,
        equipment_type=equipment,
        is_compound=compound,
        exercise_name=name,
        exercise_id=exercise_id,
    )


def _target(result) -> tuple[float, int]:
    return result.new_weight, result.new_reps


# =============================================================================
# Worked examples
# =============================================================================

class TestWorkedExamples:

    def test_barbell_strength_moderate(self):
        result = calculate_progression(_record(100, 5, 3), "STRENGTH")
        assert _target(result) == (102.5, 5)
        assert result.deload is False
        assert result.suggestion is None

    def test_light_dumbbell_isolation_very_easy(self):
        # Cap 18.75 % → 9.5 kg; 10 kg overshoots so 9 kg, and the second
        # increment collapses onto the first so a rep is added as well.
        record = _record(8, 12, 1, equipment="DUMBBELL", compound=False)
        result = calculate_progression(record, "HYPERTROPHY")
        assert _target(result) == (9.0, 13)
        assert result.new_weight <= 8 * 1.1875

    def test_push_up_easy(self):
        record = _record(0, 10, 2, equipment="BODYWEIGHT", compound=True, name="PUSH UP")
        result = calculate_progression(record, "STRENGTH")
        assert _target(result) == (0, 11)

    def test_isolation_at_rep_ceiling_cycles(self):
        # 20 × 1.30 = 26 ideal; cap 12.5 % → 22.5
        record = _record(20, 20, 3, equipment="CABLE", compound=False)
        result = calculate_progression(record, "HYPERTROPHY")
        assert _target(result) == (22.5, 15)


# =============================================================================
# STRENGTH
# =============================================================================

class TestStrength:

    @pytest.mark.parametrize("rating,expected", [
        (1, 107.5),
        (2, 105.0),
        (3, 102.5),
        (4, 100.0),
        (5, 97.5),
    ])
    def test_rating_table(self, rating, expected):
        result = calculate_progression(_record(100, 5, rating), "STRENGTH")
        assert result.new_weight == expected
        assert result.new_reps == 5

    def test_deload_only_on_too_hard(self):
        assert calculate_progression(_record(100, 5, 5), "STRENGTH").deload is True
        assert calculate_progression(_record(100, 5, 4), "STRENGTH").deload is False

    def test_cap_binds(self):
        # +7.5 wanted; limit 46 kg → 45 kg
        result = calculate_progression(_record(40, 5, 1), "STRENGTH")
        assert result.new_weight == 45.0
        assert result.new_weight <= cap_limit(40, True, "BARBELL")

    def test_decrease_stops_at_zero(self):
        result = calculate_progression(_record(2, 5, 5), "STRENGTH")
        assert result.new_weight == 0
        assert result.deload is True

    def test_reps_clamped_to_ceiling(self):
        result = calculate_progression(_record(100, 25, 3), "STRENGTH")
        assert result.new_reps == MAX_REPS

    def test_custom_increment(self):
        settings = EquipmentSettings(barbell_increment=1.25)
        result = calculate_progression(_record(100, 5, 3), "STRENGTH", settings)
        assert result.new_weight == 101.25

    def test_experience_tightens_cap(self):
        # Advanced compound cap 7.5 % → 43 kg limit → 42.5
        settings = EquipmentSettings(experience_level="ADVANCED")
        result = calculate_progression(_record(40, 5, 1), "STRENGTH", settings)
        assert result.new_weight == 42.5

    def test_zero_weight_unlisted_exercise_stays_zero(self):
        result = calculate_progression(_record(0, 8, 1, name="BENCH PRESS"), "STRENGTH")
        assert _target(result) == (0, 8)


# =============================================================================
# HYPERTROPHY
# =============================================================================

class TestHypertrophy:

    def test_compound_uses_strength_path_by_default(self):
        result = calculate_progression(_record(100, 10, 1), "HYPERTROPHY")
        assert _target(result) == (107.5, 10)

    def test_compound_negotiates_when_enabled(self):
        policy = ProgressionPolicy(negotiate_compound_volume=True)
        very_easy = calculate_progression(_record(100, 10, 1), "HYPERTROPHY", policy=policy)
        moderate = calculate_progression(_record(100, 10, 3), "HYPERTROPHY", policy=policy)
        assert _target(very_easy) == (105.0, 11)
        assert _target(moderate) == (102.5, 10)

    @pytest.mark.parametrize("rating,expected", [
        (1, (55.0, 10)),
        (2, (50.0, 11)),
        (3, (52.5, 10)),
        (4, (50.0, 10)),
        (5, (47.5, 10)),
    ])
    def test_isolation_rating_tiers(self, rating, expected):
        record = _record(50, 10, rating, equipment="CABLE", compound=False)
        assert _target(calculate_progression(record, "HYPERTROPHY")) == expected

    def test_too_hard_deloads(self):
        record = _record(50, 10, 5, equipment="CABLE", compound=False)
        assert calculate_progression(record, "HYPERTROPHY").deload is True

    def test_ceiling_cycles_regardless_of_rating(self):
        for rating in (1, 3, 5):
            record = _record(30, 20, rating, equipment="CABLE", compound=False)
            result = calculate_progression(record, "HYPERTROPHY")
            assert _target(result) == (32.5, 15)

    def test_style_is_case_insensitive(self):
        record = _record(50, 10, 3, equipment="CABLE", compound=False)
        assert _target(calculate_progression(record, "hypertrophy")) == (52.5, 10)

    def test_cycling_raises_weight_when_cap_has_no_room(self):
        # Cap 11.5625 kg leaves no 2 kg step; reps drop only with more load
        record = _record(10, 20, 3, equipment="DUMBBELL", compound=False)
        assert _target(calculate_progression(record, "HYPERTROPHY")) == (12.0, 15)

    def test_cycling_raises_weight_for_advanced(self):
        settings = EquipmentSettings(experience_level="ADVANCED")
        record = _record(20, 20, 3, equipment="BARBELL", compound=False)
        assert _target(calculate_progression(record, "HYPERTROPHY", settings)) == (22.5, 15)


# =============================================================================
# Light loads and off-grid weights
# =============================================================================

class TestLoadableStep:

    @pytest.mark.parametrize("rating", [1, 2, 3])
    def test_light_dumbbell_plateau_by_default(self, rating):
        record = _record(10, 8, rating, equipment="DUMBBELL", compound=False)
        assert calculate_progression(record, "STRENGTH").new_weight == 10.0

    @pytest.mark.parametrize("rating", [1, 2, 3])
    def test_minimum_step_policy_breaks_plateau(self, rating):
        policy = ProgressionPolicy(guarantee_minimum_step=True)
        record = _record(10, 8, rating, equipment="DUMBBELL", compound=False)
        assert calculate_progression(record, "STRENGTH", policy=policy).new_weight == 12.0

    def test_minimum_step_policy_leaves_hold_alone(self):
        policy = ProgressionPolicy(guarantee_minimum_step=True)
        record = _record(10, 8, 4, equipment="DUMBBELL", compound=False)
        assert calculate_progression(record, "STRENGTH", policy=policy).new_weight == 10.0

    def test_off_grid_weight_snaps_to_grid(self):
        # 21 kg machine, advanced cap 22.575 kg: 25 is too far, so 20
        settings = EquipmentSettings(experience_level="ADVANCED")
        result = calculate_progression(_record(21, 8, 1, equipment="MACHINE"), "STRENGTH", settings)
        assert result.new_weight == 20.0
        assert result.new_weight % 5 == 0

    def test_off_grid_weight_moves_up_when_cap_allows(self):
        # 41 kg machine, cap 47.15 kg: +5 → 46 rounds to 45
        result = calculate_progression(_record(41, 8, 3, equipment="MACHINE"), "STRENGTH")
        assert result.new_weight == 45.0


# =============================================================================
# Bodyweight
# =============================================================================

class TestBodyweight:

    @pytest.mark.parametrize("name", ["pull up", "PULL UP", " Pull  Up "])
    def test_name_matching_is_case_insensitive(self, name):
        record = _record(0, 8, 1, equipment="BODYWEIGHT", name=name)
        assert _target(calculate_progression(record, "HYPERTROPHY")) == (0, 10)

    def test_style_does_not_matter(self):
        record = _record(0, 8, 3, equipment="BODYWEIGHT", name="DIP")
        assert calculate_progression(record, "STRENGTH") == calculate_progression(record, "HYPERTROPHY")

    def test_too_hard_drops_two_reps(self):
        record = _record(0, 8, 5, equipment="BODYWEIGHT", name="CHIN UP")
        result = calculate_progression(record, "STRENGTH")
        assert _target(result) == (0, 6)
        assert result.deload is True

    def test_weighted_pull_up_takes_weighted_path(self):
        # BODYWEIGHT equipment loads in dumbbell steps (2 kg)
        record = _record(20, 6, 3, equipment="BODYWEIGHT", name="PULL UP")
        assert _target(calculate_progression(record, "STRENGTH")) == (22.0, 6)


# =============================================================================
# Input tolerance
# =============================================================================

class TestInputTolerance:

    @pytest.mark.parametrize("rating", [0, 6, -1, 42])
    def test_invalid_rating_returns_record_unchanged(self, rating):
        result = calculate_progression(_record(100, 5, rating), "STRENGTH")
        assert _target(result) == (100, 5)
        assert result.deload is False

    def test_invalid_rating_beats_bodyweight_branch(self):
        record = _record(0, 10, 7, equipment="BODYWEIGHT", name="PUSH UP")
        assert _target(calculate_progression(record, "STRENGTH")) == (0, 10)

    def test_invalid_rating_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lift_progression.core.progression"):
            calculate_progression(_record(100, 5, 9), "STRENGTH")
        assert any("outside 1-5" in r.getMessage() for r in caplog.records)

    def test_unknown_style_treated_as_strength(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lift_progression.core.progression"):
            result = calculate_progression(_record(100, 5, 3), "POWER")
        assert _target(result) == (102.5, 5)
        assert any("Unknown training style" in r.getMessage() for r in caplog.records)

    def test_same_inputs_same_answer(self):
        record = _record(62.5, 8, 2, equipment="DUMBBELL", compound=False)
        first = calculate_progression(record, "HYPERTROPHY")
        second = calculate_progression(record, "HYPERTROPHY")
        assert first == second
        assert record.weight == 62.5


# =============================================================================
# Transitions
# =============================================================================

class TestTransitions:

    @pytest.fixture
    def advisor(self):
        return TransitionAdvisor([
            ExerciseTransition(exercise_id=12, weight_ceiling=30.0,
                               suggested_exercise_id=14, message="Switch to weighted dips."),
            ExerciseTransition(exercise_id="ohp", weight_ceiling=60.0,
                               suggested_exercise_id="push-press"),
            ExerciseTransition(exercise_id=99, weight_ceiling=10.0),
        ])

    def test_lookup(self, advisor):
        assert len(advisor) == 3
        assert advisor.get("12").suggested_exercise_id == 14
        assert advisor.get(None) is None

    def test_below_ceiling(self, advisor):
        assert advisor(12, 29.5) is None

    def test_at_ceiling(self, advisor):
        suggestion = advisor(12, 30.0)
        assert suggestion == ProgressionSuggestion(
            kind="CHANGE_EXERCISE",
            message="Switch to weighted dips.",
            suggested_exercise_id=14,
        )

    def test_id_matches_across_int_and_str(self, advisor):
        assert advisor("12", 35.0) is not None

    def test_default_message(self, advisor):
        assert advisor("ohp", 62.5).message == DEFAULT_TRANSITION_MESSAGE

    def test_no_successor_no_suggestion(self, advisor):
        assert advisor(99, 50.0) is None

    def test_unknown_exercise(self, advisor):
        assert advisor(7, 500.0) is None

    def test_ceiling_must_be_positive(self):
        with pytest.raises(ValueError):
            ExerciseTransition(exercise_id=1, weight_ceiling=0)

    def test_attached_without_changing_numbers(self, advisor):
        # 28 kg +7.5 → cap 32.2 → 30 kg, which reaches the ceiling
        record = _record(28, 5, 1, exercise_id=12)
        plain = calculate_progression(record, "STRENGTH")
        advised = calculate_progression(record, "STRENGTH", transitions=advisor)
        assert _target(plain) == _target(advised) == (30.0, 5)
        assert plain.suggestion is None
        assert advised.suggestion.suggested_exercise_id == 14

    def test_any_callable_accepted(self):
        seen = []

        def lookup(exercise_id, new_weight):
            seen.append((exercise_id, new_weight))
            return None

        calculate_progression(_record(100, 5, 3, exercise_id="sq"), "STRENGTH", transitions=lookup)
        assert seen == [("sq", 102.5)]

    def test_to_dict_includes_suggestion(self, advisor):
        result = calculate_progression(_record(28, 5, 1, exercise_id=12), "STRENGTH", transitions=advisor)
        d = result.to_dict()
        assert d["new_weight"] == 30.0
        assert d["suggestion"]["kind"] == "CHANGE_EXERCISE"


# =============================================================================
# Properties over a grid of inputs
# =============================================================================

_WEIGHTS = (0.0, 4.0, 8.0, 15.0, 60.0, 140.0)
_REPS = (1, 5, 12, 19, 20)
_EQUIPMENT = ("BARBELL", "DUMBBELL", "CABLE", "MACHINE", "BODYWEIGHT")
_STYLES = ("STRENGTH", "HYPERTROPHY")


def _grid():
    return itertools.product(_WEIGHTS, _REPS, _EQUIPMENT, (True, False), _STYLES)


class TestProperties:

    def test_bounds(self):
        for weight, reps, equipment, compound, style in _grid():
            for rating in range(1, 6):
                record = _record(weight, reps, rating, equipment=equipment, compound=compound)
                result = calculate_progression(record, style)
                assert result.new_weight >= 0, record
                assert MIN_REPS <= result.new_reps <= MAX_REPS, record

    def test_increase_never_exceeds_cap(self):
        for weight, reps, equipment, compound, style in _grid():
            if weight == 0:
                continue
            if style == "HYPERTROPHY" and not compound and reps >= MAX_REPS:
                # rep cycling always adds one increment, even past the cap
                continue
            for rating in (1, 2, 3):
                record = _record(weight, reps, rating, equipment=equipment, compound=compound)
                result = calculate_progression(record, style)
                limit = cap_limit(weight, compound, equipment, DEFAULT_SETTINGS)
                assert result.new_weight <= limit + 1e-6, record

    def test_cycling_always_raises_weight(self):
        for weight, _, equipment, _, _ in _grid():
            record = _record(weight, MAX_REPS, 3, equipment=equipment, compound=False)
            result = calculate_progression(record, "HYPERTROPHY")
            assert result.new_reps == 15
            assert result.new_weight > weight, record

    def test_very_easy_never_below_too_hard(self):
        for weight, reps, equipment, compound, style in _grid():
            easy = calculate_progression(
                _record(weight, reps, 1, equipment=equipment, compound=compound), style
            )
            hard = calculate_progression(
                _record(weight, reps, 5, equipment=equipment, compound=compound), style
            )
            assert easy.new_weight >= hard.new_weight
            assert easy.new_reps >= hard.new_reps

    def test_bodyweight_monotonic(self):
        for reps in _REPS:
            results = [
                calculate_progression(
                    _record(0, reps, rating, equipment="BODYWEIGHT", name="DIP"), "STRENGTH"
                ).new_reps
                for rating in range(1, 6)
            ]
            assert results == sorted(results, reverse=True)

    @pytest.mark.parametrize("equipment", _EQUIPMENT)
    def test_round_to_closest_increment_idempotent(self, equipment):
        for weight in (0.0, 3.3, 9.6, 11.0, 47.4, 101.3):
            once = round_to_closest_increment(weight, equipment)
            assert round_to_closest_increment(once, equipment) == once
