"""
Volume-based lever selection for hypertrophy isolation work.

Volume = sets × reps × weight. For a record below the rep ceiling there are
two one-unit levers:

  weight lever  +1 increment (capped, snapped), reps kept
  rep lever     +1 rep, weight kept

Each lever gets a volume delta against the current session and a unit
efficiency (delta per kg, or per rep). The conservative lever is the one
with the smaller positive delta. When the deltas are within
CLOSE_DELTA_RATIO of each other, the lever whose efficiency beats the other
by EFFICIENCY_DOMINANCE wins; otherwise the rep lever wins the close call.

Rating tiers then map onto the levers so neighbours always differ:

  3 (moderate)   conservative lever
  2 (easy)       aggressive lever (reps +2 if it cannot move)
  1 (very easy)  two increments; +1 rep as well when the cap collapses
                 that onto the single increment, or on compound lifts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Mapping

from .caps import snap_within_cap
from .config import (
    CLOSE_DELTA_RATIO,
    EASY_FALLBACK_REP_STEP,
    EFFICIENCY_DOMINANCE,
    HYPERTROPHY_MULTIPLIERS,
    MAX_REPS,
)
from .models import EquipmentSettings, PerformanceRecord, ProgressionResult

logger = logging.getLogger(__name__)

Lever = Literal["weight", "reps"]


@dataclass(frozen=True)
class LeverOption:
    """One candidate outcome and its volume effect."""

    lever: Lever
    new_weight: float
    new_reps: int
    volume_delta: float
    efficiency: float  # volume gained per unit (kg or rep) of change


def calculate_volume(sets: int, reps: int, weight: float) -> float:
    """Total session volume: sets × reps × weight."""
    return sets * reps * weight


def _option(record: PerformanceRecord, lever: Lever, new_weight: float, new_reps: int) -> LeverOption:
    delta = calculate_volume(record.sets, new_reps, new_weight) - record.volume
    unit_change = (new_weight - record.weight) if lever == "weight" else (new_reps - record.reps)
    efficiency = delta / unit_change if unit_change > 0 else 0.0
    return LeverOption(
        lever=lever,
        new_weight=new_weight,
        new_reps=new_reps,
        volume_delta=delta,
        efficiency=efficiency,
    )


def evaluate_levers(
    record: PerformanceRecord,
    weight_candidate: float,
    rep_candidate: int,
) -> tuple[LeverOption, LeverOption]:
    """
    Score the weight lever and the rep lever against the current volume.

    Args:
        record: Last performance
        weight_candidate: Snapped weight for the weight lever
        rep_candidate: Rep count for the rep lever

    Returns:
        (weight_option, rep_option)
    """
    return (
        _option(record, "weight", weight_candidate, record.reps),
        _option(record, "reps", record.weight, rep_candidate),
    )


def choose_lever(
    weight_option: LeverOption,
    rep_option: LeverOption,
) -> tuple[LeverOption, LeverOption]:
    """
    Rank the two levers.

    Returns:
        (conservative, aggressive)
    """
    positive = [o for o in (weight_option, rep_option) if o.volume_delta > 0]

    if not positive:
        return rep_option, weight_option
    if len(positive) == 1:
        chosen = positive[0]
    else:
        small, large = sorted(positive, key=lambda o: o.volume_delta)
        if large.volume_delta <= small.volume_delta * CLOSE_DELTA_RATIO:
            if weight_option.efficiency >= rep_option.efficiency * EFFICIENCY_DOMINANCE:
                chosen = weight_option
            elif rep_option.efficiency >= weight_option.efficiency * EFFICIENCY_DOMINANCE:
                chosen = rep_option
            else:
                chosen = rep_option
        else:
            chosen = small

    other = rep_option if chosen is weight_option else weight_option
    return chosen, other


def progress_by_volume(
    record: PerformanceRecord,
    increment: float,
    settings: EquipmentSettings | None = None,
    multipliers: Mapping[int, int] = HYPERTROPHY_MULTIPLIERS,
) -> ProgressionResult:
    """
    Pick the next target for ratings 1–3 below the rep ceiling.

    Args:
        record: Last performance (rating 1, 2 or 3)
        increment: Weight step for this equipment and load
        settings: User settings; defaults when None
        multipliers: Rating → increments table

    Returns:
        ProgressionResult for the rating's tier
    """

    def snap(proposed: float) -> float:
        return snap_within_cap(
            record.weight, proposed, record.is_compound, record.equipment_type, settings
        )

    one_step = snap(record.weight + increment * multipliers[3])
    reps_up = min(record.reps + 1, MAX_REPS)

    weight_option, rep_option = evaluate_levers(record, one_step, reps_up)
    conservative, aggressive = choose_lever(weight_option, rep_option)
    logger.debug(
        "Levers: weight %s (dV=%.1f, eff=%.1f) reps %s (dV=%.1f, eff=%.1f) -> %s",
        weight_option.new_weight,
        weight_option.volume_delta,
        weight_option.efficiency,
        rep_option.new_reps,
        rep_option.volume_delta,
        rep_option.efficiency,
        conservative.lever,
    )

    if record.rating == 3:
        return ProgressionResult(new_weight=conservative.new_weight, new_reps=conservative.new_reps)

    if aggressive.volume_delta > 0:
        easy = ProgressionResult(new_weight=aggressive.new_weight, new_reps=aggressive.new_reps)
    else:
        easy = ProgressionResult(
            new_weight=record.weight,
            new_reps=min(record.reps + EASY_FALLBACK_REP_STEP, MAX_REPS),
        )
    if record.rating == 2:
        return easy

    heavy = snap(record.weight + increment * multipliers[1])
    if heavy <= record.weight:
        # Cap leaves the weight lever no room; only reps can move
        return easy
    new_reps = record.reps
    if heavy <= one_step or record.is_compound:
        new_reps = reps_up
    return ProgressionResult(new_weight=heavy, new_reps=new_reps)
