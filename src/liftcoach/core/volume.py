"""
Volume and stimulus calculations.

All functions are pure: they never mutate their inputs.  Load and reps are
taken as given; negative values are not checked (set logging validates
input before it gets here).
"""

from datetime import datetime
from typing import Iterable, Sequence

from .config import (
    STIMULUS_BASE,
    STIMULUS_MAX,
    STIMULUS_MIN,
    STIMULUS_RPE_BONUS,
    STIMULUS_RPE_HIGH,
    STIMULUS_RPE_LOW,
    STIMULUS_RPE_PENALTY,
    STIMULUS_TOP_SET_BONUS,
    round_half_up,
)
from .models import SessionExercise, SetLog, SubRegionWeight


def set_volume(load: float, reps: float) -> float:
    """
    Volume of one set.

    volume = load × reps

    Args:
        load: Weight lifted (any unit, consistent per user)
        reps: Repetitions performed

    Returns:
        Set volume
    """
    return load * reps


def exercise_volume(sets: Iterable[SetLog]) -> float:
    """
    Total volume for one exercise: sum of set volumes over completed sets.

    Pending, failed and skipped sets contribute nothing.
    """
    total = 0
    for s in sets:
        if s.is_completed:
            total += set_volume(s.actual_load, s.actual_reps)
    return total


def session_volume(exercises: Iterable[SessionExercise]) -> float:
    """Total volume for a session."""
    return sum(exercise_volume(ex.sets) for ex in exercises)


def set_stimulus(set_log: SetLog, is_top_set: bool = False) -> float:
    """
    Stimulus score of one set.

    stimulus = clip(1.0 + top_set_bonus + rpe_adjustment, 0.8, 1.2)

    The top set earns +0.1.  RPE >= 8 earns +0.1, RPE <= 6 loses 0.1 and
    anything strictly between is neutral.  Without an RPE there is no
    adjustment.

    Args:
        set_log: Logged set
        is_top_set: Whether this is the first set of the exercise

    Returns:
        0.0 for sets that were not completed, otherwise 0.8 to 1.2
    """
    if not set_log.is_completed:
        return 0.0

    stimulus = STIMULUS_BASE

    if is_top_set:
        stimulus += STIMULUS_TOP_SET_BONUS

    if set_log.rpe is not None:
        if set_log.rpe >= STIMULUS_RPE_HIGH:
            stimulus += STIMULUS_RPE_BONUS
        elif set_log.rpe <= STIMULUS_RPE_LOW:
            stimulus -= STIMULUS_RPE_PENALTY

    return max(STIMULUS_MIN, min(STIMULUS_MAX, stimulus))


def exercise_sub_region_stimulus(
    sets: Sequence[SetLog],
    sub_region_weights: Iterable[SubRegionWeight],
) -> dict[str, float]:
    """
    Distribute an exercise's set stimulus across its sub-regions.

    For each completed set i (i == 0 is the top set):
        total[region] += set_stimulus(set_i) × weight[region]

    Args:
        sets: Sets in performed order
        sub_region_weights: (region, weight) pairs of the exercise

    Returns:
        {region: stimulus}; only regions named in the weights appear, and
        only once at least one completed set contributed.
    """
    weights = list(sub_region_weights)
    totals: dict[str, float] = {}

    for index, s in enumerate(sets):
        if not s.is_completed:
            continue
        stimulus = set_stimulus(s, is_top_set=(index == 0))
        for w in weights:
            totals[w.region] = totals.get(w.region, 0.0) + stimulus * w.weight

    return totals


# ---------------------------------------------------------------------------
# Set-log summaries
# ---------------------------------------------------------------------------


def total_completed_sets(exercises: Iterable[SessionExercise]) -> int:
    """Number of completed sets across all exercises."""
    return sum(1 for ex in exercises for s in ex.sets if s.is_completed)


def average_volume_per_set(sets: Sequence[SetLog]) -> int:
    """Mean volume per completed set, rounded; 0 if none were completed."""
    completed = [s for s in sets if s.is_completed]
    if not completed:
        return 0
    total = sum(set_volume(s.actual_load, s.actual_reps) for s in completed)
    return round_half_up(total / len(completed))


def average_intensity(sets: Sequence[SetLog]) -> int:
    """
    Mean actual load as a percentage of target load.

    Only completed sets with a positive target load are considered.

    Returns:
        Rounded percentage, 0 if no set qualifies
    """
    with_targets = [
        s for s in sets
        if s.is_completed and s.target_load is not None and s.target_load > 0
    ]
    if not with_targets:
        return 0
    total = sum(s.actual_load / s.target_load * 100 for s in with_targets)  # type: ignore[operator]
    return round_half_up(total / len(with_targets))


def was_target_met(set_log: SetLog) -> bool:
    """True when reps and load both reach their targets; sets without targets count as met."""
    if not set_log.target_reps or not set_log.target_load:
        return True
    return (
        set_log.actual_reps >= set_log.target_reps
        and set_log.actual_load >= set_log.target_load
    )


def completion_rate(sets: Sequence[SetLog]) -> int:
    """Percentage of sets that met their target (rounded); 0 for no sets."""
    if not sets:
        return 0
    met = sum(1 for s in sets if was_target_met(s))
    return round_half_up(met / len(sets) * 100)


def session_duration_minutes(started_at: datetime, completed_at: datetime) -> int:
    """Session length in whole minutes (rounded)."""
    seconds = (completed_at - started_at).total_seconds()
    return round_half_up(seconds / 60)
