"""
Estimated one-rep max (e1RM) metrics.

All functions are pure and typed for testability.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from .config import E1RM_CHANGE_THRESHOLD, E1RM_RECENCY_DECAY, EPLEY_DIVISOR, RPE_E1RM_ADJUSTMENT


@dataclass(frozen=True)
class E1RMResult:
    e1rm: float
    confidence: float  # 0-1, highest for 4-8 reps


def _round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def rep_range_confidence(reps: int, rpe: float | None = None) -> float:
    """
    Confidence of an e1RM estimate by rep count.

    1 rep 0.95, 2-3 reps 0.9, 4-8 reps 1.0, 9-12 reps 0.85, above 12 0.6.
    Sets above 8 reps without an RPE lose another 10%.
    """
    if reps == 1:
        confidence = 0.95
    elif 2 <= reps <= 3:
        confidence = 0.9
    elif 4 <= reps <= 8:
        confidence = 1.0
    elif 9 <= reps <= 12:
        confidence = 0.85
    elif reps > 12:
        confidence = 0.6
    else:
        confidence = 0.9

    if rpe is None and reps > 8:
        confidence *= 0.9
    return confidence


def calculate_e1rm(weight: float, reps: int, rpe: float | None = None) -> E1RMResult:
    """
    Estimate 1RM with the Epley formula.

    1RM = weight × (1 + reps / 30)

    With an RPE below 10 the estimate is scaled by 1 + (10 − RPE) × 0.025,
    crediting the reps left in reserve.

    Args:
        weight: Load lifted
        reps: Reps performed
        rpe: Rating of perceived exertion, if logged

    Returns:
        E1RMResult with e1rm rounded to 0.1
    """
    e1rm = weight * (1 + reps / EPLEY_DIVISOR)
    if rpe is not None and rpe < 10:
        e1rm *= 1 + (10 - rpe) * RPE_E1RM_ADJUSTMENT
    return E1RMResult(e1rm=_round1(e1rm), confidence=rep_range_confidence(reps, rpe))


def calculate_working_weight(e1rm: float, percent: float) -> float:
    """Load for a fraction of e1RM, rounded to 0.1."""
    return _round1(e1rm * percent)


def calculate_target_reps(weight: float, e1rm: float) -> int:
    """Reps achievable at ``weight`` by inverting Epley (at least 1)."""
    if weight >= e1rm:
        return 1
    reps = EPLEY_DIVISOR * (e1rm / weight - 1)
    return max(1, math.floor(reps + 0.5))


def percentage_of_e1rm(weight: float, e1rm: float) -> float:
    """``weight`` as a fraction of e1RM, capped at 1.0."""
    if e1rm == 0:
        return 0.0
    return min(1.0, weight / e1rm)


def average_e1rm(sets: Sequence[tuple[float, int, float | None]]) -> float:
    """
    Confidence- and recency-weighted mean e1RM.

    Each (weight, reps, rpe) set is weighted by confidence × exp(−0.1·i),
    where i is its position (0 = most recent).
    """
    if not sets:
        return 0.0

    weighted_total = 0.0
    weight_total = 0.0
    for index, (weight, reps, rpe) in enumerate(sets):
        result = calculate_e1rm(weight, reps, rpe)
        w = result.confidence * math.exp(-index * E1RM_RECENCY_DECAY)
        weighted_total += result.e1rm * w
        weight_total += w

    return _round1(weighted_total / weight_total)


def has_e1rm_changed_significantly(
    old_e1rm: float,
    new_e1rm: float,
    threshold: float = E1RM_CHANGE_THRESHOLD,
) -> bool:
    """True when the relative change reaches ``threshold`` (always True from 0)."""
    if old_e1rm == 0:
        return True
    return abs((new_e1rm - old_e1rm) / old_e1rm) >= threshold
