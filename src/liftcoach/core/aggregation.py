"""
Weekly aggregation of sub-region stimulus.

Weeks run Sunday to Saturday in local time.  Timestamps are naive
datetimes; mixing naive and timezone-aware values is not supported.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Iterable, Mapping, Sequence

from .models import Session, SubRegionWeight
from .volume import exercise_sub_region_stimulus, session_volume


def week_boundaries(reference: date | datetime) -> tuple[datetime, datetime]:
    """
    Return the Sunday-to-Saturday week containing ``reference``.

    Args:
        reference: Any date or naive datetime

    Returns:
        (start, end) with start at Sunday 00:00:00.000 and end at
        Saturday 23:59:59.999
    """
    day = reference.date() if isinstance(reference, datetime) else reference
    # weekday(): Monday=0 … Sunday=6
    days_since_sunday = (day.weekday() + 1) % 7
    start_day = day - timedelta(days=days_since_sunday)
    start = datetime.combine(start_day, time.min)
    end = datetime.combine(start_day + timedelta(days=6), time(23, 59, 59, 999000))
    return start, end


def sessions_in_window(
    sessions: Iterable[Session],
    week_start: datetime,
    week_end: datetime,
) -> list[Session]:
    """Completed sessions whose completed_at lies in [week_start, week_end]."""
    return [
        s for s in sessions
        if s.completed_at is not None and week_start <= s.completed_at <= week_end
    ]


def weekly_sub_region_totals(
    sessions: Iterable[Session],
    sub_region_map: Mapping[str, Sequence[SubRegionWeight]],
    week_start: datetime,
    week_end: datetime,
) -> dict[str, float]:
    """
    Sum sub-region stimulus over the sessions completed within a week.

    Exercises whose id is missing from ``sub_region_map`` are skipped, so one
    unknown record never aborts the report.  Per-region totals are summed
    with math.fsum, which makes the result independent of session order.

    Args:
        sessions: Logged sessions (in-progress ones are ignored)
        sub_region_map: {exercise_id: sub-region weights}
        week_start: Inclusive window start
        week_end: Inclusive window end

    Returns:
        {region: total stimulus}
    """
    contributions: dict[str, list[float]] = {}

    for session in sessions_in_window(sessions, week_start, week_end):
        for exercise in session.exercises:
            weights = sub_region_map.get(exercise.exercise_id)
            if weights is None:
                continue
            stimulus = exercise_sub_region_stimulus(exercise.sets, weights)
            for region, value in stimulus.items():
                contributions.setdefault(region, []).append(value)

    return {region: math.fsum(values) for region, values in contributions.items()}


def weekly_volume(
    sessions: Iterable[Session],
    week_start: datetime,
    week_end: datetime,
) -> float:
    """Raw volume (load × reps) of the sessions completed within a week."""
    return sum(
        session_volume(s.exercises)
        for s in sessions_in_window(sessions, week_start, week_end)
    )
