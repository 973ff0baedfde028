"""Onboarding helpers: goal safety check, unit conversions and age."""

from dataclasses import dataclass
from datetime import date

from .config import SAFE_GAIN_KG_PER_WEEK, SAFE_LOSS_KG_PER_WEEK, round_half_up

CM_PER_INCH = 2.54
LBS_PER_KG = 2.20462


@dataclass(frozen=True)
class GoalSafety:
    safe: bool
    message: str | None = None


def is_weight_goal_safe(current_kg: float, target_kg: float, timeframe_days: float) -> GoalSafety:
    """
    Check the weekly rate implied by a weight goal.

    Losing more than 1 kg/week or gaining more than 0.5 kg/week is flagged.
    A non-positive timeframe with any weight change is always unsafe.
    """
    weight_diff = abs(target_kg - current_kg)
    weeks = timeframe_days / 7
    if weight_diff == 0:
        return GoalSafety(safe=True)
    kg_per_week = weight_diff / weeks if weeks > 0 else float("inf")

    if kg_per_week > SAFE_LOSS_KG_PER_WEEK and target_kg < current_kg:
        return GoalSafety(
            safe=False,
            message="Weight loss faster than 1kg/week may not be sustainable or healthy.",
        )
    if kg_per_week > SAFE_GAIN_KG_PER_WEEK and target_kg > current_kg:
        return GoalSafety(
            safe=False,
            message="Weight gain faster than 0.5kg/week may include excess fat gain.",
        )
    return GoalSafety(safe=True)


def feet_inches_to_cm(feet: int, inches: float) -> int:
    return round_half_up((feet * 12 + inches) * CM_PER_INCH)


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Split a height into (feet, inches), inches rounded."""
    total_inches = cm / CM_PER_INCH
    feet = int(total_inches // 12)
    inches = round_half_up(total_inches % 12)
    return feet, inches


def kg_to_lbs(kg: float) -> int:
    return round_half_up(kg * LBS_PER_KG)


def lbs_to_kg(lbs: float) -> int:
    return round_half_up(lbs / LBS_PER_KG)


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    """Age in completed years on ``today`` (default: the current date)."""
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
