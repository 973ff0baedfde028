"""
Deterministic nutrition and training plan.

Used as the primary path when no AI collaborator is configured and as the
fallback whenever the AI call fails or returns something unusable.  Every
function here is pure: identical inputs give identical plans.

Inputs are not validated (ages, weights and heights come from onboarding
forms that validate them).
"""

from .config import (
    ACTIVITY_BASE,
    ACTIVITY_STEPS,
    BMR_FEMALE,
    BMR_MALE,
    DEFAULT_TIMEFRAME_DAYS,
    FALLBACK_PLAN_NOTE,
    INTENSITY_ADJUSTMENT,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    KCAL_PER_KG,
    MACRO_RATIOS,
    MAX_GAIN_KG_PER_WEEK,
    MAX_LOSS_KG_PER_WEEK,
    SPLIT_HIGH_FREQUENCY,
    SPLIT_HIGH_MIN_DAYS,
    SPLIT_LOW_FREQUENCY,
    SPLIT_MID_FREQUENCY,
    SPLIT_MID_MIN_DAYS,
    STRENGTH_SURPLUS_KCAL,
    TIMEFRAME_DAYS,
    round_half_up,
)
from .models import OnboardingData, WorkoutPlanResult, normalize_goal


def calculate_bmr(weight_kg: float, height_cm: float, age: float, sex: str) -> float:
    """
    Basal metabolic rate (Harris-Benedict).

    male:     88.362 + 13.397·W + 4.799·H − 5.677·A
    non-male: 447.593 + 9.247·W + 3.098·H − 4.330·A

    Args:
        weight_kg: Body weight
        height_cm: Height
        age: Age in years
        sex: "male" selects the male formula; anything else the female one

    Returns:
        BMR in kcal/day
    """
    base, k_weight, k_height, k_age = BMR_MALE if sex == "male" else BMR_FEMALE
    return base + (k_weight * weight_kg) + (k_height * height_cm) - (k_age * age)


def activity_multiplier(frequency: int, intensity: str) -> float:
    """
    Activity factor from sessions per week and training intensity.

    1.2 base; 1.375 at >= 3 sessions, 1.55 at >= 4, 1.725 at >= 6.
    Intense adds 0.1, light subtracts 0.05.
    """
    multiplier = ACTIVITY_BASE
    for min_sessions, step in ACTIVITY_STEPS:
        if frequency >= min_sessions:
            multiplier = step
            break
    return multiplier + INTENSITY_ADJUSTMENT.get(intensity, 0.0)


def calculate_tdee(bmr: float, frequency: int, intensity: str) -> float:
    """Total daily energy expenditure: BMR × activity multiplier."""
    return bmr * activity_multiplier(frequency, intensity)


def calculate_daily_calories(
    tdee: float,
    goal: str,
    weight_difference_kg: float,
    timeframe_days: float,
) -> int:
    """
    Daily calorie target for a goal.

    The naive rate |Δweight| / weeks is capped at 1.0 kg/week for fat loss
    and 0.5 kg/week for muscle gain, then converted at 7700 kcal/kg spread
    over 7 days.  Strength adds a flat 200 kcal; other goals keep TDEE.

    A timeframe of zero days or less is treated as "as fast as allowed",
    i.e. the cap applies.

    Args:
        tdee: Total daily energy expenditure
        goal: Primary goal label (aliases accepted)
        weight_difference_kg: target − current weight
        timeframe_days: Days available to reach the target

    Returns:
        Calories per day, rounded to the nearest whole calorie
    """
    goal = normalize_goal(goal)
    weeks = timeframe_days / 7
    kg_per_week = abs(weight_difference_kg) / weeks if weeks > 0 else float("inf")

    daily_adjustment = 0.0
    if goal == "lose_fat":
        safe_kg_per_week = min(kg_per_week, MAX_LOSS_KG_PER_WEEK)
        daily_adjustment = -(safe_kg_per_week * KCAL_PER_KG) / 7
    elif goal == "build_muscle":
        safe_kg_per_week = min(kg_per_week, MAX_GAIN_KG_PER_WEEK)
        daily_adjustment = (safe_kg_per_week * KCAL_PER_KG) / 7
    elif goal == "get_stronger":
        daily_adjustment = STRENGTH_SURPLUS_KCAL

    return round_half_up(tdee + daily_adjustment)


def calculate_macros(calories: float, goal: str) -> tuple[int, int, int]:
    """
    Protein, carb and fat grams for a calorie target.

    Ratios (P/C/F): 35/40/25 for muscle or strength goals, 40/30/30 for fat
    loss, 30/40/30 otherwise.  4 kcal/g for protein and carbs, 9 kcal/g fat.

    Returns:
        (protein_g, carbs_g, fats_g), each rounded
    """
    goal = normalize_goal(goal)
    protein_ratio, carbs_ratio, fats_ratio = MACRO_RATIOS.get(
        goal, MACRO_RATIOS["general_fitness"]
    )
    return (
        round_half_up(calories * protein_ratio / KCAL_PER_G_PROTEIN),
        round_half_up(calories * carbs_ratio / KCAL_PER_G_CARBS),
        round_half_up(calories * fats_ratio / KCAL_PER_G_FAT),
    )


def generate_workout_split(frequency: int) -> list[str]:
    """
    Weekly split with exactly ``frequency`` day labels.

    Below 3 days every day is full body; 3-4 days rotate upper / lower /
    full body; 5+ days use push / pull / legs / upper / full body.  Longer
    weeks repeat the template from its start.
    """
    if frequency >= SPLIT_HIGH_MIN_DAYS:
        template = SPLIT_HIGH_FREQUENCY
    elif frequency >= SPLIT_MID_MIN_DAYS:
        template = SPLIT_MID_FREQUENCY
    else:
        template = SPLIT_LOW_FREQUENCY
    return [template[i % len(template)] for i in range(max(frequency, 0))]


def timeframe_days(timeframe: str, custom_days: int | None = None) -> int:
    """
    Number of days for a timeframe label.

    Named labels win; "custom" uses ``custom_days`` and falls back to 90
    days when it is missing.
    """
    if timeframe in TIMEFRAME_DAYS:
        return TIMEFRAME_DAYS[timeframe]
    return custom_days or DEFAULT_TIMEFRAME_DAYS


def estimated_weeks(days: float) -> int:
    """Whole weeks in ``days``, rounded."""
    return round_half_up(days / 7)


def generate_fallback_plan(data: OnboardingData) -> WorkoutPlanResult:
    """
    Build a complete plan from onboarding answers without any network call.

    Args:
        data: Onboarding answers (skipped questions carry defaults)

    Returns:
        WorkoutPlanResult with calories, macros, split and estimated weeks
    """
    days = timeframe_days(data.timeframe, data.custom_timeframe_days)

    bmr = calculate_bmr(data.current_weight_kg, data.height_cm, data.age, data.sex)
    tdee = calculate_tdee(bmr, data.training_frequency, data.training_intensity)
    weight_diff = data.target_weight_kg - data.current_weight_kg
    daily_calories = calculate_daily_calories(tdee, data.primary_goal, weight_diff, days)
    protein, carbs, fats = calculate_macros(daily_calories, data.primary_goal)

    return WorkoutPlanResult(
        daily_calories=daily_calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        workout_split=generate_workout_split(data.training_frequency),
        estimated_weeks=estimated_weeks(days),
        additional_notes=FALLBACK_PLAN_NOTE,
    )
