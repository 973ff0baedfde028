"""
Configuration constants for the coaching model.

All adjustable parameters are centralized here for easy tuning.
"""

import math
from typing import Final

# =============================================================================
# SET STIMULUS
# =============================================================================

STIMULUS_BASE: Final[float] = 1.0  # A completed hard set
STIMULUS_TOP_SET_BONUS: Final[float] = 0.1  # First set of an exercise in a session
STIMULUS_RPE_BONUS: Final[float] = 0.1  # Added at RPE >= STIMULUS_RPE_HIGH
STIMULUS_RPE_PENALTY: Final[float] = 0.1  # Subtracted at RPE <= STIMULUS_RPE_LOW
STIMULUS_RPE_HIGH: Final[float] = 8.0
STIMULUS_RPE_LOW: Final[float] = 6.0  # 6 < RPE < 8 is neutral
STIMULUS_MIN: Final[float] = 0.8
STIMULUS_MAX: Final[float] = 1.2

RPE_MIN: Final[float] = 1.0
RPE_MAX: Final[float] = 10.0

# =============================================================================
# EXERCISE SUGGESTION SCORING
# =============================================================================

SCORE_PRIMARY_MATCH: Final[int] = 10  # Per primary muscle in the request
SCORE_SECONDARY_MATCH: Final[int] = 5  # Per secondary muscle in the request
SCORE_COMPOUND: Final[int] = 8  # Exercise tracks e1RM
SCORE_USER_HISTORY: Final[int] = 15  # Exercise appears in the user's history
SCORE_STRENGTH_BARBELL: Final[int] = 5
SCORE_HYPERTROPHY_DB_CABLE: Final[int] = 3

MAX_FRONT_LOADED_COMPOUNDS: Final[int] = 2
MAX_SUGGESTIONS: Final[int] = 12

# =============================================================================
# ENERGY EXPENDITURE (Harris-Benedict)
# =============================================================================

BMR_MALE: Final[tuple[float, float, float, float]] = (88.362, 13.397, 4.799, 5.677)
BMR_FEMALE: Final[tuple[float, float, float, float]] = (447.593, 9.247, 3.098, 4.330)

ACTIVITY_BASE: Final[float] = 1.2  # Sedentary
# (minimum sessions per week, multiplier), checked highest first
ACTIVITY_STEPS: Final[tuple[tuple[int, float], ...]] = (
    (6, 1.725),
    (4, 1.55),
    (3, 1.375),
)
INTENSITY_ADJUSTMENT: Final[dict[str, float]] = {
    "light": -0.05,
    "moderate": 0.0,
    "intense": 0.1,
}

# =============================================================================
# CALORIE TARGET
# =============================================================================

KCAL_PER_KG: Final[float] = 7700.0
MAX_LOSS_KG_PER_WEEK: Final[float] = 1.0
MAX_GAIN_KG_PER_WEEK: Final[float] = 0.5
STRENGTH_SURPLUS_KCAL: Final[float] = 200.0

# =============================================================================
# MACROS
# =============================================================================

KCAL_PER_G_PROTEIN: Final[int] = 4
KCAL_PER_G_CARBS: Final[int] = 4
KCAL_PER_G_FAT: Final[int] = 9

# (protein, carbs, fat) fractions of daily calories
MACRO_RATIOS: Final[dict[str, tuple[float, float, float]]] = {
    "build_muscle": (0.35, 0.40, 0.25),
    "get_stronger": (0.35, 0.40, 0.25),
    "lose_fat": (0.40, 0.30, 0.30),
    "improve_endurance": (0.30, 0.40, 0.30),
    "general_fitness": (0.30, 0.40, 0.30),
}

# =============================================================================
# WEEKLY SPLIT TEMPLATES
# =============================================================================

SPLIT_LOW_FREQUENCY: Final[list[str]] = ["Full Body Workout"]
SPLIT_MID_FREQUENCY: Final[list[str]] = ["Upper Body", "Lower Body", "Full Body"]
SPLIT_HIGH_FREQUENCY: Final[list[str]] = [
    "Push (Chest, Shoulders, Triceps)",
    "Pull (Back, Biceps)",
    "Legs",
    "Upper Body",
    "Full Body",
]
SPLIT_MID_MIN_DAYS: Final[int] = 3
SPLIT_HIGH_MIN_DAYS: Final[int] = 5

# =============================================================================
# TIMEFRAMES
# =============================================================================

TIMEFRAME_DAYS: Final[dict[str, int]] = {
    "1_month": 30,
    "3_months": 90,
    "6_months": 180,
    "1_year": 365,
}
DEFAULT_TIMEFRAME_DAYS: Final[int] = 90

FALLBACK_PLAN_NOTE: Final[str] = "Plan generated using standard fitness calculations."

# =============================================================================
# WEIGHT-GOAL SAFETY
# =============================================================================

SAFE_LOSS_KG_PER_WEEK: Final[float] = 1.0
SAFE_GAIN_KG_PER_WEEK: Final[float] = 0.5

# =============================================================================
# ESTIMATED 1RM (Epley)
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0
RPE_E1RM_ADJUSTMENT: Final[float] = 0.025  # Per RPE point below 10
E1RM_RECENCY_DECAY: Final[float] = 0.1
E1RM_CHANGE_THRESHOLD: Final[float] = 0.025

# =============================================================================
# AI PLAN COLLABORATOR
# =============================================================================

AI_MAX_TOKENS: Final[int] = 2048
AI_TEMPERATURE: Final[float] = 0.7
AI_CACHE_TTL_SECONDS: Final[float] = 60 * 60


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward +infinity.

    Matches the rounding used for displayed calorie, gram and percentage
    values (Python's built-in round() uses banker's rounding instead).
    """
    return math.floor(value + 0.5)
