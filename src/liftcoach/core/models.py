"""
Data models for liftcoach.

Dataclasses for logged training data, suggestion requests and onboarding
plans.  Closed vocabularies are Literal aliases paired with a tuple of valid
values used for validation.  Structural problems (unknown status, RPE out of
range) raise ValueError; numeric magnitudes such as negative loads are the
caller's responsibility and are not checked here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

MuscleGroup = Literal[
    "chest", "back", "shoulders", "biceps", "triceps", "forearms",
    "quads", "hamstrings", "glutes", "calves", "adductors",
    "core", "abs", "obliques",
]
MUSCLE_GROUPS: tuple[str, ...] = (
    "chest", "back", "shoulders", "biceps", "triceps", "forearms",
    "quads", "hamstrings", "glutes", "calves", "adductors",
    "core", "abs", "obliques",
)

SubRegion = Literal[
    "chest-upper", "chest-mid", "chest-lower",
    "back-lats", "back-upper", "back-erectors",
    "shoulders-anterior", "shoulders-lateral", "shoulders-posterior",
    "biceps", "triceps", "forearms",
    "quads", "hamstrings", "glutes", "adductors", "calves",
    "core-upper", "core-lower", "obliques",
]
SUB_REGIONS: tuple[str, ...] = (
    "chest-upper", "chest-mid", "chest-lower",
    "back-lats", "back-upper", "back-erectors",
    "shoulders-anterior", "shoulders-lateral", "shoulders-posterior",
    "biceps", "triceps", "forearms",
    "quads", "hamstrings", "glutes", "adductors", "calves",
    "core-upper", "core-lower", "obliques",
)

MovementCategory = Literal[
    "hinge", "squat", "horizontal-push", "horizontal-pull",
    "vertical-push", "vertical-pull", "carry", "core", "isolation",
]
MOVEMENT_CATEGORIES: tuple[str, ...] = (
    "hinge", "squat", "horizontal-push", "horizontal-pull",
    "vertical-push", "vertical-pull", "carry", "core", "isolation",
)

Equipment = Literal[
    "barbell", "dumbbell", "cable", "machine", "bodyweight",
    "kettlebell", "band", "smith-machine", "ez-bar",
    "trap-bar", "landmine", "suspension",
]
EQUIPMENT: tuple[str, ...] = (
    "barbell", "dumbbell", "cable", "machine", "bodyweight",
    "kettlebell", "band", "smith-machine", "ez-bar",
    "trap-bar", "landmine", "suspension",
)

SetStatus = Literal["pending", "completed", "failed", "skipped"]
SET_STATUSES: tuple[str, ...] = ("pending", "completed", "failed", "skipped")

TrainingStyle = Literal["strength", "hypertrophy", "endurance"]
TRAINING_STYLES: tuple[str, ...] = ("strength", "hypertrophy", "endurance")

Sex = Literal["male", "female", "other"]
SEXES: tuple[str, ...] = ("male", "female", "other")

TrainingIntensity = Literal["light", "moderate", "intense"]
INTENSITIES: tuple[str, ...] = ("light", "moderate", "intense")

PrimaryGoal = Literal[
    "build_muscle", "get_stronger", "lose_fat", "improve_endurance", "general_fitness",
]
PRIMARY_GOALS: tuple[str, ...] = (
    "build_muscle", "get_stronger", "lose_fat", "improve_endurance", "general_fitness",
)
# Older goal labels still produced by some onboarding flows
GOAL_ALIASES: dict[str, str] = {
    "lose_weight": "lose_fat",
    "strength_training": "get_stronger",
}

Timeframe = Literal["1_month", "3_months", "6_months", "1_year", "custom"]
TIMEFRAMES: tuple[str, ...] = ("1_month", "3_months", "6_months", "1_year", "custom")


def normalize_goal(goal: str) -> str:
    """Map a goal label (including legacy aliases) to its canonical form."""
    return GOAL_ALIASES.get(goal, goal)


@dataclass(frozen=True)
class SubRegionWeight:
    """Relative share of an exercise's stimulus attributed to one sub-region."""

    region: SubRegion
    weight: float

    def __post_init__(self) -> None:
        if self.region not in SUB_REGIONS:
            raise ValueError(f"Invalid sub-region: {self.region!r}")
        if self.weight < 0:
            raise ValueError(f"Sub-region weight must be non-negative, got {self.weight}")


@dataclass
class SetLog:
    """
    A single logged set.

    Pending sets are placeholders created when a session starts; only
    completed sets contribute to volume and stimulus.
    """

    status: SetStatus
    actual_load: float = 0.0
    actual_reps: int = 0
    target_load: float | None = None
    target_reps: int | None = None
    rpe: float | None = None  # 1-10 in half-point steps

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.status not in SET_STATUSES:
            raise ValueError(f"Invalid set status: {self.status!r}")
        if self.rpe is not None and not (1.0 <= self.rpe <= 10.0):
            raise ValueError(f"rpe must be within [1, 10], got {self.rpe}")

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


@dataclass
class SessionExercise:
    """An exercise performed in a session with its sets in performed order."""

    exercise_id: str
    sets: list[SetLog] = field(default_factory=list)


@dataclass
class Session:
    """
    A workout session.

    ``completed_at`` is None while the session is in progress.  Timestamps
    are naive local datetimes.
    """

    exercises: list[SessionExercise] = field(default_factory=list)
    completed_at: datetime | None = None
    started_at: datetime | None = None
    name: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass
class AISuggestionsConfig:
    """Request for exercise suggestions targeting a set of muscle groups."""

    muscle_groups: list[MuscleGroup]
    split_type: str = ""
    training_style: TrainingStyle | None = None
    user_history: list[str] | None = None  # Exercise IDs the user trains often

    def __post_init__(self) -> None:
        """Validate suggestion request."""
        for muscle in self.muscle_groups:
            if muscle not in MUSCLE_GROUPS:
                raise ValueError(f"Invalid muscle group: {muscle!r}")
        if self.training_style is not None and self.training_style not in TRAINING_STYLES:
            raise ValueError(f"Invalid training_style: {self.training_style!r}")


@dataclass
class OnboardingData:
    """
    Answers collected by the onboarding wizard.

    Defaults are used when a question was skipped.
    """

    age: int = 25
    sex: Sex = "male"
    height_cm: float = 170.0
    current_weight_kg: float = 70.0
    target_weight_kg: float = 70.0
    primary_goal: str = "general_fitness"
    training_frequency: int = 3
    training_intensity: TrainingIntensity = "moderate"
    timeframe: Timeframe = "3_months"
    custom_timeframe_days: int | None = None
    injuries: str | None = None

    def __post_init__(self) -> None:
        """Validate onboarding answers."""
        if self.sex not in SEXES:
            raise ValueError(f"Invalid sex: {self.sex!r}")
        if self.training_intensity not in INTENSITIES:
            raise ValueError(f"Invalid training_intensity: {self.training_intensity!r}")
        if self.timeframe not in TIMEFRAMES:
            raise ValueError(
                f"Invalid timeframe: {self.timeframe!r}. Must be one of {TIMEFRAMES}"
            )
        goal = normalize_goal(self.primary_goal)
        if goal not in PRIMARY_GOALS:
            raise ValueError(f"Invalid primary_goal: {self.primary_goal!r}")
        self.primary_goal = goal


@dataclass
class WorkoutPlanResult:
    """Nutrition targets and weekly split recommended after onboarding."""

    daily_calories: int
    protein: int
    carbs: int
    fats: int
    workout_split: list[str]
    estimated_weeks: int
    additional_notes: str | None = None

    def to_dict(self) -> dict:
        """Camel-cased dict matching the JSON shape requested from the AI."""
        d: dict = {
            "dailyCalories": self.daily_calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "workoutSplit": list(self.workout_split),
            "estimatedWeeks": self.estimated_weeks,
        }
        if self.additional_notes is not None:
            d["additionalNotes"] = self.additional_notes
        return d
