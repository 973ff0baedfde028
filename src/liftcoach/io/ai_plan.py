"""
AI-generated onboarding plan with deterministic fallback.

The language-model client is injected as a plain callable:

    generate_text(messages, {"max_tokens": ..., "temperature": ...})
        -> {"content": str}   (or any object with a ``content`` attribute)

Its output is untrusted text.  The first-to-last brace span is parsed as
JSON and checked against the plan shape; on any failure (exception from the
client, no JSON, bad JSON, missing or mistyped fields) the failure is logged
and the deterministic plan from core.nutrition is returned instead.  Callers
never see a parse error.

Timeouts and retries belong to whoever wraps ``generate_text``.
"""

from __future__ import annotations

import hashlib
import json
import re
import time
from dataclasses import asdict
from typing import Any, Callable, Mapping

from loguru import logger

from ..core.config import AI_CACHE_TTL_SECONDS, AI_MAX_TOKENS, AI_TEMPERATURE, round_half_up
from ..core.models import OnboardingData, WorkoutPlanResult
from ..core.nutrition import generate_fallback_plan

GenerateText = Callable[[list[dict[str, str]], dict[str, Any]], Any]

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_TIMEFRAME_TEXT = {
    "1_month": "1 month",
    "3_months": "3 months",
    "6_months": "6 months",
    "1_year": "1 year",
}


class PlanParseError(ValueError):
    """Raised when an AI response does not contain a usable plan."""


class PlanCache:
    """
    In-memory TTL cache for successful AI plans.

    Keys are a sha256 of the sorted-key JSON of the inputs, so equal
    onboarding answers share an entry.  Fallback plans are never stored.
    """

    def __init__(
        self,
        ttl_seconds: float = AI_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, WorkoutPlanResult]] = {}

    @staticmethod
    def make_key(name: str, payload: Any) -> str:
        raw = json.dumps([name, payload], sort_keys=True, default=str)
        return hashlib.sha256(raw.encode()).hexdigest()

    def get(self, key: str) -> WorkoutPlanResult | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: WorkoutPlanResult) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def build_plan_messages(data: OnboardingData) -> list[dict[str, str]]:
    """Prompt messages asking the model for a JSON plan."""
    timeframe_text = _TIMEFRAME_TEXT.get(
        data.timeframe, f"{data.custom_timeframe_days} days"
    )
    goal_text = data.primary_goal.replace("_", " ")
    injuries_text = f"\nInjuries/Limitations: {data.injuries}" if data.injuries else ""

    prompt = f"""You are a certified fitness and nutrition expert. Create a personalized fitness plan for a user with the following information:

Age: {data.age} years
Gender: {data.sex}
Height: {data.height_cm} cm
Current Weight: {data.current_weight_kg} kg
Target Weight: {data.target_weight_kg} kg
Goal: {goal_text}
Timeframe: {timeframe_text}
Training Frequency: {data.training_frequency}x per week
Training Intensity: {data.training_intensity}{injuries_text}

Please provide:
1. Recommended daily calories (single number)
2. Macro breakdown in grams: Protein, Carbs, Fats
3. Weekly workout split ({data.training_frequency} workout days)
4. Estimated weeks to reach goal
5. Brief additional notes or tips

Format your response as JSON:
{{
  "dailyCalories": number,
  "protein": number,
  "carbs": number,
  "fats": number,
  "workoutSplit": ["Day 1: ...", "Day 2: ...", ...],
  "estimatedWeeks": number,
  "additionalNotes": "string"
}}"""

    return [{"role": "user", "content": prompt}]


def _number(parsed: Mapping[str, Any], key: str, *, positive: bool = False) -> int:
    value = parsed.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PlanParseError(f"'{key}' must be a number, got {value!r}")
    if value < 0 or (positive and value <= 0):
        raise PlanParseError(f"'{key}' out of range: {value!r}")
    return round_half_up(value)


def parse_plan_response(content: str) -> WorkoutPlanResult:
    """
    Extract a plan from free-text model output.

    Args:
        content: Raw text returned by the model

    Returns:
        WorkoutPlanResult built from the embedded JSON object

    Raises:
        PlanParseError: If no JSON object is found or it lacks the plan shape
    """
    if not isinstance(content, str):
        raise PlanParseError(f"Response content must be text, got {type(content).__name__}")

    match = _JSON_OBJECT.search(content)
    if not match:
        raise PlanParseError("No JSON object found in response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise PlanParseError(f"Invalid JSON in response: {e}") from e
    if not isinstance(parsed, dict):
        raise PlanParseError("Plan JSON must be an object")

    split = parsed.get("workoutSplit")
    if not isinstance(split, list) or not all(isinstance(day, str) for day in split):
        raise PlanParseError(f"'workoutSplit' must be a list of strings, got {split!r}")

    notes = parsed.get("additionalNotes")
    if notes is not None and not isinstance(notes, str):
        raise PlanParseError("'additionalNotes' must be a string")

    return WorkoutPlanResult(
        daily_calories=_number(parsed, "dailyCalories", positive=True),
        protein=_number(parsed, "protein"),
        carbs=_number(parsed, "carbs"),
        fats=_number(parsed, "fats"),
        workout_split=list(split),
        estimated_weeks=_number(parsed, "estimatedWeeks"),
        additional_notes=notes,
    )


def _response_content(response: Any) -> Any:
    if isinstance(response, Mapping):
        return response.get("content")
    return getattr(response, "content", None)


def generate_workout_plan(
    data: OnboardingData,
    generate_text: GenerateText | None = None,
    *,
    cache: PlanCache | None = None,
) -> WorkoutPlanResult:
    """
    Plan for the onboarding answers, from the AI when possible.

    Args:
        data: Onboarding answers
        generate_text: Language-model callable; None means no AI integration
        cache: Optional TTL cache for successful AI plans

    Returns:
        WorkoutPlanResult, from the model or from the fallback calculator
    """
    if generate_text is None:
        logger.debug("No AI client configured, using calculated plan")
        return generate_fallback_plan(data)

    cache_key = PlanCache.make_key("generate_workout_plan", asdict(data))
    if cache is not None:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.debug("Using cached AI plan")
            return cached

    try:
        response = generate_text(
            build_plan_messages(data),
            {"max_tokens": AI_MAX_TOKENS, "temperature": AI_TEMPERATURE},
        )
        plan = parse_plan_response(_response_content(response))
    except PlanParseError as e:
        logger.warning("AI response not in expected format, using fallback", error=str(e))
        return generate_fallback_plan(data)
    except Exception as e:
        logger.error("AI plan generation failed, using fallback", error=str(e))
        return generate_fallback_plan(data)

    if cache is not None:
        cache.set(cache_key, plan)
    logger.info("Workout plan generated via AI", daily_calories=plan.daily_calories)
    return plan
