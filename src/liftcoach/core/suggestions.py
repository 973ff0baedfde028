"""
Exercise suggestions for a requested set of muscle groups.

Each catalog exercise is scored against the request, irrelevant ones are
dropped, the rest are ranked by score and the first compound lifts are
pulled to the front of the list.
"""

from dataclasses import dataclass, field

from .config import (
    MAX_FRONT_LOADED_COMPOUNDS,
    MAX_SUGGESTIONS,
    SCORE_COMPOUND,
    SCORE_HYPERTROPHY_DB_CABLE,
    SCORE_PRIMARY_MATCH,
    SCORE_SECONDARY_MATCH,
    SCORE_STRENGTH_BARBELL,
    SCORE_USER_HISTORY,
)
from .exercises import Exercise, ExerciseCatalog, get_catalog
from .models import AISuggestionsConfig


@dataclass
class SuggestionResult:
    """Ranked suggestions plus summary flags for display."""

    suggestions: list[Exercise] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.suggestions)

    @property
    def has_compound_lifts(self) -> bool:
        return any(ex.track_e1rm for ex in self.suggestions)


def score_exercise(exercise: Exercise, config: AISuggestionsConfig) -> int:
    """
    Relevance score of one exercise for a request.

    score = 10 × primary matches + 5 × secondary matches
            + 8 if compound (tracks e1RM)
            + 15 if in the user's history
            + 5 if strength style and barbell
            + 3 if hypertrophy style and dumbbell or cable

    Every matching muscle counts, not just the presence of a match.
    """
    wanted = set(config.muscle_groups)
    score = 0

    score += SCORE_PRIMARY_MATCH * sum(1 for m in exercise.primary_muscles if m in wanted)
    score += SCORE_SECONDARY_MATCH * sum(1 for m in exercise.secondary_muscles if m in wanted)

    if exercise.track_e1rm:
        score += SCORE_COMPOUND

    if config.user_history and exercise.exercise_id in config.user_history:
        score += SCORE_USER_HISTORY

    if config.training_style == "strength" and "barbell" in exercise.equipment:
        score += SCORE_STRENGTH_BARBELL

    if config.training_style == "hypertrophy" and (
        "dumbbell" in exercise.equipment or "cable" in exercise.equipment
    ):
        score += SCORE_HYPERTROPHY_DB_CABLE

    return score


def rank_exercises(
    config: AISuggestionsConfig,
    catalog: ExerciseCatalog | None = None,
) -> list[tuple[Exercise, int]]:
    """
    Score the catalog and sort by descending score.

    Exercises scoring 0 or less are dropped.  The sort is stable, so equal
    scores keep catalog order.
    """
    catalog = catalog if catalog is not None else get_catalog()
    scored = [(ex, score_exercise(ex, config)) for ex in catalog]
    relevant = [item for item in scored if item[1] > 0]
    relevant.sort(key=lambda item: item[1], reverse=True)
    return relevant


def suggest_exercises(
    config: AISuggestionsConfig,
    catalog: ExerciseCatalog | None = None,
) -> SuggestionResult:
    """
    Ranked exercise suggestions for the requested muscle groups.

    After ranking, the first two compound lifts are moved to the front in
    their ranked order; every other exercise (later compounds included)
    keeps its ranked position behind them.  The list is capped at 12.

    Args:
        config: Muscle groups, training style and history hints
        catalog: Catalog to rank (default: bundled catalog)

    Returns:
        SuggestionResult; empty when no muscle group was requested
    """
    if not config.muscle_groups:
        return SuggestionResult()

    compounds: list[Exercise] = []
    others: list[Exercise] = []
    for exercise, _score in rank_exercises(config, catalog):
        if exercise.track_e1rm and len(compounds) < MAX_FRONT_LOADED_COMPOUNDS:
            compounds.append(exercise)
        else:
            others.append(exercise)

    return SuggestionResult(suggestions=(compounds + others)[:MAX_SUGGESTIONS])
