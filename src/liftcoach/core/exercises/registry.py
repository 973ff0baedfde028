"""
Exercise catalog.

The default catalog is built from YAML at import time.  If no exercise can
be loaded, a RuntimeError is raised; nothing else in liftcoach works
without a catalog.

Lookups never raise for unknown ids or names: they return None (or an
empty list) and callers decide what "not found" means for them.
"""

from __future__ import annotations

from typing import Iterable

from ..models import SubRegionWeight
from .base import Exercise


class ExerciseCatalog:
    """
    Read-only collection of exercises in definition order.

    Every query preserves that order, so search results and ranking
    tie-breaks are deterministic for a fixed catalog.
    """

    def __init__(self, exercises: Iterable[Exercise]):
        self._exercises: tuple[Exercise, ...] = tuple(exercises)
        self._by_id: dict[str, Exercise] = {}
        for ex in self._exercises:
            self._by_id.setdefault(ex.exercise_id, ex)

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self):
        return iter(self._exercises)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        return self._exercises

    def get_by_id(self, exercise_id: str) -> Exercise | None:
        """Return the exercise with this id, or None."""
        return self._by_id.get(exercise_id)

    def get_by_name(self, name: str) -> Exercise | None:
        """Return the first exercise whose name equals ``name`` ignoring case."""
        wanted = name.lower()
        for ex in self._exercises:
            if ex.name.lower() == wanted:
                return ex
        return None

    def search(self, query: str) -> list[Exercise]:
        """
        Case-insensitive substring search on exercise names.

        An empty query matches every exercise.
        """
        needle = query.lower()
        return [ex for ex in self._exercises if needle in ex.name.lower()]

    def by_muscle_group(self, muscle: str) -> list[Exercise]:
        """Exercises that train ``muscle`` as a primary or secondary muscle."""
        return [
            ex for ex in self._exercises
            if muscle in ex.primary_muscles or muscle in ex.secondary_muscles
        ]

    def by_equipment(self, equipment: str) -> list[Exercise]:
        return [ex for ex in self._exercises if equipment in ex.equipment]

    def substitutions_for(self, exercise_id: str) -> list[Exercise]:
        """
        Resolve the substitution ids of an exercise.

        Ids that are not in the catalog are dropped; an unknown
        ``exercise_id`` yields an empty list.
        """
        ex = self.get_by_id(exercise_id)
        if ex is None:
            return []
        resolved = (self.get_by_id(sub_id) for sub_id in ex.substitutions)
        return [sub for sub in resolved if sub is not None]

    def all_muscle_groups(self) -> list[str]:
        """Every muscle group used by the catalog, in first-seen order."""
        seen: dict[str, None] = {}
        for ex in self._exercises:
            for muscle in ex.primary_muscles + ex.secondary_muscles:
                seen.setdefault(muscle, None)
        return list(seen)

    def exercise_names(self) -> list[str]:
        """Alphabetically sorted exercise names."""
        return sorted(ex.name for ex in self._exercises)

    def sub_region_map(self) -> dict[str, tuple[SubRegionWeight, ...]]:
        """Mapping of exercise id to sub-region weights, for weekly aggregation."""
        return {ex.exercise_id: ex.sub_region_weights for ex in self._exercises}


def _build_catalog() -> ExerciseCatalog:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "liftcoach: no exercise definitions could be loaded from YAML. "
            "Check that src/liftcoach/exercises.yaml is present and valid."
        )
    return ExerciseCatalog(loaded)


EXERCISE_CATALOG: ExerciseCatalog = _build_catalog()


def get_catalog() -> ExerciseCatalog:
    """Return the default catalog."""
    return EXERCISE_CATALOG
