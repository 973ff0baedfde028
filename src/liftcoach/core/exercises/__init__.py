"""
Exercise reference catalog for liftcoach.

The catalog is loaded from the bundled exercises.yaml (plus optional user
overrides) and exposed through ExerciseCatalog.
"""

from .base import Exercise
from .registry import EXERCISE_CATALOG, ExerciseCatalog, get_catalog

__all__ = [
    "Exercise",
    "ExerciseCatalog",
    "EXERCISE_CATALOG",
    "get_catalog",
]
