"""
Base type for exercise catalog entries.

Exercise is immutable: the catalog is built once from YAML and shared
read-only by every lookup, calculator and ranker.
"""

from dataclasses import dataclass

from ..models import Equipment, MovementCategory, MuscleGroup, SubRegionWeight


@dataclass(frozen=True)
class Exercise:
    """
    One catalog entry.

    ``track_e1rm`` marks compound lifts: they are eligible for estimated-1RM
    tracking and are prioritised by the suggestion ranker.
    ``substitutions`` holds ids of interchangeable exercises; it is a plain
    id list, resolved lazily by the catalog.
    """

    # Identity
    exercise_id: str                  # e.g. "bench-press"
    name: str                         # e.g. "Bench Press"
    movement_category: MovementCategory

    # Muscles
    primary_muscles: tuple[MuscleGroup, ...]
    secondary_muscles: tuple[MuscleGroup, ...]
    sub_region_weights: tuple[SubRegionWeight, ...]

    # Setup
    equipment: tuple[Equipment, ...]
    is_unilateral: bool
    track_e1rm: bool

    substitutions: tuple[str, ...] = ()
    form_notes: str | None = None
    limitations: tuple[str, ...] = ()  # e.g. "shoulder-friendly"

    def __post_init__(self) -> None:
        if not self.primary_muscles:
            raise ValueError(f"{self.exercise_id}: primary_muscles must not be empty")

    @property
    def muscles(self) -> tuple[MuscleGroup, ...]:
        """Primary followed by secondary muscles."""
        return self.primary_muscles + self.secondary_muscles
