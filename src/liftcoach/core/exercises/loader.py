"""
YAML → Exercise loader.

Loads the exercise catalog from the bundled ``src/liftcoach/exercises.yaml``.
The file holds a single ``exercises:`` list; each entry is a flat mapping
matching the Exercise schema, with ``sub_region_weights`` written as an
ordered ``region: weight`` mapping.

User overrides: ``~/.liftcoach/exercises.yaml`` uses the same layout.  An
entry whose ``id`` matches a bundled exercise replaces the keys it lists, so
only changed keys need to be listed (``sub_region_weights`` is replaced as a
whole, not merged region by region).  Entries with a new ``id`` are
appended to the catalog after the bundled ones.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # list, possibly empty
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..models import EQUIPMENT, MOVEMENT_CATEGORIES, MUSCLE_GROUPS, SubRegionWeight
from .base import Exercise

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "name",
        "movement_category",
        "primary_muscles",
        "equipment",
        "track_e1rm",
        "sub_region_weights",
    }
)


def _check_tags(values: list, valid: tuple[str, ...], name: str) -> tuple[str, ...]:
    unknown = [v for v in values if v not in valid]
    if unknown:
        raise ValueError(f"unknown {name}: {unknown}")
    return tuple(str(v) for v in values)


def exercise_from_dict(d: dict) -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    Raises ValueError if a required field is absent or a tag is not part of
    the closed vocabularies in models.py.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"Exercise missing fields: {sorted(missing)}")

    if d["movement_category"] not in MOVEMENT_CATEGORIES:
        raise ValueError(f"unknown movement_category: {d['movement_category']!r}")

    raw_weights = d["sub_region_weights"] or {}
    if not isinstance(raw_weights, dict):
        raise ValueError("sub_region_weights must be a region: weight mapping")
    for region, w in raw_weights.items():
        if isinstance(w, bool) or not isinstance(w, (int, float)):
            raise ValueError(f"weight for {region!r} must be a number, got {w!r}")
    weights = tuple(
        SubRegionWeight(region=str(region), weight=float(w))
        for region, w in raw_weights.items()
    )

    for key in ("primary_muscles", "equipment"):
        if not isinstance(d[key], list):
            raise ValueError(f"{key} must be a list, got {d[key]!r}")
    for key in ("secondary_muscles", "substitutions", "limitations"):
        if d.get(key) is not None and not isinstance(d[key], list):
            raise ValueError(f"{key} must be a list, got {d[key]!r}")

    return Exercise(
        exercise_id=str(d["id"]),
        name=str(d["name"]),
        movement_category=d["movement_category"],
        primary_muscles=_check_tags(list(d["primary_muscles"]), MUSCLE_GROUPS, "primary muscle"),
        secondary_muscles=_check_tags(
            list(d.get("secondary_muscles") or []), MUSCLE_GROUPS, "secondary muscle"
        ),
        sub_region_weights=weights,
        equipment=_check_tags(list(d["equipment"]), EQUIPMENT, "equipment"),
        is_unilateral=bool(d.get("is_unilateral", False)),
        track_e1rm=bool(d["track_e1rm"]),
        substitutions=tuple(str(s) for s in d.get("substitutions") or []),
        form_notes=str(d["form_notes"]) if d.get("form_notes") else None,
        limitations=tuple(str(x) for x in d.get("limitations") or []),
    )


def _load_yaml_file(path: Path) -> list[dict]:
    """Load the ``exercises`` list from a YAML file; warn and return [] on error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"liftcoach: ignoring {path} ({exc})", stacklevel=2)
        return []
    if not isinstance(data, dict) or not isinstance(data.get("exercises"), list):
        warnings.warn(f"liftcoach: {path} has no 'exercises' list; ignored", stacklevel=2)
        return []
    return [e for e in data["exercises"] if isinstance(e, dict)]


def get_bundled_catalog_path() -> Path:
    """Return the path of the bundled exercises.yaml."""
    # loader.py lives at src/liftcoach/core/exercises/loader.py
    return Path(__file__).parent.parent.parent / "exercises.yaml"


def get_user_catalog_path() -> Path | None:
    """Return ~/.liftcoach/exercises.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".liftcoach" / "exercises.yaml"
    return p if p.exists() else None


def merge_entries(bundled: list[dict], user: list[dict]) -> list[dict]:
    """
    Overlay user entries on bundled ones by ``id``; new ids go last.

    Overriding is per top-level key: a listed ``sub_region_weights`` mapping
    replaces the bundled one as a whole, so regions can be removed.
    """
    merged: dict[str, dict] = {}
    for entry in bundled:
        merged[str(entry.get("id"))] = entry
    for entry in user:
        key = str(entry.get("id"))
        merged[key] = {**merged[key], **entry} if key in merged else entry
    return list(merged.values())


def exercises_from_entries(entries: list[dict], source: str = "catalog") -> list[Exercise]:
    """Build Exercises from raw entries, skipping (with a warning) invalid ones."""
    result: list[Exercise] = []
    seen: set[str] = set()
    for entry in entries:
        try:
            ex = exercise_from_dict(entry)
        except (TypeError, ValueError) as exc:
            warnings.warn(
                f"liftcoach: skipping {source} exercise '{entry.get('id')}': {exc}",
                stacklevel=2,
            )
            continue
        if ex.exercise_id in seen:
            warnings.warn(
                f"liftcoach: duplicate exercise id '{ex.exercise_id}' in {source}; "
                "keeping the first",
                stacklevel=2,
            )
            continue
        seen.add(ex.exercise_id)
        result.append(ex)
    return result


def load_exercises_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> list[Exercise]:
    """Return the catalog exercises in definition order.

    Args:
        bundled_path: Catalog file (default: the bundled exercises.yaml)
        user_path: Override file (default: ~/.liftcoach/exercises.yaml if present)

    Returns:
        List of Exercise; empty if nothing valid could be loaded.
    """
    bundled = _load_yaml_file(bundled_path or get_bundled_catalog_path())
    user_file = user_path if user_path is not None else get_user_catalog_path()
    user = _load_yaml_file(user_file) if user_file is not None else []
    return exercises_from_entries(merge_entries(bundled, user))
