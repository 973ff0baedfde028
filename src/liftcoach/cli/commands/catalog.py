"""Catalog commands: exercises, show, suggest."""

import json
from typing import Annotated, Optional

import typer

from ...core.exercises import Exercise, get_catalog
from ...core.models import MUSCLE_GROUPS, AISuggestionsConfig
from ...core.suggestions import score_exercise, suggest_exercises
from .. import views
from ..app import JsonOption, app


def _exercise_to_dict(ex: Exercise) -> dict:
    return {
        "id": ex.exercise_id,
        "name": ex.name,
        "movement_category": ex.movement_category,
        "primary_muscles": list(ex.primary_muscles),
        "secondary_muscles": list(ex.secondary_muscles),
        "equipment": list(ex.equipment),
        "is_unilateral": ex.is_unilateral,
        "track_e1rm": ex.track_e1rm,
        "sub_region_weights": {w.region: w.weight for w in ex.sub_region_weights},
        "substitutions": list(ex.substitutions),
    }


@app.command()
def exercises(
    query: Annotated[
        str,
        typer.Option("--query", "-q", help="Case-insensitive name search"),
    ] = "",
    muscle: Annotated[
        Optional[str],
        typer.Option("--muscle", "-m", help="Only exercises training this muscle group"),
    ] = None,
    equipment: Annotated[
        Optional[str],
        typer.Option("--equipment", "-e", help="Only exercises using this equipment"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    List catalog exercises, optionally filtered.
    """
    catalog = get_catalog()
    found = catalog.search(query)
    if muscle is not None:
        matching = {ex.exercise_id for ex in catalog.by_muscle_group(muscle)}
        found = [ex for ex in found if ex.exercise_id in matching]
    if equipment is not None:
        matching = {ex.exercise_id for ex in catalog.by_equipment(equipment)}
        found = [ex for ex in found if ex.exercise_id in matching]

    if json_out:
        print(json.dumps([_exercise_to_dict(ex) for ex in found], indent=2))
        return

    if not found:
        views.print_info("No exercises match.")
        return
    views.console.print(views.format_exercise_table(found))


@app.command()
def show(
    exercise_id: Annotated[str, typer.Argument(help="Exercise ID or exact name")],
    json_out: JsonOption = False,
) -> None:
    """
    Show one exercise with its sub-region weights and substitutions.
    """
    catalog = get_catalog()
    ex = catalog.get_by_id(exercise_id) or catalog.get_by_name(exercise_id)
    if ex is None:
        views.print_error(f"Unknown exercise: {exercise_id}")
        raise typer.Exit(1)

    subs = catalog.substitutions_for(ex.exercise_id)

    if json_out:
        data = _exercise_to_dict(ex)
        data["resolved_substitutions"] = [s.exercise_id for s in subs]
        print(json.dumps(data, indent=2))
        return

    views.console.print()
    views.print_exercise_detail(ex, subs)
    views.console.print()


@app.command()
def suggest(
    muscles: Annotated[
        list[str],
        typer.Option("--muscle", "-m", help="Target muscle group (repeatable)"),
    ],
    split_type: Annotated[
        str,
        typer.Option("--split", help="Split label, e.g. push-pull-legs"),
    ] = "",
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="Training style: strength | hypertrophy | endurance"),
    ] = None,
    history_ids: Annotated[
        Optional[list[str]],
        typer.Option("--history-id", help="Exercise ID from your history (repeatable)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Suggest exercises for the given muscle groups.
    """
    try:
        config = AISuggestionsConfig(
            muscle_groups=list(muscles),
            split_type=split_type,
            training_style=style,  # type: ignore[arg-type]
            user_history=list(history_ids) if history_ids else None,
        )
    except ValueError as e:
        views.print_error(str(e))
        views.print_info(f"Muscle groups: {', '.join(MUSCLE_GROUPS)}")
        raise typer.Exit(1)

    result = suggest_exercises(config)
    scores = {ex.exercise_id: score_exercise(ex, config) for ex in result.suggestions}

    if json_out:
        print(json.dumps({
            "count": result.count,
            "has_compound_lifts": result.has_compound_lifts,
            "suggestions": [
                {"id": ex.exercise_id, "name": ex.name, "score": scores[ex.exercise_id]}
                for ex in result.suggestions
            ],
        }, indent=2))
        return

    if not result.suggestions:
        views.print_info("No matching exercises.")
        return
    views.console.print(views.format_suggestion_table(result, scores))
