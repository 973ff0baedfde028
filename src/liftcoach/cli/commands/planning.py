"""Planning command: plan."""

import json
from typing import Annotated, Optional

import typer

from ...core.models import OnboardingData
from ...core.nutrition import timeframe_days
from ...core.onboarding import is_weight_goal_safe
from ...io.ai_plan import generate_workout_plan
from .. import views
from ..app import JsonOption, app


@app.command()
def plan(
    weight_kg: Annotated[float, typer.Option("--weight-kg", "-w", help="Current weight in kg")] = 70.0,
    height_cm: Annotated[float, typer.Option("--height-cm", help="Height in cm")] = 170.0,
    age: Annotated[int, typer.Option("--age", "-a", help="Age in years")] = 25,
    sex: Annotated[str, typer.Option("--sex", help="male | female | other")] = "male",
    goal: Annotated[
        str,
        typer.Option(
            "--goal", "-g",
            help="build_muscle | get_stronger | lose_fat | improve_endurance | general_fitness",
        ),
    ] = "general_fitness",
    target_weight_kg: Annotated[
        Optional[float],
        typer.Option("--target-weight-kg", "-t", help="Target weight in kg (default: current)"),
    ] = None,
    frequency: Annotated[int, typer.Option("--frequency", "-f", help="Training days per week")] = 3,
    intensity: Annotated[
        str, typer.Option("--intensity", "-i", help="light | moderate | intense")
    ] = "moderate",
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", help="1_month | 3_months | 6_months | 1_year | custom"),
    ] = "3_months",
    custom_days: Annotated[
        Optional[int],
        typer.Option("--custom-days", help="Days for --timeframe custom"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Calculate daily calories, macros and a weekly split.
    """
    try:
        data = OnboardingData(
            age=age,
            sex=sex,  # type: ignore[arg-type]
            height_cm=height_cm,
            current_weight_kg=weight_kg,
            target_weight_kg=target_weight_kg if target_weight_kg is not None else weight_kg,
            primary_goal=goal,
            training_frequency=frequency,
            training_intensity=intensity,  # type: ignore[arg-type]
            timeframe=timeframe,  # type: ignore[arg-type]
            custom_timeframe_days=custom_days,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = generate_workout_plan(data)

    if json_out:
        print(json.dumps(result.to_dict(), indent=2))
        return

    safety = is_weight_goal_safe(
        data.current_weight_kg,
        data.target_weight_kg,
        timeframe_days(data.timeframe, data.custom_timeframe_days),
    )
    views.console.print()
    if not safety.safe and safety.message:
        views.print_warning(safety.message)
    views.print_plan(result)
    views.console.print()
