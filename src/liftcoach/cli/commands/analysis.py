"""Analysis commands: volume, e1rm."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.aggregation import week_boundaries, weekly_sub_region_totals, weekly_volume
from ...core.exercises import get_catalog
from ...core.metrics import calculate_e1rm
from ...io.serializers import ValidationError, validate_timestamp
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command()
def volume(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Any day of the week to report (default: today)"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show weekly sub-region stimulus and volume (Sunday to Saturday).
    """
    store = get_store(history_path)

    try:
        reference = validate_timestamp(date, "date") if date else datetime.now()
        sessions = store.load_sessions()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    week_start, week_end = week_boundaries(reference)
    totals = weekly_sub_region_totals(
        sessions, get_catalog().sub_region_map(), week_start, week_end
    )
    total_volume = weekly_volume(sessions, week_start, week_end)

    if json_out:
        print(json.dumps({
            "week_start": week_start.isoformat(),
            "week_end": week_end.isoformat(),
            "volume": total_volume,
            "sub_region_stimulus": {k: round(v, 4) for k, v in totals.items()},
        }, indent=2))
        return

    views.console.print()
    views.print_weekly_report(week_start, week_end, totals, total_volume)
    views.console.print()


@app.command("e1rm")
def e1rm(
    weight: Annotated[float, typer.Argument(help="Load lifted")],
    reps: Annotated[int, typer.Argument(help="Reps performed")],
    rpe: Annotated[
        Optional[float],
        typer.Option("--rpe", help="Rating of perceived exertion (1-10)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Estimate one-rep max (Epley, RPE-adjusted).
    """
    result = calculate_e1rm(weight, reps, rpe)

    if json_out:
        print(json.dumps({"e1rm": result.e1rm, "confidence": result.confidence}, indent=2))
        return

    views.console.print(
        f"e1RM: [bold]{result.e1rm:g}[/bold]  (confidence {result.confidence:.0%})"
    )
