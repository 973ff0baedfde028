"""Session commands: init, log-session, show-history, delete-record."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.exercises import get_catalog
from ...core.models import Session, SessionExercise
from ...core.volume import session_volume
from ...io.serializers import ValidationError, parse_sets_string, session_to_dict, validate_timestamp
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_store


@app.command()
def init(history_path: HistoryPathOption = None) -> None:
    """
    Create an empty history file.
    """
    store = get_store(history_path)
    if store.exists():
        views.print_info(f"History already exists: {store.history_path}")
        return
    store.init()
    views.print_success(f"Created {store.history_path}")


@app.command("log-session")
def log_session(
    exercise_ids: Annotated[
        list[str],
        typer.Option("--exercise", "-e", help="Exercise ID (repeatable, paired with --sets)"),
    ],
    sets: Annotated[
        list[str],
        typer.Option("--sets", "-s", help="Sets for the matching --exercise, e.g. 100x5,100x5@9,skip"),
    ],
    completed_at: Annotated[
        Optional[str],
        typer.Option("--completed-at", "-c", help="Completion time (ISO, default: now)"),
    ] = None,
    started_at: Annotated[
        Optional[str],
        typer.Option("--started-at", help="Start time (ISO)"),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Workout name"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log a completed workout session.

      liftcoach log-session -e bench-press -s "100x5,100x5@9,skip" \\
        -e barbell-row -s "80x8x3"
    """
    store = get_store(history_path)

    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create the history file.")
        raise typer.Exit(1)

    if len(exercise_ids) != len(sets):
        views.print_error(
            f"Got {len(exercise_ids)} --exercise and {len(sets)} --sets options; "
            "give one --sets per --exercise."
        )
        raise typer.Exit(1)

    try:
        exercises = [
            SessionExercise(exercise_id=ex_id, sets=parse_sets_string(sets_str))
            for ex_id, sets_str in zip(exercise_ids, sets)
        ]
        finished = validate_timestamp(completed_at, "completed_at") if completed_at else datetime.now()
        started = validate_timestamp(started_at, "started_at") if started_at else None
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    catalog = get_catalog()
    for ex_id in exercise_ids:
        if ex_id not in catalog:
            views.print_warning(f"'{ex_id}' is not in the catalog; it will not count toward stimulus.")

    session = Session(exercises=exercises, completed_at=finished, started_at=started, name=name)
    try:
        store.append_session(session)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(session_to_dict(session), indent=2))
        return

    views.print_success(
        f"Logged {len(exercises)} exercise(s), volume {session_volume(exercises):g}"
    )


@app.command("show-history")
def show_history(
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display workout history.
    """
    store = get_store(history_path)

    try:
        sessions = store.load_sessions()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([session_to_dict(s) for s in sessions], indent=2))
        return

    if not sessions:
        views.print_info("No sessions logged yet.")
        return
    views.console.print(views.format_session_table(sessions))


@app.command("delete-record")
def delete_record(
    record_id: Annotated[int, typer.Argument(help="Session # as shown by show-history")],
    history_path: HistoryPathOption = None,
) -> None:
    """
    Delete a session by its number in show-history.
    """
    store = get_store(history_path)
    try:
        store.delete_session_at(record_id - 1)
    except (FileNotFoundError, ValidationError, IndexError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(f"Deleted session #{record_id}")
