"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of catalog, history and plan data.
"""

from datetime import datetime

from rich.console import Console
from rich.table import Table

from ..core.exercises import Exercise
from ..core.models import Session, WorkoutPlanResult
from ..core.suggestions import SuggestionResult
from ..core.volume import session_volume, total_completed_sets

console = Console()

_BAR_WIDTH = 30


def format_exercise_table(exercises: list[Exercise], title: str = "Exercises") -> Table:
    """
    Create a Rich table listing catalog exercises.

    Args:
        exercises: Exercises to display, in the order given

    Returns:
        Rich Table object
    """
    table = Table(title=title)

    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Primary", style="green")
    table.add_column("Secondary")
    table.add_column("Equipment")
    table.add_column("e1RM", justify="center")

    for ex in exercises:
        table.add_row(
            ex.exercise_id,
            ex.name,
            ex.movement_category,
            ", ".join(ex.primary_muscles),
            ", ".join(ex.secondary_muscles) or "-",
            ", ".join(ex.equipment),
            "✓" if ex.track_e1rm else "",
        )

    return table


def print_exercise_detail(exercise: Exercise, substitutions: list[Exercise]) -> None:
    """Print one exercise with its sub-region weights and substitutions."""
    console.print(f"[bold cyan]{exercise.name}[/bold cyan] [dim]({exercise.exercise_id})[/dim]")
    console.print(f"  Category:   {exercise.movement_category}")
    console.print(f"  Primary:    {', '.join(exercise.primary_muscles)}")
    console.print(f"  Secondary:  {', '.join(exercise.secondary_muscles) or '-'}")
    console.print(f"  Equipment:  {', '.join(exercise.equipment)}")
    console.print(f"  Unilateral: {'yes' if exercise.is_unilateral else 'no'}")
    console.print(f"  Compound:   {'yes (e1RM tracked)' if exercise.track_e1rm else 'no'}")
    if exercise.limitations:
        console.print(f"  Notes:      {', '.join(exercise.limitations)}")
    if exercise.form_notes:
        console.print(f"  Form:       {exercise.form_notes}")

    console.print("\n  [bold]Sub-region weights[/bold]")
    for w in exercise.sub_region_weights:
        console.print(f"    {w.region:<22} {w.weight:.2f}")

    if substitutions:
        console.print("\n  [bold]Substitutions[/bold]")
        for sub in substitutions:
            console.print(f"    {sub.exercise_id:<26} {sub.name}")


def format_suggestion_table(result: SuggestionResult, scores: dict[str, int]) -> Table:
    """
    Create a Rich table of ranked suggestions.

    Args:
        result: Ranked suggestions
        scores: {exercise_id: relevance score}

    Returns:
        Rich Table object
    """
    table = Table(title=f"Suggestions ({result.count})")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Compound", justify="center")

    for i, ex in enumerate(result.suggestions, 1):
        table.add_row(
            str(i),
            ex.exercise_id,
            ex.name,
            str(scores.get(ex.exercise_id, 0)),
            "✓" if ex.track_e1rm else "",
        )

    return table


def format_session_table(sessions: list[Session]) -> Table:
    """
    Create a Rich table displaying session history.

    Args:
        sessions: List of sessions to display

    Returns:
        Rich Table object
    """
    table = Table(title="Workout History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Completed", style="cyan")
    table.add_column("Exercises", style="green")
    table.add_column("Sets", justify="right")
    table.add_column("Volume", justify="right", style="bold")

    for i, session in enumerate(sessions, 1):
        completed = (
            session.completed_at.strftime("%Y-%m-%d %H:%M")
            if session.completed_at else "[yellow]in progress[/yellow]"
        )
        table.add_row(
            str(i),
            completed,
            ", ".join(ex.exercise_id for ex in session.exercises),
            str(total_completed_sets(session.exercises)),
            f"{session_volume(session.exercises):g}",
        )

    return table


def print_weekly_report(
    week_start: datetime,
    week_end: datetime,
    totals: dict[str, float],
    volume: float,
) -> None:
    """Print weekly sub-region stimulus as a horizontal bar chart."""
    console.print(
        f"[bold]Week {week_start:%Y-%m-%d} – {week_end:%Y-%m-%d}[/bold]"
        f"   volume: [bold]{volume:g}[/bold]"
    )
    if not totals:
        print_info("No completed sessions in this week.")
        return

    peak = max(totals.values()) or 1.0
    for region, value in sorted(totals.items(), key=lambda kv: kv[1], reverse=True):
        bar = "█" * max(1, round(value / peak * _BAR_WIDTH)) if value > 0 else ""
        console.print(f"  {region:<22} {value:6.2f} [green]{bar}[/green]")


def print_plan(plan: WorkoutPlanResult) -> None:
    """Print a nutrition and training plan."""
    console.print(f"[bold]Daily calories:[/bold] {plan.daily_calories} kcal")
    console.print(
        f"[bold]Macros:[/bold] protein {plan.protein} g · carbs {plan.carbs} g · fats {plan.fats} g"
    )
    console.print("[bold]Weekly split:[/bold]")
    for i, day in enumerate(plan.workout_split, 1):
        console.print(f"  Day {i}: {day}")
    console.print(f"[bold]Estimated weeks to goal:[/bold] {plan.estimated_weeks}")
    if plan.additional_notes:
        console.print(f"[dim]{plan.additional_notes}[/dim]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
