"""
CLI entry point using Typer.

Provides commands for:
- exercises / show: Browse the exercise catalog
- suggest: Rank exercises for target muscle groups
- init / log-session / show-history: Manage workout history
- volume: Weekly sub-region stimulus and volume report
- plan: Calculated calorie, macro and split recommendation
"""

from .app import app
from .commands import analysis, catalog, planning, sessions  # noqa: F401  (register commands)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
