#!/usr/bin/env python3
"""
workout-cycle CLI.

Next-workout recommendations and session statistics from the terminal.

Usage:
    workout-cycle next --plan Push Pull Legs   # What to train next
    workout-cycle complete 1                   # Mark plan day 1 as done
    workout-cycle status                       # Cycle statistics
    workout-cycle reset                        # Start the cycle over
    workout-cycle stats session.json           # Stats for an exercise list
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .cycle.service import CycleService, create_cycle_service
from .exceptions import WorkoutCycleError
from .models.cycle import SuggestedIntensity
from .stats.calculator import compute_workout_stats

console = Console()

INTENSITY_STYLES = {
    SuggestedIntensity.NORMAL: "green",
    SuggestedIntensity.LIGHT: "yellow",
    SuggestedIntensity.CATCHUP: "magenta",
}


def configure_logging(level: str) -> None:
    """Send log records through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


async def cmd_next(args, service: CycleService) -> None:
    """Show the next workout recommendation."""
    rec = await service.get_next_workout_recommendation(args.plan)
    style = INTENSITY_STYLES.get(rec.suggested_intensity, "white")

    body = (
        f"[bold]{rec.workout_name}[/bold] (day {rec.workout_index + 1})\n\n"
        f"{rec.reason}\n\n"
        f"Intensity: [{style}]{rec.suggested_intensity.value}[/{style}]\n"
        f"Progression: {'regular' if rec.is_regular_progression else 'adjusted'}\n"
        f"[dim]Days since last workout: {rec.days_since_last_workout}[/dim]"
    )
    console.print(Panel(body, title="Next Workout", border_style=style))


async def cmd_complete(args, service: CycleService) -> None:
    """Mark a plan day as completed."""
    await service.update_workout_completed(args.index)
    stats = await service.get_cycle_statistics()
    console.print(
        f"[green]Recorded.[/green] Week {stats.current_week}, "
        f"{stats.total_workouts} workout(s) completed."
    )


async def cmd_status(args, service: CycleService) -> None:
    """Show cycle statistics."""
    stats = await service.get_cycle_statistics()

    table = Table(title="Workout Cycle", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Current week", str(stats.current_week))
    table.add_row("Workouts completed", str(stats.total_workouts))
    table.add_row("Days in program", str(stats.days_in_program))
    table.add_row("Consistency", f"{stats.consistency}%")
    console.print(table)


async def cmd_reset(args, service: CycleService) -> None:
    """Reset the workout cycle."""
    await service.reset_workout_cycle()
    console.print("[yellow]Workout cycle reset.[/yellow]")


def cmd_stats(args) -> None:
    """Compute statistics for an exercise list stored as JSON."""
    path = Path(args.file)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise SystemExit(1)

    exercises = payload.get("exercises", []) if isinstance(payload, dict) else payload
    stats = compute_workout_stats(exercises)

    table = Table(title=f"Workout Stats - {path.name}", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Exercises", f"{stats.completed_exercises}/{stats.total_exercises}")
    table.add_row("Sets", f"{stats.completed_sets}/{stats.total_sets}")
    table.add_row("Progress", f"{stats.progress_percentage}%")
    table.add_row("Total volume", f"{stats.total_volume:,.1f}")
    table.add_row("Total reps", f"{stats.total_reps:g}")
    table.add_row("Avg volume / set", f"{stats.average_volume_per_set:,.2f}")
    table.add_row("Avg reps / set", f"{stats.average_reps_per_set:.2f}")
    table.add_row("Personal records", str(stats.personal_records))
    table.add_row("Time (s)", f"{stats.time_to_complete:g}")
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout-cycle",
        description="workout-cycle - weekly split progression and session stats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  workout-cycle next --plan Push Pull Legs
  workout-cycle complete 0
  workout-cycle status
  workout-cycle reset
  workout-cycle stats session.json
        """,
    )
    parser.add_argument("--db", type=str, help="Path to the SQLite database")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, ...)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    next_p = subparsers.add_parser("next", help="Recommend the next workout")
    next_p.add_argument(
        "--plan", "-p", nargs="*", default=None,
        help="Weekly plan as ordered day names (default split if omitted)",
    )

    complete_p = subparsers.add_parser("complete", help="Mark a plan day as completed")
    complete_p.add_argument("index", type=int, help="Zero-based index into the weekly plan")

    subparsers.add_parser("status", help="Show cycle statistics")
    subparsers.add_parser("reset", help="Reset the workout cycle")

    stats_p = subparsers.add_parser("stats", help="Compute stats for an exercise list JSON file")
    stats_p.add_argument("file", type=str, help="JSON file with a list of exercises")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.db:
        overrides["db_path"] = Path(args.db)
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    if args.command == "stats":
        cmd_stats(args)
        return

    commands = {
        "next": cmd_next,
        "complete": cmd_complete,
        "status": cmd_status,
        "reset": cmd_reset,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return

    try:
        service = create_cycle_service(settings)
    except WorkoutCycleError as e:
        console.print(f"[red]{e.message}[/red]")
        raise SystemExit(1)
    asyncio.run(handler(args, service))


if __name__ == "__main__":
    main()
