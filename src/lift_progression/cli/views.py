"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of progression results.
"""

from rich.console import Console
from rich.table import Table

from ..core.config import CYCLING_TARGET_REPS, MAX_REPS, MIN_REPS, RATING_LABELS
from ..core.models import EquipmentSettings, PerformanceRecord, ProgressionPolicy, ProgressionResult

console = Console()


def _fmt_kg(weight: float) -> str:
    return f"{weight:g} kg" if weight > 0 else "bodyweight"


def _fmt_change(old: float, new: float, unit: str) -> str:
    diff = new - old
    if diff == 0:
        return "[dim]=[/dim]"
    colour = "green" if diff > 0 else "red"
    return f"[{colour}]{diff:+g}{unit}[/{colour}]"


def format_result_table(record: PerformanceRecord, result: ProgressionResult) -> Table:
    """
    Build a last-session vs next-session table.

    Args:
        record: Performance the recommendation was computed from
        result: Engine output

    Returns:
        Rich Table
    """
    title = record.exercise_name or (f"Exercise {record.exercise_id}" if record.exercise_id is not None else "Exercise")
    table = Table(title=title)
    table.add_column("", style="bold")
    table.add_column("Last", justify="right")
    table.add_column("Next", justify="right", style="cyan")
    table.add_column("Change", justify="right")

    table.add_row(
        "Weight",
        _fmt_kg(record.weight),
        _fmt_kg(result.new_weight),
        _fmt_change(record.weight, result.new_weight, " kg"),
    )
    table.add_row(
        "Reps",
        str(record.reps),
        str(result.new_reps),
        _fmt_change(record.reps, result.new_reps, ""),
    )
    table.add_row("Sets", str(record.sets), str(record.sets), "[dim]=[/dim]")
    return table


def print_result(record: PerformanceRecord, result: ProgressionResult) -> None:
    """Print the recommendation with rating, deload and suggestion notes."""
    label = RATING_LABELS.get(record.rating)
    console.print()
    console.print(format_result_table(record, result))
    if label is None:
        print_warning(f"rating {record.rating} is outside 1-5; target left unchanged")
    else:
        console.print(f"Rating: {record.rating} ({label})")
    if result.deload:
        console.print("[yellow]Deload: last session was too hard, load reduced.[/yellow]")
    if result.suggestion is not None:
        console.print(f"[magenta]Suggestion: {result.suggestion.message}[/magenta]")
    console.print()


def format_settings_table(settings: EquipmentSettings, policy: ProgressionPolicy) -> Table:
    """Build a table of the effective engine configuration."""
    table = Table(title="Effective settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Barbell increment", f"{settings.barbell_increment:g} kg")
    table.add_row("Dumbbell increment", f"{settings.dumbbell_increment:g} kg")
    table.add_row("Cable increment", f"{settings.cable_increment:g} kg")
    table.add_row("Machine increment", f"{settings.machine_increment:g} kg")
    table.add_row("Experience level", settings.experience_level)
    table.add_row("Rep bounds", f"{MIN_REPS}-{MAX_REPS}")
    table.add_row("Cycling target reps", str(CYCLING_TARGET_REPS))
    table.add_row(
        "Compound volume negotiation",
        "on" if policy.negotiate_compound_volume else "off",
    )
    table.add_row(
        "Minimum step past the cap",
        "on" if policy.guarantee_minimum_step else "off",
    )
    return table


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
