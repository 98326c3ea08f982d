"""Progression commands: next, round."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.models import PerformanceRecord
from ...core.progression import calculate_progression, round_to_closest_increment
from ...io.serializers import (
    ValidationError,
    parse_record_json,
    record_from_dict,
    result_to_json,
    validate_equipment_type,
    validate_style,
)
from .. import views
from ..app import ConfigOption, ExperienceOption, JsonOption, app, get_engine_config


def _build_record(
    input_path: Path | None,
    sets: int,
    reps: int | None,
    weight: float | None,
    rating: int | None,
    equipment: str,
    compound: bool,
    name: str,
    exercise_id: str | None,
) -> PerformanceRecord:
    """Record from --input JSON, or from the individual options."""
    if input_path is not None:
        try:
            text = input_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Cannot read {input_path}: {e}") from e
        return parse_record_json(text)

    missing = [
        opt for opt, value in (("--reps", reps), ("--weight", weight), ("--rating", rating))
        if value is None
    ]
    if missing:
        raise ValidationError(f"Missing options: {', '.join(missing)} (or pass --input)")

    return record_from_dict({
        "sets": sets,
        "reps": reps,
        "weight": weight,
        "rating": rating,
        "equipment_type": equipment,
        "is_compound": compound,
        "exercise_name": name,
        "exercise_id": exercise_id,
    })


@app.command("next")
def next_target(
    reps: Annotated[
        Optional[int],
        typer.Option("--reps", "-r", help="Reps performed last session"),
    ] = None,
    weight: Annotated[
        Optional[float],
        typer.Option("--weight", "-w", help="Load used in kg (0 = bodyweight only)"),
    ] = None,
    rating: Annotated[
        Optional[int],
        typer.Option("--rating", "-R", help="1 very easy, 2 easy, 3 moderate, 4 hard, 5 too hard"),
    ] = None,
    sets: Annotated[
        int,
        typer.Option("--sets", "-s", help="Sets performed"),
    ] = 3,
    equipment: Annotated[
        str,
        typer.Option("--equipment", "-e", help="BARBELL, DUMBBELL, CABLE, MACHINE or BODYWEIGHT"),
    ] = "BARBELL",
    compound: Annotated[
        bool,
        typer.Option("--compound/--isolation", help="Multi-joint or single-joint movement"),
    ] = True,
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Exercise name (e.g. 'push up')"),
    ] = "",
    exercise_id: Annotated[
        Optional[str],
        typer.Option("--exercise-id", help="Exercise ID for transition suggestions"),
    ] = None,
    style: Annotated[
        str,
        typer.Option("--style", "-t", help="STRENGTH or HYPERTROPHY"),
    ] = "STRENGTH",
    input_path: Annotated[
        Optional[Path],
        typer.Option("--input", "-i", help="Read the performance record from a JSON file"),
    ] = None,
    negotiate_compound: Annotated[
        Optional[bool],
        typer.Option(
            "--negotiate-compound/--no-negotiate-compound",
            help="Let compound lifts trade weight for reps in HYPERTROPHY style",
        ),
    ] = None,
    minimum_step: Annotated[
        Optional[bool],
        typer.Option(
            "--min-step/--no-min-step",
            help="Always add one increment when the cap leaves no room",
        ),
    ] = None,
    experience: ExperienceOption = None,
    config_path: ConfigOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Recommend next session's weight and reps.
    """
    try:
        style = validate_style(style)
        record = _build_record(
            input_path, sets, reps, weight, rating, equipment, compound, name, exercise_id
        )
        settings, policy, transitions = get_engine_config(
            config_path, experience, negotiate_compound, minimum_step
        )
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = calculate_progression(
        record, style, settings, policy=policy, transitions=transitions
    )

    if json_out:
        print(result_to_json(result))
        return

    views.print_result(record, result)


@app.command("round")
def round_weight(
    weight: Annotated[float, typer.Argument(help="Weight in kg")],
    equipment: Annotated[
        str,
        typer.Option("--equipment", "-e", help="BARBELL, DUMBBELL, CABLE, MACHINE or BODYWEIGHT"),
    ] = "BARBELL",
    config_path: ConfigOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Round a weight to the nearest loadable increment.
    """
    try:
        equipment = validate_equipment_type(equipment)
        settings, _, _ = get_engine_config(config_path)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if weight < 0:
        views.print_error(f"weight must be non-negative, got {weight}")
        raise typer.Exit(1)

    rounded = round_to_closest_increment(weight, equipment, settings)

    if json_out:
        print(json.dumps({"weight": weight, "equipment_type": equipment, "rounded": rounded}, indent=2))
        return

    views.console.print(f"{weight:g} kg on {equipment.lower()} → [cyan]{rounded:g} kg[/cyan]")
