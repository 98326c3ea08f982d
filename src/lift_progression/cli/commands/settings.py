"""Settings commands: defaults."""

import json

import typer

from ...core.config import CYCLING_TARGET_REPS, MAX_REPS, MIN_REPS
from ...core.config_loader import get_bundled_yaml_path, get_user_yaml_path
from ...io.serializers import ValidationError, settings_to_dict
from .. import views
from ..app import ConfigOption, ExperienceOption, JsonOption, app, get_engine_config


@app.command()
def defaults(
    experience: ExperienceOption = None,
    config_path: ConfigOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show effective increments, rep bounds and policy toggles.
    """
    try:
        settings, policy, transitions = get_engine_config(config_path, experience)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "settings": settings_to_dict(settings),
            "min_reps": MIN_REPS,
            "max_reps": MAX_REPS,
            "cycling_target_reps": CYCLING_TARGET_REPS,
            "negotiate_compound_volume": policy.negotiate_compound_volume,
            "guarantee_minimum_step": policy.guarantee_minimum_step,
            "transitions": len(transitions),
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_settings_table(settings, policy))
    user_path = get_user_yaml_path()
    views.print_info(f"Bundled config: {get_bundled_yaml_path()}")
    if user_path is not None:
        views.print_info(f"User config:    {user_path}")
    if config_path is not None:
        views.print_info(f"Extra config:   {config_path}")
    views.console.print(f"Exercise transitions configured: {len(transitions)}")
    views.console.print()
