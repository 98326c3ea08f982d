"""Shared Typer app object, shared option types, and config utility."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..core.config_loader import load_config, policy_from_config, settings_from_config, transitions_from_config
from ..core.models import EquipmentSettings, ProgressionPolicy
from ..core.transitions import TransitionAdvisor
from ..io.serializers import settings_from_dict

# Shared --config option type used across all commands
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="YAML file merged over the bundled and user config"),
]

ExperienceOption = Annotated[
    Optional[str],
    typer.Option("--experience", "-x", help="BEGINNER, INTERMEDIATE or ADVANCED (overrides config)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-progression",
    help="Next-session weight and rep targets from a difficulty rating.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every progression decision"),
    ] = False,
) -> None:
    """
    Progressive-overload calculator for a single exercise.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Route library logging through Rich on stderr.
    """
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        root.setLevel(level)
        return
    root.setLevel(level)
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)


def get_engine_config(
    config_path: Path | None,
    experience: str | None = None,
    negotiate_compound: bool | None = None,
    minimum_step: bool | None = None,
) -> tuple[EquipmentSettings, ProgressionPolicy, TransitionAdvisor]:
    """
    Load settings, policy and transitions, then apply command-line overrides.

    Raises:
        ValidationError: If an override is invalid
    """
    cfg = load_config(config_path)
    settings = settings_from_config(cfg)
    policy = policy_from_config(cfg)

    if experience is not None:
        level = settings_from_dict({"experience_level": experience}).experience_level
        settings = replace(settings, experience_level=level)
    if negotiate_compound is not None:
        policy = replace(policy, negotiate_compound_volume=negotiate_compound)
    if minimum_step is not None:
        policy = replace(policy, guarantee_minimum_step=minimum_step)

    return settings, policy, transitions_from_config(cfg)

