"""
YAML → typed config loader.

Loads engine defaults from progression.yaml (bundled with the package) and
optionally merges user overrides from ~/.lift-progression/progression.yaml
or an explicit path.

Usage:
    from lift_progression.core.config_loader import load_config, settings_from_config
    cfg = load_config()
    settings = settings_from_config(cfg)

If a YAML source cannot be read or parsed, a warning is issued and that
source is ignored; the Python defaults in config.py still apply.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .config import DEFAULT_EXPERIENCE_LEVEL, DEFAULT_INCREMENTS, EXPERIENCE_LEVELS
from .models import EquipmentSettings, ExerciseTransition, ProgressionPolicy
from .transitions import TransitionAdvisor

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-progression: ignoring config {path} ({exc})", stacklevel=3)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"lift-progression: ignoring config {path} (top level must be a mapping)",
            stacklevel=3,
        )
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled progression.yaml."""
    # config_loader.py lives at src/lift_progression/core/
    return Path(__file__).parent.parent / "progression.yaml"


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-progression/progression.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-progression" / "progression.yaml"
    return p if p.exists() else None


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_progression/progression.yaml
    2. User override at ~/.lift-progression/progression.yaml
    3. *path*, when given

    Returns:
        Merged dict of config sections. Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled.exists():
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        config = _deep_merge(config, _load_yaml_file(user))

    if path is not None:
        if path.exists():
            config = _deep_merge(config, _load_yaml_file(path))
        else:
            warnings.warn(f"lift-progression: config file {path} not found", stacklevel=2)

    return config


def _positive_float(raw: Any, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def settings_from_config(config: dict[str, Any]) -> EquipmentSettings:
    """
    Build EquipmentSettings from the ``equipment`` section.

    Missing, zero or malformed increments fall back to DEFAULT_INCREMENTS;
    an unknown experience level falls back to BEGINNER.
    """
    section = config.get("equipment") or {}
    increments = {
        name: _positive_float(section.get(name), default)
        for name, default in DEFAULT_INCREMENTS.items()
    }
    level = str(section.get("experience_level", DEFAULT_EXPERIENCE_LEVEL)).upper()
    if level not in EXPERIENCE_LEVELS:
        warnings.warn(
            f"lift-progression: unknown experience_level {level!r}; using {DEFAULT_EXPERIENCE_LEVEL}",
            stacklevel=2,
        )
        level = DEFAULT_EXPERIENCE_LEVEL
    return EquipmentSettings(experience_level=level, **increments)  # type: ignore[arg-type]


def policy_from_config(config: dict[str, Any]) -> ProgressionPolicy:
    """Build ProgressionPolicy from the ``policy`` section."""
    section = config.get("policy") or {}
    return ProgressionPolicy(
        negotiate_compound_volume=bool(section.get("negotiate_compound_volume", False)),
        guarantee_minimum_step=bool(section.get("guarantee_minimum_step", False)),
    )


def transitions_from_config(config: dict[str, Any]) -> TransitionAdvisor:
    """
    Build a TransitionAdvisor from the ``transitions`` list.

    Entries missing exercise_id or weight_ceiling are skipped with a warning.
    """
    entries: list[ExerciseTransition] = []
    for raw in config.get("transitions") or []:
        try:
            entries.append(
                ExerciseTransition(
                    exercise_id=raw["exercise_id"],
                    weight_ceiling=float(raw["weight_ceiling"]),
                    suggested_exercise_id=raw.get("suggested_exercise_id"),
                    message=raw.get("message"),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            warnings.warn(f"lift-progression: skipping transition {raw!r} ({exc})", stacklevel=2)
    return TransitionAdvisor(entries)
