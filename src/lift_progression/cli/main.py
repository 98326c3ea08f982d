"""
CLI entry point using Typer.

Provides commands for progression lookups:
- next: Recommend next session's weight and reps
- round: Round a weight to a loadable increment
- defaults: Show the effective configuration
"""

from .app import app
from .commands import progression as _progression  # noqa: F401  registers commands
from .commands import settings as _settings  # noqa: F401


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
