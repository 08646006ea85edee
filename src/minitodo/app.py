from __future__ import annotations

from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from minitodo import storage
from minitodo.logging_utils import configure, logger
from minitodo.models import AppState
from minitodo.settings import DisplaySpec, Settings
from minitodo.tui import start_curses

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _display_spec(path: Path | None) -> DisplaySpec:
    try:
        return DisplaySpec.from_file(path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise click.BadParameter(f"Could not load display file {path}: {e}", param_hint="--display-file") from e


def main(settings: Settings) -> None:
    """Load the todo file, run the screen, save on the way out"""
    level = settings.LOG_LEVEL.upper()
    if level not in LOG_LEVELS:
        raise click.BadParameter(f"Unknown log level {settings.LOG_LEVEL!r}.", param_hint="--log-level")
    configure(level, log_file=settings.LOG_FILE, logger=logger)

    display = _display_spec(settings.DISPLAY_FILE)

    logger.info(f"Starting with data file {settings.DATA_FILE}.")
    state = AppState(todos=storage.load(settings.DATA_FILE))

    try:
        start_curses(state, display)
    finally:
        storage.save(settings.DATA_FILE, state.todos)


@click.command(help="A minimal terminal todo list.\n\nTodos are kept in a fixed-layout file in the current directory.")
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path), help="Todo file to load and save.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Log level for the log file.")
@click.option(
    "--display-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with display colors.",
)
def cli(data_file: Path | None, log_level: str | None, display_file: Path | None) -> None:
    """
    Run the todo screen

    Usage:
        uv run minitodo

        MINITODO_LOG_LEVEL=debug uv run minitodo # Enable debug logging
    """
    overrides = {
        "DATA_FILE": data_file,
        "LOG_LEVEL": log_level,
        "DISPLAY_FILE": display_file,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    main(settings)


if __name__ == "__main__":
    cli()
