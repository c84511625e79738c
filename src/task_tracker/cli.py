"""Command-line interface for the task tracker."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from .app import Tracker
from .config import ConfigModel, load_config, resolve_config_path
from .exceptions import StorageError
from .messages import FAREWELL, GREETING, format_result, format_warning
from .storage import Storage

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
BYE_COMMAND = "bye"
PROMPT = "> "


def setup_logging(verbose: bool):
    """Configure root logging; debug output only when asked for."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def open_tracker(config: ConfigModel, console: Console) -> Tracker:
    """Open a session on the configured save file and show startup warnings."""
    tracker = Tracker.open(Storage(config.get_save_path()))
    for warning in tracker.startup_warnings:
        console.print(format_warning(warning))
    return tracker


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--data-dir", envvar="TASK_TRACKER_DATA_DIR", type=click.Path(file_okay=False),
              help="Directory holding the save file (default: ./data)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config_path, data_dir, verbose):
    """Task Tracker - keep todos, deadlines and events from the command line."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    config = load_config(config_path, data_dir)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = resolve_config_path(config_path, data_dir)
    ctx.obj["console"] = Console(no_color=config.no_color, highlight=False,
                                 emoji=False, soft_wrap=True)

    # Without a subcommand, drop into the interactive loop
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
@click.pass_context
def shell(ctx):
    """Start the interactive command loop."""
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    tracker = open_tracker(config, console)
    if config.show_banner:
        console.print(Panel.fit(GREETING, title="Task Tracker"))

    while True:
        try:
            line = console.input(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not line:
            continue
        if line == BYE_COMMAND:
            break
        result = tracker.execute(line)
        console.print(format_result(result, config.date_display_format))

    console.print(FAREWELL)


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("words", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx, words):
    """Run a single command, e.g. ``run deadline report /by 2024-03-01``."""
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    tracker = open_tracker(config, console)
    result = tracker.execute(" ".join(words))
    console.print(format_result(result, config.date_display_format))
    if not result.ok:
        ctx.exit(1)


@main.command()
@click.pass_context
def info(ctx):
    """Show where tasks are kept and how many there are.

    Read-only: a missing data directory or save file is not created.
    """
    from . import __version__

    config = ctx.obj["config"]
    console = ctx.obj["console"]

    try:
        tasks = Storage(config.get_save_path()).load(create_missing=False)
    except StorageError as e:
        console.print(format_warning(e))
        tasks = []

    console.print(f"Task Tracker version {__version__}")
    console.print(f"Save file: {config.get_save_path()}")
    console.print(f"Configuration: {ctx.obj['config_path']}")
    console.print(f"Tasks: {len(tasks)}")


if __name__ == "__main__":
    main()
