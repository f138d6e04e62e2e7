"""TASKLANE CLI entry point.

Defines the top-level ``tasklane`` command (via Click-Extra): logging
verbosity, the flight recorder and per-logger levels are configured here
before any subcommand runs.

Currently available commands
- ``tasklane run`` - run shell commands sequentially through a task queue.

Examples
    $ tasklane --version
    $ tasklane -v run "make lint" "make test"
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from tasklane import __version__
from tasklane.logging import LoggingOptions, configure_logging, log_startup

from .helpers import parse_log_level
from .run import run as run_command

logger = logging.getLogger(__name__)


HELP = """TASKLANE command-line interface.

    Runs work strictly one item at a time, in the order it was given. Each
    item's success or failure is reported on its own; a failure never stops
    the items queued behind it.
    """

DEFAULT_LOG_PATH = (
    Path(user_log_dir("tasklane", appauthor=False, ensure_exists=True)) / "latest.log"
)


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """Shift the default WARNING level by 10 per -v (down) and -q (up)."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Lower the WARNING threshold one level per repetition.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Raise the WARNING threshold one level per repetition.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Debug console format: timestamps, logger names and source paths.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="TASKLANE_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="TASKLANE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records kept by the flight recorder.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    envvar="TASKLANE_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Keep the last N DEBUG-level records in memory and write them to "
        "--log-path when a WARNING or ERROR is logged. Console verbosity is "
        "not affected."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    default=False,
    envvar="TASKLANE_FORCE_FLUSH",
    show_default=True,
    show_envvar=True,
    help="Also write the flight recorder buffer to --log-path on exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="TASKLANE_LOGGER_LEVEL",
    default=("asyncio=WARNING",),
    show_default=True,
    show_envvar=True,
    help=(
        "Set the minimum LEVEL of logger NAME (NAME=LEVEL). Applies to the "
        "console and the flight recorder. Repeatable."
    ),
)
@clickx.pass_context
def tasklane(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """TASKLANE command-line interface."""
    options = LoggingOptions(
        level=effective_level(verbose_count, quiet_count),
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(options)
    log_startup(logger, app_version=__version__, options=options, handlers=handlers)

    ctx.call_on_close(logging.shutdown)


tasklane.add_command(run_command)
