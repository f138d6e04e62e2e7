"""Logging setup for the TASKLANE CLI.

Console output goes through Rich on stderr; an optional in-memory "flight
recorder" keeps recent DEBUG records and writes them to a file once something
goes wrong (or on exit, if asked to). Records from other libraries get a short
``[library]`` prefix on the console so they stand out from our own.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from importlib.metadata import version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "tasklane"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[library]`` for records from other packages.

    Records from ``tasklane.*`` loggers get an empty prefix. Nothing is ever
    filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split(".")[0] == PROJECT_PREFIX:
            record.prefix = ""
        else:
            # e.g. "asyncio.base_events" -> "[asyncio]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


@dataclass(frozen=True)
class LoggingOptions:
    """Logging choices made on the command line.

    Attributes:
        level: Console level.
        debug_mode: Show timestamps, logger names and source paths.
        color: Allow colored console output.
        log_path: Flight-recorder destination.
        flight_recorder: Enable the flight recorder.
        flight_capacity: Records kept by the flight recorder.
        force_flush: Write the flight recorder on exit even without a warning.
        logger_levels: Per-logger minimum levels.
    """

    level: int = logging.WARNING
    debug_mode: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = False
    flight_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler.

    Args:
        level: Minimum level shown on the console. Forced to DEBUG in debug mode.
        debug_mode: Include timestamps, logger names and source locations.
        color: Emit ANSI colors (mirrors click-extra's ``--color/--no-color``).

    Returns:
        RichHandler: A handler writing to stderr.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder.

    Up to ``capacity`` records are buffered in memory. The buffer is written to
    ``path`` (truncated on open) when a record at ``flush_level`` or above
    arrives, when it fills up, and on close if ``flush_on_close`` is set.

    Args:
        path: File the buffered records are written to.
        capacity: Number of records to buffer.
        flush_level: Level that triggers a flush.
        flush_on_close: Flush whatever is buffered when the handler closes.

    Returns:
        MemoryHandler: The buffering handler, targeting a `FileHandler`.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] "
            "%(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(options: LoggingOptions) -> list[logging.Handler]:
    """Install console and flight-recorder handlers on the root logger.

    The root logger is set to DEBUG so each handler does its own filtering;
    per-logger levels from ``options.logger_levels`` apply to every handler.

    Returns:
        The handlers now attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=options.level, debug_mode=options.debug_mode, color=options.color
        )
    ]
    if options.flight_recorder and options.log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=options.log_path,
                capacity=options.flight_capacity,
                flush_on_close=options.force_flush,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in options.logger_levels.items():
        logging.getLogger(name).setLevel(lvl)
    return handlers


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    options: LoggingOptions,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line INFO summary followed by DEBUG diagnostics.

    The diagnostics cover the interpreter, platform, process, working
    directory, versions of the libraries the CLI is built on, the installed
    handlers, flight-recorder settings and per-logger overrides.
    """
    flight_recorder_on = options.flight_recorder and options.log_path is not None
    logger.info(
        "TASKLANE %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(options.level),
        "ON" if flight_recorder_on else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Click: %s", version("click"))
    logger.debug("Rich: %s", version("rich"))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder_on:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            options.log_path,
            options.flight_capacity,
            options.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {
            name: logging.getLevelName(lvl)
            for name, lvl in options.logger_levels.items()
        }
        or "<none>",
    )
