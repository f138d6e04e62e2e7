"""Shell command work items."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from tasklane import config

from .errors import CommandFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished shell command."""

    command: str
    returncode: int
    stdout: str
    stderr: str
    duration: float

    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


def shell_command(
    command: str,
    *,
    check: bool = True,
    shell: str | None = None,
    cwd: str | Path | None = None,
) -> Callable[[], Awaitable[CommandResult]]:
    """Build a work item that runs ``command`` in a subprocess.

    Nothing is started until the returned callable is invoked (normally by a
    task queue). Output is captured and decoded as UTF-8 with replacement.

    Args:
        command: The command line to run.
        check: Raise `CommandFailedError` on a non-zero exit status.
        shell: Shell executable to run the command with ``-c``. Defaults to
            `config.get_shell()`, falling back to the platform shell.
        cwd: Working directory for the command.

    Returns:
        A nullary callable returning an awaitable `CommandResult`.

    Raises:
        ValueError: If ``command`` is empty or whitespace.
    """
    if not command.strip():
        raise ValueError("command must not be empty")

    async def run_command() -> CommandResult:
        shell_path = shell or config.get_shell()
        logger.info("Running %r", command)
        started = time.perf_counter()
        if shell_path:
            proc = await asyncio.create_subprocess_exec(
                shell_path,
                "-c",
                command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        else:
            proc = await asyncio.create_subprocess_shell(
                command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        out, err = await proc.communicate()
        assert proc.returncode is not None  # communicate() waits for exit
        result = CommandResult(
            command=command,
            returncode=proc.returncode,
            stdout=out.decode("utf-8", errors="replace"),
            stderr=err.decode("utf-8", errors="replace"),
            duration=time.perf_counter() - started,
        )
        logger.debug(
            "Command %r exited with %d after %.3fs",
            command,
            result.returncode,
            result.duration,
        )
        if check and not result.ok:
            raise CommandFailedError(
                command, result.returncode, result.stdout, result.stderr
            )
        return result

    run_command.__qualname__ = f"shell_command({command!r})"
    return run_command
