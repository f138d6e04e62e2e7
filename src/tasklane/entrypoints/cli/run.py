"""``tasklane run`` - run shell commands one after another.

Every COMMAND becomes a shell work item submitted to a single
`SequentialQueue`, in argument order. Commands therefore never overlap, and a
failing command does not stop the ones after it.

Output
- Command stdout is echoed to **stdout** in submission order; status lines go
  to **stderr**.
- With ``--json``, stdout carries one JSON array describing every command
  instead.

Exit status
- 0 when every command exited with status 0, 1 otherwise.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import click

from tasklane.adapters.sequential_queue import SequentialQueue
from tasklane.utils.casing import convert_keys_to_camel_case
from tasklane.work_items import CommandFailedError, CommandResult, shell_command

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

Outcome = CommandResult | BaseException


async def run_sequentially(
    work_items: Sequence[Callable[[], Awaitable[CommandResult]]],
) -> list[Outcome]:
    """Submit all work items to one queue and collect their outcomes in order."""
    queue = SequentialQueue("cli")
    handles = [queue.submit(item) for item in work_items]
    logger.debug("Submitted %d command(s)", len(handles))
    return await asyncio.gather(*handles, return_exceptions=True)


def outcome_record(command: str, outcome: Outcome) -> dict[str, Any]:
    """Describe one command's outcome as a JSON-ready mapping."""
    if isinstance(outcome, CommandResult):
        return {
            "command": outcome.command,
            "return_code": outcome.returncode,
            "stdout": outcome.stdout,
            "stderr": outcome.stderr,
            "duration": outcome.duration,
            "ok": outcome.ok,
        }
    if isinstance(outcome, CommandFailedError):
        return {
            "command": command,
            "return_code": outcome.returncode,
            "stdout": outcome.stdout,
            "stderr": outcome.stderr,
            "duration": None,
            "ok": False,
        }
    return {
        "command": command,
        "return_code": None,
        "stdout": "",
        "stderr": str(outcome),
        "duration": None,
        "ok": False,
    }


def _report(command: str, outcome: Outcome) -> None:
    if isinstance(outcome, CommandResult):
        click.echo(outcome.stdout, nl=False)
        success(f"{command} ({outcome.duration:.2f}s)")
    elif isinstance(outcome, CommandFailedError):
        click.echo(outcome.stdout, nl=False)
        if outcome.stderr:
            click.echo(outcome.stderr, nl=False, err=True)
        error(f"{command} exited with status {outcome.returncode}")
    else:
        error(f"{command} could not be run: {outcome}")


@click.command()
@click.argument("commands", metavar="COMMAND...", nargs=-1)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print a JSON array of results on stdout instead of command output.",
)
@click.option(
    "--camel-case",
    is_flag=True,
    help="Use camelCase keys in --json output (e.g. returnCode).",
)
@click.option(
    "--shell",
    type=click.Path(dir_okay=False),
    envvar="TASKLANE_SHELL",
    show_envvar=True,
    help="Shell used to run each command with -c (default: the platform shell).",
)
@click.pass_context
def run(
    ctx: click.Context,
    commands: tuple[str, ...],
    as_json: bool,
    camel_case: bool,
    shell: str | None,
) -> None:
    """Run COMMANDs one at a time, in the order given."""
    if not commands:
        warn("No commands given; nothing to run.")
        return

    try:
        work_items = [shell_command(c, shell=shell) for c in commands]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COMMAND") from e

    outcomes = asyncio.run(run_sequentially(work_items))

    if as_json:
        records = [outcome_record(c, o) for c, o in zip(commands, outcomes)]
        if camel_case:
            records = [convert_keys_to_camel_case(r) for r in records]
        click.echo(json.dumps(records, indent=2))
    else:
        for command, outcome in zip(commands, outcomes):
            _report(command, outcome)

    failed = sum(not isinstance(o, CommandResult) for o in outcomes)
    if failed:
        logger.warning("%d of %d command(s) failed", failed, len(outcomes))
        ctx.exit(1)
