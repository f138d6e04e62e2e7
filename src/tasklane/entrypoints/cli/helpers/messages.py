"""User-facing status lines for the TASKLANE CLI.

Lines go to stderr so stdout stays free for command output and ``--json``.
Each line starts with an emoji glyph, or an ASCII stand-in when stderr cannot
encode it.
"""

import click

_GLYPHS = {
    "warn": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}  # pragma: no mutate


def _can_encode(character: str) -> bool:
    """Return True if ``character`` can be encoded on stderr.

    The stream is looked up on every call, so a runner that swaps stderr
    (e.g. click's `CliRunner`) is honoured.

    Args:
        character: The glyph to check (e.g. "⚠️", "✅").

    Returns:
        bool: False on `UnicodeEncodeError`, True otherwise.
    """
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Return the marker for ``kind`` ("warn", "success" or "error")."""
    emoji, fallback = _GLYPHS[kind]
    return emoji if _can_encode(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a bold yellow warning line on **stderr**.

    Args:
        msg: The message to display.

    Note:
        Warnings go to **stderr** so they never mix with command output or
        ``--json`` records on stdout.

    Example:
        ``⚠️  No commands given; nothing to run.``
    """
    click.secho(f"{glyph('warn')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a bold green success line on **stderr**.

    Args:
        msg: The message to display.

    Note:
        `tasklane run` prints one of these per command that exited with
        status 0, after echoing the command's own stdout.

    Example:
        ``✅  make build (3.42s)``
    """
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a bold red error line on **stderr**.

    Args:
        msg: The message to display.

    Note:
        Used for commands that failed or could not be started; the exit
        status of `tasklane run` is decided separately.

    Example:
        ``❌  make test exited with status 2``
    """
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
