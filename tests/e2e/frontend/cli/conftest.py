"""Fixtures for end-to-end tests of the ``tasklane`` CLI.

Provides a test-only ``log-demo`` command emitting one record per level on a
project logger and a third-party logger, a CliRunner, and an isolated
filesystem so flight-recorder files never leak between tests.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from tasklane.entrypoints.cli.main import tasklane

# pylint: disable=redefined-outer-name

DEMO_LOGGER = "tasklane.demo"
THIRD_PARTY_LOGGER = "some.thirdparty"


@click.command()
def log_demo():
    """Emit one message per level, plus a trailing DEBUG after the warnings."""
    logger = logging.getLogger(DEMO_LOGGER)
    for level in ("debug", "info", "warning", "error", "critical"):
        getattr(logger, level)("This is a %s-level test message.", level)
    third_party = logging.getLogger(THIRD_PARTY_LOGGER)
    for level in ("debug", "info", "warning"):
        getattr(third_party, level)("This is a %s-level third-party message.", level)
    logger.debug("This is a final debug-level test message.")


@pytest.fixture
def registered_log_demo():
    """Register ``log-demo`` on the top-level group for one test."""
    tasklane.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        tasklane.commands.pop("log-demo", None)
        for section in getattr(tasklane, "_sections", []):
            getattr(section, "commands", {}).pop("log-demo", None)
        default_section = getattr(tasklane, "_default_section", None)
        if default_section is not None:
            default_section.commands.pop("log-demo", None)


@pytest.fixture
def runner():
    """Return a Click CliRunner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated temporary working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's TASKLANE_* settings out of CLI runs."""
    for name in (
        "TASKLANE_SHELL",
        "TASKLANE_LOG_PATH",
        "TASKLANE_LOGGER_LEVEL",
        "TASKLANE_FLIGHT_RECORDER",
        "TASKLANE_FORCE_FLUSH",
    ):
        monkeypatch.delenv(name, raising=False)
