"""Unit tests for tasklane.logging."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from tasklane.logging import (
    LoggingOptions,
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
    configure_logging,
    log_startup,
)

# pylint: disable=redefined-outer-name


def make_record(name: str) -> logging.LogRecord:
    """Build a bare INFO record for logger ``name``."""
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "name, prefix",
    [
        ("tasklane", ""),
        ("tasklane.adapters.sequential_queue", ""),
        ("asyncio", "[asyncio]"),
        ("urllib3.connectionpool", "[urllib3]"),
        ("tasklanex.other", "[tasklanex]"),
    ],
)
def test_prefix_filter(name, prefix):
    """Only records from outside the package get a [library] prefix."""
    record = make_record(name)
    assert ThirdPartyPrefixFilter().filter(record) is True
    assert record.prefix == prefix  # type: ignore[attr-defined]


def test_console_handler_levels():
    """Debug mode forces DEBUG; otherwise the requested level is used."""
    assert config_console_handler(level=logging.ERROR).level == logging.ERROR
    debug_handler = config_console_handler(level=logging.ERROR, debug_mode=True)
    assert isinstance(debug_handler, RichHandler)
    assert debug_handler.level == logging.DEBUG
    assert not debug_handler.filters


def test_console_handler_prefixes_third_party_records():
    """Outside debug mode the prefix filter is installed."""
    handler = config_console_handler()
    assert any(isinstance(f, ThirdPartyPrefixFilter) for f in handler.filters)


def emit(handler: logging.Handler, level: int, lineno: int, msg: str) -> None:
    """Pass one record from a project logger straight to ``handler``."""
    handler.handle(
        logging.LogRecord("tasklane.test.flight", level, "f", lineno, msg, None, None)
    )


def test_flight_recorder_writes_on_warning(tmp_path):
    """Buffered records reach the file once a WARNING is handled."""
    path = tmp_path / "fr.log"
    recorder = config_flight_recorder(path, capacity=10)
    target = recorder.target
    try:
        emit(recorder, logging.DEBUG, 1, "early detail")
        assert not path.exists()
        emit(recorder, logging.WARNING, 2, "trouble")
    finally:
        recorder.close()
        target.close()

    content = path.read_text(encoding="utf-8")
    assert "early detail" in content
    assert "WARNING tasklane.test.flight:2: trouble" in content


def test_flight_recorder_flush_on_close(tmp_path):
    """With flush_on_close, quiet runs still leave a log behind."""
    path = tmp_path / "fr.log"
    recorder = config_flight_recorder(path, flush_on_close=True)
    target = recorder.target
    emit(recorder, logging.DEBUG, 1, "quiet")
    recorder.close()
    target.close()
    assert "quiet" in path.read_text(encoding="utf-8")



def test_configure_logging_installs_handlers(tmp_path, restore_root_logger):
    """Root gets console + flight recorder; per-logger levels are applied."""
    options = LoggingOptions(
        level=logging.INFO,
        log_path=tmp_path / "fr.log",
        flight_recorder=True,
        logger_levels={"some.library": logging.ERROR},
    )
    handlers = configure_logging(options)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers == handlers
    assert [type(h).__name__ for h in handlers] == ["RichHandler", "MemoryHandler"]
    assert logging.getLogger("some.library").level == logging.ERROR
    logging.getLogger("some.library").setLevel(logging.NOTSET)


def test_configure_logging_without_flight_recorder(restore_root_logger):
    """Disabling the flight recorder leaves only the console handler."""
    handlers = configure_logging(LoggingOptions(flight_recorder=False))
    assert [type(h).__name__ for h in handlers] == ["RichHandler"]


def test_log_startup(caplog, tmp_path):
    """Startup logging emits a summary line and diagnostics."""
    options = LoggingOptions(
        level=logging.WARNING,
        log_path=tmp_path / "fr.log",
        flight_recorder=True,
        force_flush=True,
        logger_levels={"asyncio": logging.WARNING},
    )
    logger = logging.getLogger("tasklane.test.startup")
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        log_startup(logger, app_version="9.9.9", options=options, handlers=[])

    text = "\n".join(rec.getMessage() for rec in caplog.records)
    assert "TASKLANE 9.9.9 - console=WARNING, flight-recorder=ON" in text
    assert "Python: " in text
    assert "Click: " in text
    assert "flush_on_close=True" in text
    assert "Per-logger overrides: {'asyncio': 'WARNING'}" in text
