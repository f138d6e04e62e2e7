"""Configuration utilities for TASKLANE.

This module centralizes small helpers and constants related to configuration
read from the environment.
"""

import math
import os

from tasklane.interfaces.errors import TaskLaneError

SHELL_ENV_VAR = "TASKLANE_SHELL"  # pragma: no mutate
CALLBACK_DELAY_ENV_VAR = "TASKLANE_CALLBACK_DELAY"  # pragma: no mutate
DEFAULT_CALLBACK_DELAY = 0.5
HTTP_TIMEOUT_ENV_VAR = "TASKLANE_HTTP_TIMEOUT"  # pragma: no mutate
DEFAULT_HTTP_TIMEOUT = 10.0


class InvalidSettingError(TaskLaneError):
    """Raised when an environment setting holds an unusable value.

    Attributes:
        name (str): The environment variable name.
        value (str): The offending raw value.
    """

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")
        self.name = name
        self.value = value


def get_shell() -> str | None:
    """Get the shell used to run command work items.

    Returns:
        The value of `TASKLANE_SHELL`, or None to use the platform shell.
    """
    return os.environ.get(SHELL_ENV_VAR) or None


def get_callback_delay() -> float:
    """Get the callback batching delay, in seconds.

    Returns:
        The value of `TASKLANE_CALLBACK_DELAY`, or `DEFAULT_CALLBACK_DELAY`
        when it is unset or empty.

    Raises:
        InvalidSettingError: If the value is not a non-negative number.
    """
    return _get_seconds(CALLBACK_DELAY_ENV_VAR, DEFAULT_CALLBACK_DELAY)


def get_http_timeout() -> float:
    """Get the default timeout for HTTP work items, in seconds.

    Returns:
        The value of `TASKLANE_HTTP_TIMEOUT`, or `DEFAULT_HTTP_TIMEOUT` when
        it is unset or empty.

    Raises:
        InvalidSettingError: If the value is not a positive number.
    """
    timeout = _get_seconds(HTTP_TIMEOUT_ENV_VAR, DEFAULT_HTTP_TIMEOUT)
    if timeout == 0:
        raise InvalidSettingError(
            HTTP_TIMEOUT_ENV_VAR,
            os.environ[HTTP_TIMEOUT_ENV_VAR].strip(),
            "must be greater than zero",
        )
    return timeout


def _get_seconds(name: str, default: float) -> float:
    if not (raw := os.environ.get(name, "").strip()):
        return default
    try:
        seconds = float(raw)
    except ValueError as e:
        raise InvalidSettingError(name, raw, "not a number") from e
    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidSettingError(name, raw, "must be a finite, non-negative number")
    return seconds
