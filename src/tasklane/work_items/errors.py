"""Exceptions raised by bundled work items."""

from collections.abc import Mapping
from typing import Any

from tasklane.interfaces.errors import TaskLaneError


class WorkItemError(TaskLaneError):
    """Base class for failures raised by bundled work items."""


class CommandFailedError(WorkItemError):
    """A shell command exited with a non-zero status.

    Attributes:
        command (str): The command line that was run.
        returncode (int): The exit status.
        stdout (str): Captured standard output.
        stderr (str): Captured standard error.
    """

    def __init__(self, command: str, returncode: int, stdout: str, stderr: str):
        super().__init__(f"Command {command!r} exited with status {returncode}.")
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class RequestFailedError(WorkItemError):
    """An HTTP request could not be completed or got an error status.

    Attributes:
        method (str): The HTTP method.
        url (str): The requested URL, as given to the work item.
        status_code (int | None): The response status, or None when no
            response arrived (connection refused, timeout...).
    """

    def __init__(
        self, method: str, url: str, reason: str, status_code: int | None = None
    ):
        super().__init__(f"{method} {url} failed: {reason}")
        self.method = method
        self.url = url
        self.status_code = status_code


class UnsuccessfulResponseError(WorkItemError):
    """The service answered, but the payload does not report success.

    Attributes:
        method (str): The HTTP method.
        url (str): The requested URL, as given to the work item.
        payload (Any): The decoded response body, unchanged.
    """

    def __init__(self, method: str, url: str, payload: Any):
        status = payload.get("status") if isinstance(payload, Mapping) else None
        message = f"{method} {url} returned status {status!r}"
        if isinstance(payload, Mapping) and payload.get("message"):
            message += f": {payload['message']}"
        super().__init__(message)
        self.method = method
        self.url = url
        self.payload = payload
