"""Ready-made work item factories.

Each factory returns a nullary callable suitable for `TaskQueue.submit`.
Failures are raised as subclasses of `WorkItemError`.
"""

from .errors import (
    CommandFailedError,
    RequestFailedError,
    UnsuccessfulResponseError,
    WorkItemError,
)
from .http import Method, http_request, init_client
from .shell import CommandResult, shell_command

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "Method",
    "RequestFailedError",
    "UnsuccessfulResponseError",
    "WorkItemError",
    "http_request",
    "init_client",
    "shell_command",
]
