"""Base exception for TASKLANE."""


class TaskLaneError(Exception):
    """Base class for errors raised by TASKLANE itself.

    Note:
        The task queue never raises these on behalf of a work item. Whatever a
        work item raises is delivered to its handle unchanged.
    """
