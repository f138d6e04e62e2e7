"""Interface for task queues.

A task queue accepts *work items* (nullary callables producing an awaitable)
and hands back a *handle* (an `asyncio.Future`) that settles with the work
item's own outcome.
"""

from __future__ import annotations

import abc
import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeAlias, TypeVar

T = TypeVar("T")

WorkItem: TypeAlias = Callable[[], Awaitable[T]]
"""A deferred operation: calling it starts the work, awaiting the result finishes it."""


class TaskQueue(abc.ABC):
    """Contract for a task queue.

    Implementations decide *when* work items run, never *what* they produce:
    a handle must settle with exactly the value returned, or exactly the
    exception raised, by its work item.
    """

    @abc.abstractmethod
    def submit(self, work_item: WorkItem[T]) -> asyncio.Future[T]:
        """Queue a work item and return a handle to its eventual outcome.

        Args:
            work_item: The operation to run.

        Returns:
            A future that settles with the work item's result or exception.
        """

    @property
    @abc.abstractmethod
    def pending(self) -> int:
        """Number of submitted work items that have not started yet."""

    @property
    @abc.abstractmethod
    def draining(self) -> bool:
        """Whether the queue is currently working through its entries."""

    @abc.abstractmethod
    async def wait_idle(self) -> None:
        """Wait until no work item is pending or running."""

    def __len__(self) -> int:
        return self.pending
