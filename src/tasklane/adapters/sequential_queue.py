"""Sequential task queue backed by asyncio.

`SequentialQueue` runs submitted work items one at a time, in submission
order, on the event loop that submits them. Each `submit()` returns an
`asyncio.Future` that settles with exactly what the work item returned or
raised; a failing work item never affects its neighbours.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tasklane.interfaces.task_queue import TaskQueue, WorkItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class _PendingEntry(Generic[T]):
    """A queued work item and the handle its outcome is delivered to."""

    work_item: WorkItem[T]
    handle: asyncio.Future[T]


class SequentialQueue(TaskQueue):
    """Run work items strictly one after another, first in first out.

    The queue cycles between two states for its whole lifetime:

    - **idle**: no drain is active;
    - **draining**: a drain task pops the head entry, runs its work item to
      completion, delivers the outcome, and repeats until no entries remain.

    `submit()` starts a drain only when none is active, and starts it eagerly:
    the first work item begins inside the `submit()` call and runs until its
    first real suspension. Work items submitted while draining (including
    from inside a running work item) are picked up by the drain that is
    already running.

    Args:
        name: Label used in log messages and in the drain task's name.

    Warning:
        The queue never times out a work item. One that never settles stalls
        every entry behind it. Likewise, a work item that awaits the handle of
        an entry submitted after itself waits forever.

        Only `Exception` subclasses are delivered to handles. A work item that
        raises `SystemExit` or `KeyboardInterrupt` stops the drain; the
        exception propagates (out of `submit()` itself when the item started
        there) and its handle never settles.

    Example:
        ```py
        queue = SequentialQueue("uploads")
        first = queue.submit(lambda: upload("a.fits"))
        second = queue.submit(lambda: upload("b.fits"))
        await second  # "a.fits" has finished uploading by now
        ```
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._entries: deque[_PendingEntry[Any]] = deque()
        self._draining = False
        self._drain_task: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"pending={self.pending}, draining={self.draining})"
        )

    @property
    def pending(self) -> int:
        """Number of submitted work items that have not started yet."""
        return len(self._entries)

    @property
    def draining(self) -> bool:
        """True while a drain is active (a work item is running or about to)."""
        return self._draining

    def submit(self, work_item: WorkItem[T]) -> asyncio.Future[T]:
        """Queue a work item and return a handle to its eventual outcome.

        Must be called from a coroutine or callback running on an event loop.
        On an idle queue the drain starts right here, so the work item may
        already be running, or even settled, when the handle is returned.

        Args:
            work_item: A nullary callable returning an awaitable. A plain
                function is accepted too; its return value is used as is.

        Returns:
            A future that settles with the work item's result, or with the
            exception it raised, once the work item has run.

        Raises:
            TypeError: If ``work_item`` is not callable.
            RuntimeError: If there is no running event loop.

        Note:
            `SystemExit` and `KeyboardInterrupt` are not captured into the
            handle. Raised by a work item that starts during this call, they
            propagate from `submit()`; the handle is lost and never settles.
        """
        if not callable(work_item):
            raise TypeError(
                f"Work item must be callable, got {type(work_item).__name__}"
            )
        loop = asyncio.get_running_loop()
        handle: asyncio.Future[T] = loop.create_future()
        self._entries.append(_PendingEntry(work_item, handle))
        logger.debug(
            "Queue %r: queued %s (pending=%d)",
            self.name,
            _get_work_item_name(work_item),
            len(self._entries),
        )
        if not self._draining:
            self._draining = True
            self._idle.clear()
            # Runs synchronously up to the first suspension; the drain
            # registers itself in `_drain_task` and clears it when done.
            asyncio.Task(
                self._drain(),
                loop=loop,
                name=f"tasklane-drain-{self.name}",
                eager_start=True,
            )
        return handle

    async def wait_idle(self) -> None:
        """Wait until every submitted work item has settled.

        Returns immediately when the queue is idle. Entries submitted while
        waiting extend the wait.
        """
        await self._idle.wait()

    async def _drain(self) -> None:
        self._drain_task = asyncio.current_task()
        logger.debug("Queue %r: drain started", self.name)
        completed = 0
        try:
            while self._entries:
                entry = self._entries.popleft()
                await self._run(entry)
                completed += 1
        finally:
            self._draining = False
            self._drain_task = None
            if not self._entries:
                self._idle.set()
            logger.debug(
                "Queue %r: drain stopped after %d work item(s), %d left pending",
                self.name,
                completed,
                len(self._entries),
            )

    async def _run(self, entry: _PendingEntry[Any]) -> None:
        name = _get_work_item_name(entry.work_item)
        logger.debug("Queue %r: running %s", self.name, name)
        try:
            result = entry.work_item()
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            entry.handle.cancel()
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                # The drain itself is being cancelled; leave the rest queued.
                raise
            logger.debug("Queue %r: %s was cancelled", self.name, name)
            return
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Queue %r: %s failed: %r", self.name, name, exc)
            if not entry.handle.done():
                entry.handle.set_exception(exc)
                return
        else:
            if not entry.handle.done():
                entry.handle.set_result(result)
                return
        logger.debug(
            "Queue %r: handle for %s was cancelled before it ran; outcome discarded",
            self.name,
            name,
        )


def _get_work_item_name(fn: Callable[..., Any]) -> str:
    if hasattr(fn, "__qualname__"):
        return fn.__qualname__
    if hasattr(fn, "func") and hasattr(fn.func, "__qualname__"):
        return fn.func.__qualname__
    return repr(fn)
