"""Batch callbacks behind a single restartable timer."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from tasklane import config

logger = logging.getLogger(__name__)


class CallbackBatcher:
    """Collect callbacks and run them together once things go quiet.

    Every `add()` that registers at least one callable restarts the timer.
    When the timer fires, each registered callback runs once, in the order it
    was first added, and the registry is cleared. A callback that raises is
    logged as a warning and does not prevent the remaining ones from running.
    Callbacks returning an awaitable have it scheduled as a task.

    Args:
        delay: Seconds to wait after the last `add()`. Defaults to
            `config.get_callback_delay()`.

    Raises:
        ValueError: If ``delay`` is negative.
    """

    def __init__(self, delay: float | None = None) -> None:
        if delay is None:
            delay = config.get_callback_delay()
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.delay = delay
        # dict keys keep first-seen order and collapse duplicates
        self._callbacks: dict[Callable[[], Any], None] = {}
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def pending(self) -> tuple[Callable[[], Any], ...]:
        """Callbacks registered since the last run."""
        return tuple(self._callbacks)

    def add(self, *callbacks: Callable[[], Any]) -> None:
        """Register callbacks and restart the timer.

        Non-callable arguments are ignored.
        """
        added = False
        for cb in callbacks:
            if not callable(cb):
                logger.debug("Ignoring non-callable %r", cb)
                continue
            self._callbacks.setdefault(cb, None)
            added = True
        if not added:
            return
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.delay, self._run)

    def cancel(self) -> None:
        """Forget all registered callbacks without running them."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._callbacks.clear()

    def flush(self) -> None:
        """Run the registered callbacks now."""
        if self._timer is not None:
            self._timer.cancel()
        self._run()

    def _run(self) -> None:
        callbacks = list(self._callbacks)
        self._callbacks.clear()
        self._timer = None
        logger.debug("Running %d batched callback(s)", len(callbacks))
        for cb in callbacks:
            try:
                result = cb()
            except Exception:  # pylint: disable=broad-except
                logger.warning("Callback %r failed", cb, exc_info=True)
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and (exc := task.exception()) is not None:
            logger.warning(
                "Callback task %r failed",
                task,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
