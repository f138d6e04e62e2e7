"""Debouncing on the running asyncio event loop.

A debounced callable postpones its invocation until ``wait`` seconds have
passed without another call. Only the last call of a burst runs, with the
arguments of that last call.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, ParamSpec

logger = logging.getLogger(__name__)

P = ParamSpec("P")


class Debouncer(Generic[P]):
    """Wrap ``func`` so bursts of calls collapse into one delayed call.

    Calling the debouncer must happen on a running event loop; the delayed
    invocation is scheduled with `loop.call_later`. If ``func`` returns an
    awaitable it is scheduled as a task. Exceptions raised by ``func`` (or its
    task) are logged, since no caller is left to receive them.

    Args:
        func: The callable to debounce.
        wait: Quiet period in seconds.

    Raises:
        ValueError: If ``wait`` is negative.
    """

    def __init__(self, func: Callable[P, Any], wait: float) -> None:
        if wait < 0:
            raise ValueError(f"wait must not be negative, got {wait}")
        functools.update_wrapper(self, func)
        self.func = func
        self.wait = wait
        self._timer: asyncio.TimerHandle | None = None
        self._call: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._tasks: set[asyncio.Future[Any]] = set()

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> None:
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._call = (args, kwargs)
        self._timer = loop.call_later(self.wait, self._fire)

    @property
    def pending(self) -> bool:
        """Whether an invocation is scheduled and has not run yet."""
        return self._timer is not None

    def cancel(self) -> None:
        """Drop the scheduled invocation, if any."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._call = None

    def flush(self) -> None:
        """Run the scheduled invocation now instead of waiting."""
        if self._timer is None:
            return
        self._timer.cancel()
        self._fire()

    def _fire(self) -> None:
        if self._call is None:  # pragma: no cover
            return
        args, kwargs = self._call
        self._timer = None
        self._call = None
        try:
            result = self.func(*args, **kwargs)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Debounced call to %s failed", _name(self.func))
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and (exc := task.exception()) is not None:
            logger.error(
                "Debounced call to %s failed",
                _name(self.func),
                exc_info=(type(exc), exc, exc.__traceback__),
            )


def debounce(wait: float) -> Callable[[Callable[P, Any]], Debouncer[P]]:
    """Decorator form of `Debouncer`.

    Example:
        ```py
        @debounce(0.3)
        def save(text: str) -> None: ...
        ```
    """

    def decorator(func: Callable[P, Any]) -> Debouncer[P]:
        return Debouncer(func, wait)

    return decorator


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
