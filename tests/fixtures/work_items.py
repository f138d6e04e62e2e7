"""Fixtures for building instrumented work items."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

_MISSING: Any = object()


@dataclass
class TraceRecorder:
    """Build work items that record when they start and finish.

    Every work item appends ``("start", label)`` when it begins and
    ``("end", label)`` when it settles, and tracks how many work items are
    running at once so tests can detect overlap.
    """

    events: list[tuple[str, str]] = field(default_factory=list)
    running: int = 0
    max_running: int = 0

    def item(
        self,
        label: str,
        *,
        delay: float = 0.0,
        result: Any = _MISSING,
        error: BaseException | None = None,
        during: Callable[[], None] | None = None,
    ) -> Callable[[], Awaitable[Any]]:
        """Return a work item.

        Args:
            label: Name recorded in the trace; also the default result.
            delay: Seconds to sleep while "working".
            result: Value to return instead of ``label``.
            error: Exception to raise instead of returning.
            during: Called right after the start is recorded (e.g. to submit more work).
        """

        async def work() -> Any:
            self.events.append(("start", label))
            self.running += 1
            self.max_running = max(self.max_running, self.running)
            try:
                if during is not None:
                    during()
                await asyncio.sleep(delay)
                if error is not None:
                    raise error
                return label if result is _MISSING else result
            finally:
                self.running -= 1
                self.events.append(("end", label))

        work.__qualname__ = f"work[{label}]"
        return work

    @property
    def starts(self) -> list[str]:
        """Labels in the order their work items started."""
        return [label for kind, label in self.events if kind == "start"]

    @property
    def ends(self) -> list[str]:
        """Labels in the order their work items settled."""
        return [label for kind, label in self.events if kind == "end"]


@pytest.fixture
def recorder() -> TraceRecorder:
    """A fresh `TraceRecorder` per test."""
    return TraceRecorder()
