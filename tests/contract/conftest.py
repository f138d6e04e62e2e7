"""Fixtures for the TaskQueue contract suite.

Every test under `tests/contract/` that asks for ``queue`` runs once per
`TaskQueue` implementation listed in `IMPLEMENTATIONS`.
"""

from collections.abc import Callable

import pytest

from tasklane.adapters.sequential_queue import SequentialQueue
from tasklane.interfaces.task_queue import TaskQueue

IMPLEMENTATIONS: dict[str, Callable[[], TaskQueue]] = {
    "sequential": lambda: SequentialQueue("contract"),
}


@pytest.fixture(params=sorted(IMPLEMENTATIONS))
def queue(request: pytest.FixtureRequest) -> TaskQueue:
    """A fresh queue of each implementation."""
    return IMPLEMENTATIONS[request.param]()
