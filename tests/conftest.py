# tests/conftest.py
from __future__ import annotations

from datetime import datetime

import pytest
from loguru import logger

from worktree import ManualClock, Project, Task


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def t0() -> datetime:
    return datetime(2025, 12, 1, 10, 0)


@pytest.fixture
def clock(t0: datetime) -> ManualClock:
    return ManualClock(t0)


@pytest.fixture
def captured_logs():
    """
    Collect loguru messages emitted during the test.

    Usage:
        run_something()
        assert any("no interval running" in m for m in captured_logs)
    """
    messages = []
    sink_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def make_tree(clock: ManualClock):
    """
    Factory fixture for a small work tree.

        root
        ├── task_1
        ├── task_2
        └── sub
            └── task_3

    All tasks share the test clock.
    """

    def _make():
        root = Project("root", "root project")
        sub = Project("sub", "nested project")
        t1 = Task("task_1", "first", clock=clock)
        t2 = Task("task_2", "second", clock=clock)
        t3 = Task("task_3", "third", clock=clock)

        root.add_child(t1)
        root.add_child(t2)
        root.add_child(sub)
        sub.add_child(t3)
        return root, sub, t1, t2, t3

    return _make
