"""
Work Tree Core

Defines the hierarchy project -> task -> interval and how time flows through it.

Invariants:
- A task has at most one running interval.
- A stopped interval is immutable; duration == end_time - start_time.
- Job durations never decrease; start_time is set once, end_time only advances.
- Every stop event is propagated, unchanged, to every ancestor up to the root.
- The tree is acyclic; children hold only weak references to their parent.

Core explicitly does NOT:
- Persist or serialize the tree
- Render reports or any UI
- Decide when time advances (the Clock does)
"""
from .clock import Clock, ManualClock, SystemClock
from .decorator import TaskDecorator
from .interval import Interval, IntervalState
from .job import Job
from .project import Project
from .task import Task
from .visitor import CallbackVisitor, NodeCollector, Visitor, walk

__all__ = [
    "Clock", "ManualClock", "SystemClock",
    "Job", "Task", "Project",
    "Interval", "IntervalState",
    "TaskDecorator",
    "Visitor", "CallbackVisitor", "NodeCollector", "walk",
]
