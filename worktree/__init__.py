#!filepath: worktree/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    WorkTreeError,
    InvalidArgumentError,
    InvalidStateError,
    StructuralViolationError,
)
from .config import AppConfig, RunningOverlap, TrackerConfig
from .core import (
    Clock,
    SystemClock,
    ManualClock,
    Job,
    Task,
    Project,
    Interval,
    IntervalState,
    TaskDecorator,
    Visitor,
    CallbackVisitor,
    NodeCollector,
    walk,
)
from .factory import new_task, new_project

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "WorkTreeError", "InvalidArgumentError", "InvalidStateError", "StructuralViolationError",
    "AppConfig", "RunningOverlap", "TrackerConfig",
    "Clock", "SystemClock", "ManualClock",
    "Job", "Task", "Project", "Interval", "IntervalState",
    "TaskDecorator",
    "Visitor", "CallbackVisitor", "NodeCollector", "walk",
    "new_task", "new_project",
]
