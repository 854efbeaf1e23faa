from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from worktree.core.interval import Interval
from worktree.core.job import Job, Snapshot, Window
from worktree.core.task import Task
from worktree.utils.errors import StructuralViolationError

if TYPE_CHECKING:
    from worktree.core.project import Project
    from worktree.core.visitor import Visitor


class TaskDecorator(Job):
    """
    Forwarding wrapper around one Task.

    Every Task operation goes to the wrapped task unchanged, surrounded by
    ``before_call`` / ``after_call``. Both hooks are no-ops here; subclasses
    override them to layer behavior (auditing, notification, ...) without
    touching Task.

    The parent Project cannot tell a decorated task from a plain one:
    attachment, aggregated state and propagation all live on the wrapped task.
    """

    def __init__(self, task: Union[Task, "TaskDecorator"]):
        super().__init__(task.name, task.description)
        self.task = task
        self._higher_layer: Optional[TaskDecorator] = None
        task.set_higher_layer_decorator(self)

    # --------------------------------------------------
    # hooks
    # --------------------------------------------------
    def before_call(self, operation: str, args: Tuple[Any, ...]) -> None:
        pass

    def after_call(self, operation: str, result: Any) -> None:
        pass

    def _forward(self, operation: str, *args):
        self.before_call(operation, args)
        result = getattr(self.task, operation)(*args)
        self.after_call(operation, result)
        return result

    # --------------------------------------------------
    # forwarded Task operations
    # --------------------------------------------------
    def get_intervals(self) -> Tuple[Interval, ...]:
        return self._forward("get_intervals")

    @property
    def intervals(self) -> Tuple[Interval, ...]:
        return self.get_intervals()

    def add_interval(self, item: Union[str, Interval]):
        return self._forward("add_interval", item)

    def stop_last_interval(self) -> Optional[timedelta]:
        return self._forward("stop_last_interval")

    def accept_visitor(self, visitor: "Visitor") -> None:
        self._forward("accept_visitor", visitor)

    def get_duration_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        return self._forward("get_duration_in_range", from_date, to_date)

    def is_running_interval(self) -> bool:
        return self._forward("is_running_interval")

    def update_duration(self, duration: timedelta, start_time: datetime, end_time: datetime) -> None:
        self._forward("update_duration", duration, start_time, end_time)

    # --------------------------------------------------
    # state lives on the wrapped task
    # --------------------------------------------------
    @property
    def running_interval(self) -> Optional[Interval]:
        return self.task.running_interval

    @property
    def clock(self):
        return self.task.clock

    @property
    def running_overlap(self):
        return self.task.running_overlap

    @property
    def duration(self) -> timedelta:
        return self.task.duration

    def get_duration(self) -> timedelta:
        return self.task.duration

    @property
    def start_time(self) -> Optional[datetime]:
        return self.task.start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self.task.end_time

    @property
    def parent(self) -> Optional["Project"]:
        return self.task.parent

    def _attach(self, parent: "Project") -> Snapshot:
        return self.task._attach(parent)

    def activity_window(self) -> Optional[Window]:
        return self.task.activity_window()

    # --------------------------------------------------
    # layering
    # --------------------------------------------------
    def set_higher_layer_decorator(self, decorator: "TaskDecorator") -> None:
        if self._higher_layer is not None and self._higher_layer is not decorator:
            raise StructuralViolationError(
                f"{self.name!r} is already wrapped by {self._higher_layer!r}; "
                f"decorate the outermost layer instead"
            )
        self._higher_layer = decorator

    @property
    def higher_layer_decorator(self) -> Optional["TaskDecorator"]:
        return self._higher_layer

    @property
    def outermost(self):
        layer = self
        while layer.higher_layer_decorator is not None:
            layer = layer.higher_layer_decorator
        return layer

    @property
    def innermost(self) -> Task:
        """The plain Task at the bottom of the decorator stack."""
        task = self.task
        while isinstance(task, TaskDecorator):
            task = task.task
        return task

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.task!r})"
