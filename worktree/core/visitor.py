from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

if TYPE_CHECKING:
    from worktree.core.interval import Interval
    from worktree.core.job import Job
    from worktree.core.project import Project
    from worktree.core.task import Task


class Visitor:
    """
    Callback dispatched once per node, depth-first pre-order:
    project -> its children (insertion order); task -> its intervals.

    The walk keeps no state of its own; any accumulation lives in the visitor.
    """

    def visit_project(self, project: "Project") -> None:
        pass

    def visit_task(self, task: "Task") -> None:
        pass

    def visit_interval(self, interval: "Interval") -> None:
        pass


class CallbackVisitor(Visitor):
    """Visitor built from plain callables, one per node kind."""

    def __init__(
        self,
        on_project: Optional[Callable[["Project"], Any]] = None,
        on_task: Optional[Callable[["Task"], Any]] = None,
        on_interval: Optional[Callable[["Interval"], Any]] = None,
    ):
        self.on_project = on_project
        self.on_task = on_task
        self.on_interval = on_interval

    def visit_project(self, project):
        if self.on_project is not None:
            self.on_project(project)

    def visit_task(self, task):
        if self.on_task is not None:
            self.on_task(task)

    def visit_interval(self, interval):
        if self.on_interval is not None:
            self.on_interval(interval)


class NodeCollector(Visitor):
    """Records every visited node, in visiting order."""

    def __init__(self):
        self.nodes: List[Any] = []

    def visit_project(self, project):
        self.nodes.append(project)

    def visit_task(self, task):
        self.nodes.append(task)

    def visit_interval(self, interval):
        self.nodes.append(interval)

    @property
    def names(self) -> List[str]:
        return [node.name for node in self.nodes]


def walk(
    node: "Job",
    on_project: Optional[Callable[["Project"], Any]] = None,
    on_task: Optional[Callable[["Task"], Any]] = None,
    on_interval: Optional[Callable[["Interval"], Any]] = None,
) -> None:
    """Depth-first pre-order walk of ``node`` with per-kind callbacks."""
    node.accept_visitor(
        CallbackVisitor(on_project=on_project, on_task=on_task, on_interval=on_interval)
    )
