from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, List, Optional, Tuple

from worktree.core.job import ZERO, Job, Window
from worktree.utils.errors import InvalidArgumentError, StructuralViolationError
from worktree.utils.logger import logs

if TYPE_CHECKING:
    from worktree.core.visitor import Visitor


class Project(Job):
    """
    A Job that owns child Jobs (Tasks, decorated Tasks, sub-Projects).

    - children keep insertion order
    - the tree stays acyclic: a project is never its own ancestor
    - a child is attached once and never re-parented
    """

    def __init__(self, name: str, description: str):
        super().__init__(name, description)
        self._children: List[Job] = []

    # --------------------------------------------------
    # composition
    # --------------------------------------------------
    @property
    def children(self) -> Tuple[Job, ...]:
        return tuple(self._children)

    def get_children(self) -> Tuple[Job, ...]:
        return self.children

    def add_child(self, job: Job) -> Job:
        """
        Attach ``job`` under this project and return it.

        Duration already recorded by ``job`` is propagated to the new
        ancestors so every total keeps covering its subtree.
        """
        if not isinstance(job, Job):
            raise InvalidArgumentError(f"only jobs can be attached: {job!r}")
        if job is self:
            raise StructuralViolationError(f"project {self.name!r} cannot contain itself")
        if any(ancestor is job for ancestor in self.iter_ancestors()):
            raise StructuralViolationError(
                f"attaching {job.name!r} under {self.name!r} would create a cycle"
            )

        duration, start_time, end_time = job._attach(self)
        self._children.append(job)

        if duration > ZERO:
            self.update_duration(duration, start_time, end_time)

        logs.debug(f"[Project] {self.name}: attached {type(job).__name__} {job.name!r}")
        return job

    def find(self, name: str) -> Optional[Job]:
        """First job named ``name`` in pre-order (this project included)."""
        if self.name == name:
            return self
        for child in self._children:
            if child.name == name:
                return child
            if isinstance(child, Project):
                found = child.find(name)
                if found is not None:
                    return found
        return None

    def is_running(self) -> bool:
        """True when any task beneath this project has a running interval."""
        for child in self._children:
            if isinstance(child, Project):
                if child.is_running():
                    return True
            elif child.is_running_interval():
                return True
        return False

    # --------------------------------------------------
    # range query
    # --------------------------------------------------
    def activity_window(self) -> Optional[Window]:
        window = super().activity_window()
        for child in self._children:
            child_window = child.activity_window()
            if child_window is None:
                continue
            if window is None:
                window = child_window
            else:
                window = (min(window[0], child_window[0]), max(window[1], child_window[1]))
        return window

    def get_duration_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        self._validate_range(from_date, to_date)

        if not self.overlaps(from_date, to_date):
            return ZERO
        return self._sum_in_range(from_date, to_date)

    def _sum_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        # the subtree window was checked once at the queried project;
        # nested projects skip it, tasks still check their own (O(1)) window
        total = ZERO
        for child in self._children:
            total += child._sum_in_range(from_date, to_date)
        return total

    # --------------------------------------------------
    # traversal
    # --------------------------------------------------
    def accept_visitor(self, visitor: "Visitor") -> None:
        visitor.visit_project(self)
        for child in self._children:
            child.accept_visitor(visitor)
