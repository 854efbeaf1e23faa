from __future__ import annotations

import threading
import weakref
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Optional, Tuple

from worktree.utils.errors import InvalidArgumentError, StructuralViolationError
from worktree.utils.logger import logs

if TYPE_CHECKING:
    from worktree.core.project import Project
    from worktree.core.visitor import Visitor

ZERO = timedelta(0)

Window = Tuple[datetime, datetime]
Snapshot = Tuple[timedelta, Optional[datetime], Optional[datetime]]


class Job(ABC):
    """
    Job (abstract node of the work tree)

    State:
      - name / description  : identity, fixed at construction
      - duration            : cumulative, never decreases
      - start_time          : set once, by the first update
      - end_time            : only moves forward
      - parent              : weak back-reference, set once on attachment

    Propagation protocol (update_duration):
      1. validate once, at the node that originates the update
      2. commit (duration, start, end) under this node's own lock
      3. release, then repeat step 2 on the parent, up to the root

    One lock per node, never held across the walk to the parent.
    """

    def __init__(self, name: str, description: str):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"job name must be a non-empty string: {name!r}")
        if not isinstance(description, str):
            raise InvalidArgumentError(f"job description must be a string: {description!r}")

        self._name = name
        self._description = description
        self._duration = ZERO
        self._start_time: Optional[datetime] = None
        self._end_time: Optional[datetime] = None
        self._parent_ref: Optional[weakref.ref] = None
        self._lock = threading.Lock()

    # --------------------------------------------------
    # identity
    # --------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    # --------------------------------------------------
    # aggregated state
    # --------------------------------------------------
    @property
    def duration(self) -> timedelta:
        return self._duration

    def get_duration(self) -> timedelta:
        return self._duration

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._end_time

    # --------------------------------------------------
    # parent back-reference
    # --------------------------------------------------
    @property
    def parent(self) -> Optional["Project"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def parent_name(self) -> Optional[str]:
        parent = self.parent
        return parent.name if parent is not None else None

    def _attach(self, parent: "Project") -> Snapshot:
        """
        Only called by Project.add_child.

        Sets the parent and reads (duration, start, end) under the same lock
        a commit takes, so every stop lands either in the snapshot or in the
        propagation through the new parent, never in both.
        """
        with self._lock:
            if self._parent_ref is not None:
                raise StructuralViolationError(
                    f"job {self.name!r} already belongs to {self.parent_name!r}"
                )
            self._parent_ref = weakref.ref(parent)
            return self._duration, self._start_time, self._end_time

    def iter_ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    # --------------------------------------------------
    # propagation
    # --------------------------------------------------
    def update_duration(
        self,
        duration: timedelta,
        start_time: datetime,
        end_time: datetime,
    ) -> None:
        """
        Add ``duration`` to this node and every ancestor.

        Raises InvalidArgumentError before touching any node when an
        argument is missing or incoherent.
        """
        self._validate_update(duration, start_time, end_time)

        node: Optional[Job] = self
        while node is not None:
            node = node._commit(duration, start_time, end_time)

    @staticmethod
    def _validate_update(duration, start_time, end_time) -> None:
        if duration is None or start_time is None or end_time is None:
            raise InvalidArgumentError(
                f"update_duration parameters can't be None: "
                f"duration={duration}, start={start_time}, end={end_time}"
            )
        if not isinstance(duration, timedelta):
            raise InvalidArgumentError(f"duration must be a timedelta: {duration!r}")
        if duration < ZERO:
            raise InvalidArgumentError(f"duration cannot be negative: {duration}")
        if end_time < start_time:
            raise InvalidArgumentError(f"end before start: {start_time} > {end_time}")

    def _commit(
        self, duration: timedelta, start_time: datetime, end_time: datetime
    ) -> Optional["Project"]:
        """Apply the update to this node; returns the parent seen under the lock."""
        with self._lock:
            if self._start_time is None:
                self._start_time = start_time
            self._duration = self._duration + duration
            if self._end_time is None or end_time > self._end_time:
                self._end_time = end_time
            parent = self.parent

        logs.debug(f"[Job] {self.name} +{duration} total={self._duration}")
        return parent

    # --------------------------------------------------
    # range query
    # --------------------------------------------------
    @staticmethod
    def _validate_range(from_date: datetime, to_date: datetime) -> None:
        if from_date is None or to_date is None:
            raise InvalidArgumentError(f"range bounds can't be None: {from_date} -> {to_date}")
        if to_date < from_date:
            raise InvalidArgumentError(f"The dates are not coherent: {from_date} > {to_date}")

    def activity_window(self) -> Optional[Window]:
        """
        [start, end] over which this job recorded activity, or None.
        """
        if self._start_time is None or self._end_time is None:
            return None
        return self._start_time, self._end_time

    def overlaps(self, from_date: datetime, to_date: datetime) -> bool:
        window = self.activity_window()
        if window is None:
            return False
        start, end = window
        return not (from_date > end or to_date < start)

    def _sum_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        """Range total for an already validated range, used by parent projects."""
        return self.get_duration_in_range(from_date, to_date)

    # --------------------------------------------------
    # contract
    # --------------------------------------------------
    @abstractmethod
    def get_duration_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        ...

    @abstractmethod
    def accept_visitor(self, visitor: "Visitor") -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, duration={self._duration})"
