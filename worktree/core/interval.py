from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Optional

from worktree.config.tracker_config import RunningOverlap
from worktree.core.job import ZERO
from worktree.utils.errors import InvalidArgumentError, InvalidStateError
from worktree.utils.logger import logs

if TYPE_CHECKING:
    from worktree.core.task import Task
    from worktree.core.visitor import Visitor


class IntervalState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class Interval:
    """
    One contiguous start/stop span of activity under a Task.

    Lifecycle:
      RUNNING --stop()--> STOPPED (terminal, immutable)

    - running intervals are opened only by Task.add_interval(name),
      at the owning task's clock "now"
    - Interval(...) / Interval.restored(...) build an already stopped span
    - duration is cached on stop; end_time - start_time exactly
    """

    def __init__(
        self,
        name: str,
        parent_task: "Task",
        start_time: datetime,
        end_time: datetime,
    ):
        if parent_task is None:
            raise InvalidArgumentError("an interval needs an owning task")
        if start_time is None or end_time is None:
            raise InvalidArgumentError("a recorded interval needs both start and end")
        if end_time < start_time:
            raise InvalidArgumentError(f"end before start: {start_time} > {end_time}")

        self.name = name
        self.parent_task = parent_task
        self.start_time = start_time
        self.end_time: Optional[datetime] = end_time
        self.state = IntervalState.STOPPED
        self._duration: Optional[timedelta] = end_time - start_time

    @classmethod
    def restored(
        cls,
        name: str,
        parent_task: "Task",
        start_time: datetime,
        end_time: datetime,
    ) -> "Interval":
        """
        Pre-recorded span. Attach it with Task.add_interval(interval);
        the task totals only include it once the caller also reports it
        through update_duration.
        """
        return cls(name, parent_task, start_time, end_time)

    @classmethod
    def _open(cls, name: str, parent_task: "Task") -> "Interval":
        """Running interval; only Task.add_interval(name) calls this."""
        interval = cls.__new__(cls)
        interval.name = name
        interval.parent_task = parent_task
        interval.start_time = parent_task.clock.now()
        interval.end_time = None
        interval.state = IntervalState.RUNNING
        interval._duration = None
        return interval

    # --------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state is IntervalState.RUNNING

    @property
    def duration(self) -> timedelta:
        """Cached once stopped; elapsed time so far while running."""
        if self._duration is not None:
            return self._duration
        return max(self.parent_task.clock.now() - self.start_time, ZERO)

    # --------------------------------------------------
    def stop(self) -> timedelta:
        if self.state is not IntervalState.RUNNING:
            raise InvalidStateError(f"interval {self.name!r} is already stopped")

        now = self.parent_task.clock.now()
        if now < self.start_time:
            # wall clock stepped back (NTP, manual change): zero-length span
            logs.warning(
                f"[Interval] {self.name}: clock went backwards "
                f"({now} < {self.start_time}), stopping at start"
            )
            now = self.start_time

        self.end_time = now
        self._duration = now - self.start_time
        self.state = IntervalState.STOPPED
        return self._duration

    def get_duration_in_range(self, from_date: datetime, to_date: datetime) -> timedelta:
        """
        Portion of this span overlapping [from_date, to_date].

        A running interval follows its task's RunningOverlap policy.
        """
        if from_date is None or to_date is None:
            raise InvalidArgumentError(f"range bounds can't be None: {from_date} -> {to_date}")
        if to_date < from_date:
            raise InvalidArgumentError(f"The dates are not coherent: {from_date} > {to_date}")

        if self.is_running:
            if self.parent_task.running_overlap is RunningOverlap.ZERO:
                return ZERO
            end = self.parent_task.clock.now()
        else:
            end = self.end_time

        overlap = min(end, to_date) - max(self.start_time, from_date)
        return overlap if overlap > ZERO else ZERO

    def accept_visitor(self, visitor: "Visitor") -> None:
        visitor.visit_interval(self)

    def __repr__(self) -> str:
        return (
            f"Interval(name={self.name!r}, state={self.state.value}, "
            f"start={self.start_time}, end={self.end_time})"
        )
