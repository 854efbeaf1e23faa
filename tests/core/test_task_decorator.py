from datetime import timedelta

import pytest

from worktree import (
    InvalidArgumentError,
    Interval,
    NodeCollector,
    Project,
    StructuralViolationError,
    Task,
    TaskDecorator,
)


class AuditingDecorator(TaskDecorator):
    """Records every forwarded call, before and after."""

    def __init__(self, task):
        super().__init__(task)
        self.calls = []

    def before_call(self, operation, args):
        self.calls.append(("before", operation))

    def after_call(self, operation, result):
        self.calls.append(("after", operation))


def test_decorator_forwards_operations(clock, t0):
    task = Task("t", "desc", clock=clock)
    deco = TaskDecorator(task)

    interval = deco.add_interval("work")
    clock.advance(timedelta(minutes=4))

    assert isinstance(interval, Interval)
    assert deco.is_running_interval() is True
    assert deco.get_intervals() == task.get_intervals() == (interval,)
    assert deco.add_interval("rejected") is None

    assert deco.stop_last_interval() == timedelta(minutes=4)
    assert deco.duration == task.duration == timedelta(minutes=4)
    assert deco.start_time == t0
    assert deco.end_time == t0 + timedelta(minutes=4)
    assert deco.get_duration_in_range(t0, t0 + timedelta(hours=1)) == timedelta(minutes=4)
    assert deco.name == "t"
    assert deco.description == "desc"

    with pytest.raises(InvalidArgumentError):
        deco.get_duration_in_range(t0 + timedelta(hours=1), t0)


def test_hooks_wrap_forwarded_calls(clock):
    deco = AuditingDecorator(Task("t", "", clock=clock))

    deco.add_interval("work")
    deco.stop_last_interval()

    assert deco.calls == [
        ("before", "add_interval"),
        ("after", "add_interval"),
        ("before", "stop_last_interval"),
        ("after", "stop_last_interval"),
    ]


def test_decorated_task_is_transparent_to_project(clock, t0):
    project = Project("p", "")
    task = Task("t", "", clock=clock)
    deco = project.add_child(AuditingDecorator(task))

    assert task.parent is project
    assert deco.parent is project
    assert project.children == (deco,)

    deco.add_interval("work")
    clock.advance(timedelta(minutes=6))
    deco.stop_last_interval()

    assert project.duration == timedelta(minutes=6)
    assert project.get_duration_in_range(t0, t0 + timedelta(hours=1)) == timedelta(minutes=6)
    assert project.is_running() is False

    collector = NodeCollector()
    project.accept_visitor(collector)
    assert collector.nodes == [project, task, task.get_intervals()[0]]


def test_decorator_registers_as_outermost_layer(clock):
    task = Task("t", "", clock=clock)
    assert task.outermost is task

    inner = TaskDecorator(task)
    outer = AuditingDecorator(inner)

    assert task.higher_layer_decorator is inner
    assert inner.higher_layer_decorator is outer
    assert task.outermost is outer
    assert inner.outermost is outer
    assert outer.innermost is task


def test_stacked_decorators_forward_to_the_same_task(clock):
    task = Task("t", "", clock=clock)
    outer = AuditingDecorator(AuditingDecorator(task))

    outer.add_interval("work")
    clock.advance(timedelta(minutes=1))
    outer.stop_last_interval()

    assert task.duration == timedelta(minutes=1)
    assert outer.task.calls[0] == ("before", "add_interval")


def test_decorated_task_cannot_be_attached_twice(clock):
    task = Task("t", "", clock=clock)
    a = Project("a", "")
    b = Project("b", "")
    a.add_child(task)

    with pytest.raises(StructuralViolationError):
        b.add_child(TaskDecorator(task))


def test_decorator_accepts_interval_built_on_it(clock, t0):
    task = Task("t", "", clock=clock)
    deco = TaskDecorator(task)
    interval = Interval.restored("old", deco, t0, t0 + timedelta(minutes=2))

    assert deco.add_interval(interval) is True
    assert task.get_intervals() == (interval,)


def test_second_decorator_on_same_layer_is_rejected(clock):
    task = Task("t", "", clock=clock)
    first = TaskDecorator(task)

    with pytest.raises(StructuralViolationError):
        TaskDecorator(task)

    assert task.outermost is first

    # stacking on the outermost layer is the supported way
    second = TaskDecorator(first)
    assert task.outermost is second
