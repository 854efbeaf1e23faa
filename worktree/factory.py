# worktree/factory.py
from __future__ import annotations

from typing import Optional

from worktree.config.tracker_config import TrackerConfig
from worktree.core.clock import Clock
from worktree.core.project import Project
from worktree.core.task import Task


def new_task(
    name: str,
    description: str,
    *,
    clock: Optional[Clock] = None,
    config: Optional[TrackerConfig] = None,
) -> Task:
    """
    Build a Task; the running-interval policy comes from ``config``.
    Raises InvalidArgumentError on an empty name or a non-string description.
    """
    cfg = config if config is not None else TrackerConfig()
    return Task(name, description, clock=clock, running_overlap=cfg.running_overlap)


def new_project(name: str, description: str) -> Project:
    return Project(name, description)
