"""Pure focus-mode logic - no I/O dependencies."""

import math
from dataclasses import dataclass, replace
from typing import Iterable

from .calendar import minutes_from_time
from .tasks import PRIORITY_RANK, Task

NUDGE_STEP = 5


@dataclass(frozen=True)
class FocusSummary:
    """The focus task for a day with its progress figures."""

    task: Task
    progress: int
    remaining: int

    @property
    def display_progress(self) -> int:
        return clamp_percent(self.progress)


def select_focus_task(tasks: Iterable[Task]) -> Task | None:
    """
    Pick the open task to focus on: highest priority, then earliest time.

    Returns None when every task is done ("all caught up").
    """
    open_tasks = [t for t in tasks if not t.done]
    if not open_tasks:
        return None
    # min() keeps the first of equal keys, same as a stable sort
    return min(open_tasks, key=lambda t: (PRIORITY_RANK[t.priority], minutes_from_time(t.time)))


def focus_progress(task: Task) -> int:
    """Percent of the task's duration already spent in focus (not clamped)."""
    ratio = task.focus_minutes / max(task.duration, 1)
    return math.floor(ratio * 100 + 0.5)


def clamp_percent(value: int) -> int:
    return max(0, min(value, 100))


def focus_remaining(task: Task) -> int:
    """Minutes left before the task's planned duration is used up."""
    return max(0, task.duration - task.focus_minutes)


def nudge_focus_minutes(task: Task, delta: int) -> Task:
    """Add ``delta`` focus minutes, keeping the total within [0, duration]."""
    minutes = max(0, min(task.duration, task.focus_minutes + delta))
    return replace(task, focus_minutes=minutes)


def summarize_focus(tasks: Iterable[Task]) -> FocusSummary | None:
    """Select the focus task and compute its progress."""
    task = select_focus_task(tasks)
    if task is None:
        return None
    return FocusSummary(task=task, progress=focus_progress(task), remaining=focus_remaining(task))
