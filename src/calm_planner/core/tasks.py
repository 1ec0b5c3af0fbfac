"""Pure task domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .calendar import minutes_from_time

MIN_DURATION = 5


class Priority(Enum):
    """How urgent a task is."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Bucket(Enum):
    """Time-of-day section a task is filed under."""

    ANYTIME = "anytime"
    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"


class Tone(Enum):
    """Colour token for a task chip."""

    MINT = "mint"
    PEACH = "peach"
    SKY = "sky"
    LILAC = "lilac"
    LEMON = "lemon"
    ROSE = "rose"


PRIORITIES = tuple(Priority)
BUCKETS = tuple(Bucket)
PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
ICON_OPTIONS = ("✨", "📊", "🧠", "📌", "☀️", "🏃", "🥗", "🧺", "🛒", "📚", "🎧", "🪴")
DEFAULT_ICON = "✨"


@dataclass(frozen=True)
class ChecklistItem:
    """One step in a task's focus checklist."""

    id: str
    label: str
    done: bool = False


@dataclass(frozen=True)
class Task:
    """A task scheduled on a single day."""

    id: str
    day: str
    title: str
    time: str
    duration: int
    priority: Priority
    bucket: Bucket
    icon: str
    color: Tone
    done: bool = False
    checklist: tuple[ChecklistItem, ...] = ()
    focus_minutes: int = 0


@dataclass(frozen=True)
class TaskDraft:
    """The editable subset of a task, held while a create/edit form is open."""

    title: str = ""
    time: str = "09:00"
    duration: int = 30
    priority: Priority = Priority.MEDIUM
    bucket: Bucket = Bucket.ANYTIME
    icon: str = DEFAULT_ICON
    color: Tone = Tone.MINT


def new_id() -> str:
    return str(uuid.uuid4())


def clamp_duration(minutes: int) -> int:
    """Durations below the minimum are raised to it."""
    return max(MIN_DURATION, minutes)


def create_draft(bucket: Bucket = Bucket.ANYTIME) -> TaskDraft:
    """Blank draft for a new task filed under ``bucket``."""
    return TaskDraft(bucket=bucket)


def draft_from_task(task: Task) -> TaskDraft:
    """Draft pre-filled from an existing task, for editing."""
    return TaskDraft(
        title=task.title,
        time=task.time,
        duration=task.duration,
        priority=task.priority,
        bucket=task.bucket,
        icon=task.icon,
        color=task.color,
    )


def create_checklist(
    title: str, make_id: Callable[[], str] = new_id
) -> tuple[ChecklistItem, ...]:
    """The three default steps for a freshly created task."""
    return (
        ChecklistItem(id=make_id(), label=f"Open {title.lower()} and start."),
        ChecklistItem(id=make_id(), label="Work one small chunk."),
        ChecklistItem(id=make_id(), label="Quick review and mark complete."),
    )


def tasks_for_day(tasks: Iterable[Task], day: str) -> list[Task]:
    """Filter tasks to those scheduled on ``day``."""
    return [t for t in tasks if t.day == day]


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """
    Sort open tasks before completed ones, each by time of day.

    Pure function - no I/O. The sort is stable, so tasks sharing a time
    keep their original order.
    """
    return sorted(tasks, key=lambda t: (t.done, minutes_from_time(t.time)))


def group_by_bucket(
    tasks: Iterable[Task], buckets: Iterable[Bucket] = BUCKETS
) -> dict[Bucket, list[Task]]:
    """Partition tasks by bucket, preserving order within each bucket."""
    tasks = list(tasks)
    return {b: [t for t in tasks if t.bucket == b] for b in buckets}


def group_by_priority(
    tasks: Iterable[Task], priorities: Iterable[Priority] = PRIORITIES
) -> dict[Priority, list[Task]]:
    """Partition tasks by priority, preserving order within each group."""
    tasks = list(tasks)
    return {p: [t for t in tasks if t.priority == p] for p in priorities}
