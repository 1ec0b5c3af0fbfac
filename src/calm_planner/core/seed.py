"""Deterministic first-run tasks."""

from dataclasses import dataclass

from .calendar import get_week_days, start_of_week
from .tasks import Bucket, ChecklistItem, Priority, Task, TaskDraft, Tone, create_checklist

FRIDAY_INDEX = 4


@dataclass(frozen=True)
class SeedTemplate:
    draft: TaskDraft
    focus_minutes: int


TEMPLATES = (
    SeedTemplate(TaskDraft("Morning routine", "07:30", 40, Priority.HIGH, Bucket.MORNING, "☀️", Tone.LEMON), 10),
    SeedTemplate(TaskDraft("Focused project block", "09:30", 90, Priority.HIGH, Bucket.DAY, "🧠", Tone.LILAC), 20),
    SeedTemplate(TaskDraft("Lunch reset", "12:30", 30, Priority.MEDIUM, Bucket.DAY, "🥗", Tone.MINT), 10),
    SeedTemplate(TaskDraft("Messages and follow-ups", "15:00", 35, Priority.MEDIUM, Bucket.ANYTIME, "📬", Tone.SKY), 10),
    SeedTemplate(TaskDraft("Evening tidy", "19:00", 25, Priority.LOW, Bucket.EVENING, "🧺", Tone.PEACH), 10),
)

EXTRA_TEMPLATE = SeedTemplate(
    TaskDraft("Prep weekend groceries", "17:20", 30, Priority.LOW, Bucket.EVENING, "🛒", Tone.ROSE), 0
)


def _seed_checklist(task_id: str, title: str) -> tuple[ChecklistItem, ...]:
    counter = iter(range(3))
    return create_checklist(title, make_id=lambda: f"{task_id}-check-{next(counter)}")


def _from_template(task_id: str, day: str, template: SeedTemplate, done: bool) -> Task:
    draft = template.draft
    return Task(
        id=task_id,
        day=day,
        title=draft.title,
        time=draft.time,
        duration=draft.duration,
        priority=draft.priority,
        bucket=draft.bucket,
        icon=draft.icon,
        color=draft.color,
        done=done,
        checklist=_seed_checklist(task_id, draft.title),
        focus_minutes=template.focus_minutes,
    )


def create_seed_tasks(today: str) -> tuple[Task, ...]:
    """
    Build the default week of tasks around ``today``.

    Every day of today's week gets the five templates; Friday gets one
    extra. Ids derive from day and template index, so the same ``today``
    always yields the same tasks.
    """
    tasks: list[Task] = []
    for day_index, day in enumerate(get_week_days(start_of_week(today))):
        for task_index, template in enumerate(TEMPLATES):
            done = day == today and task_index == 0
            tasks.append(_from_template(f"seed-{day}-{task_index}", day, template, done))
        if day_index == FRIDAY_INDEX:
            tasks.append(_from_template(f"seed-{day}-extra", day, EXTRA_TEMPLATE, False))
    return tuple(tasks)
