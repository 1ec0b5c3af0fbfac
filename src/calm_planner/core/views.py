"""Pure day-view assembly - no I/O dependencies."""

from dataclasses import dataclass

from .calendar import get_week_days
from .focus import FocusSummary, summarize_focus
from .state import PlannerState
from .tasks import Bucket, Priority, Task, group_by_bucket, group_by_priority, sort_tasks, tasks_for_day


@dataclass(frozen=True)
class DayView:
    """Everything a front-end shows for the selected day."""

    selected_day: str
    week_days: list[str]
    tasks: list[Task]
    by_bucket: dict[Bucket, list[Task]]
    by_priority: dict[Priority, list[Task]]
    collapsed: dict[Priority, bool]
    focus: FocusSummary | None


def build_day_view(state: PlannerState) -> DayView:
    """
    Project planner state into the selected day's view.

    Pure function - no I/O. Recomputed from the task sequence on every
    call; nothing here is cached.
    """
    tasks = sort_tasks(tasks_for_day(state.tasks, state.selected_day))
    return DayView(
        selected_day=state.selected_day,
        week_days=get_week_days(state.week_start),
        tasks=tasks,
        by_bucket=group_by_bucket(tasks),
        by_priority=group_by_priority(tasks),
        collapsed=dict(state.collapsed_priority),
        focus=summarize_focus(tasks),
    )
