"""Functional core - pure business logic with no I/O."""

from .calendar import add_days, from_iso_date, get_week_days, minutes_from_time, start_of_week, to_iso_date
from .tasks import (
    Bucket,
    ChecklistItem,
    Priority,
    Task,
    TaskDraft,
    Tone,
    group_by_bucket,
    group_by_priority,
    sort_tasks,
)
from .focus import FocusSummary, nudge_focus_minutes, select_focus_task, summarize_focus
from .seed import create_seed_tasks
from .state import MobileView, PlannerState, StateFormatError, create_initial_state
from .views import DayView, build_day_view

__all__ = [
    # Calendar
    "add_days",
    "from_iso_date",
    "get_week_days",
    "minutes_from_time",
    "start_of_week",
    "to_iso_date",
    # Tasks
    "Bucket",
    "ChecklistItem",
    "Priority",
    "Task",
    "TaskDraft",
    "Tone",
    "group_by_bucket",
    "group_by_priority",
    "sort_tasks",
    # Focus
    "FocusSummary",
    "nudge_focus_minutes",
    "select_focus_task",
    "summarize_focus",
    # Seed
    "create_seed_tasks",
    # State
    "MobileView",
    "PlannerState",
    "StateFormatError",
    "create_initial_state",
    # Views
    "DayView",
    "build_day_view",
]
