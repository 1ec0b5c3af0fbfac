"""Planner state and its pure operations - no I/O dependencies.

Every operation takes the current PlannerState and returns the next one.
Nothing is mutated in place; when an operation has no effect (blank
title, unknown id) the input state object itself is returned.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

from .calendar import add_days, from_iso_date, is_within_week, start_of_week, to_iso_date
from .focus import nudge_focus_minutes
from .seed import create_seed_tasks
from .tasks import (
    PRIORITIES,
    Bucket,
    ChecklistItem,
    Priority,
    Task,
    TaskDraft,
    Tone,
    clamp_duration,
    create_checklist,
    new_id,
)


class MobileView(Enum):
    """Which panel a narrow screen shows."""

    MYDAY = "myday"
    PRIORITY = "priority"


class StateFormatError(ValueError):
    """Raised when serialized planner state cannot be decoded."""

    pass


def default_collapsed() -> dict[Priority, bool]:
    return {p: False for p in PRIORITIES}


@dataclass(frozen=True)
class PlannerState:
    """The persisted root of the planner."""

    selected_day: str
    week_start: str
    mobile_view: MobileView = MobileView.MYDAY
    collapsed_priority: dict[Priority, bool] = field(default_factory=default_collapsed)
    tasks: tuple[Task, ...] = ()

    def find_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


def create_initial_state(today: str) -> PlannerState:
    """First-run state: today selected, its week shown, seed tasks loaded."""
    return PlannerState(
        selected_day=today,
        week_start=start_of_week(today),
        tasks=create_seed_tasks(today),
    )


# ============== Operations ==============


def _normalize_day(day: str) -> str | None:
    """Canonical ISO form of ``day``, or None if it is not a calendar date."""
    try:
        return to_iso_date(from_iso_date(day))
    except (TypeError, ValueError, AttributeError):
        return None


def select_day(state: PlannerState, day: str) -> PlannerState:
    """Select ``day``. Anything that is not an ISO date leaves the state unchanged."""
    iso = _normalize_day(day)
    if iso is None:
        return state
    return replace(state, selected_day=iso)


def shift_week(state: PlannerState, direction: int) -> PlannerState:
    """
    Move the visible week by ``direction`` weeks.

    The selected day is kept if it lands in the new week, otherwise it
    moves to the new week's Monday.
    """
    week_start = add_days(state.week_start, direction * 7)
    selected = state.selected_day if is_within_week(state.selected_day, week_start) else week_start
    return replace(state, week_start=week_start, selected_day=selected)


def set_mobile_view(state: PlannerState, view: MobileView) -> PlannerState:
    return replace(state, mobile_view=view)


def toggle_collapsed(state: PlannerState, priority: Priority) -> PlannerState:
    collapsed = dict(state.collapsed_priority)
    collapsed[priority] = not collapsed.get(priority, False)
    return replace(state, collapsed_priority=collapsed)


def _patch_task(state: PlannerState, task_id: str, patcher: Callable[[Task], Task]) -> PlannerState:
    if state.find_task(task_id) is None:
        return state
    tasks = tuple(patcher(t) if t.id == task_id else t for t in state.tasks)
    return replace(state, tasks=tasks)


def create_task(
    state: PlannerState,
    draft: TaskDraft,
    day: str | None = None,
    make_id: Callable[[], str] = new_id,
) -> PlannerState:
    """
    Add a task built from ``draft`` on ``day`` (defaults to the selected day).

    Blank titles and days that are not ISO dates are rejected by
    returning ``state`` unchanged.
    """
    title = draft.title.strip()
    if not title:
        return state
    target_day = _normalize_day(day or state.selected_day)
    if target_day is None:
        return state

    taken = {t.id for t in state.tasks}
    task_id = make_id()
    while task_id in taken:
        task_id = make_id()

    task = Task(
        id=task_id,
        day=target_day,
        title=title,
        time=draft.time,
        duration=clamp_duration(draft.duration),
        priority=draft.priority,
        bucket=draft.bucket,
        icon=draft.icon,
        color=draft.color,
        done=False,
        checklist=create_checklist(title),
        focus_minutes=0,
    )
    return replace(state, tasks=state.tasks + (task,))


def update_task(state: PlannerState, task_id: str, draft: TaskDraft) -> PlannerState:
    """
    Overwrite the draft-editable fields of a task.

    Focus minutes are re-clamped when the new duration is shorter.
    """
    title = draft.title.strip()
    if not title:
        return state

    def apply(task: Task) -> Task:
        duration = clamp_duration(draft.duration)
        return replace(
            task,
            title=title,
            time=draft.time,
            duration=duration,
            priority=draft.priority,
            bucket=draft.bucket,
            icon=draft.icon,
            color=draft.color,
            focus_minutes=min(task.focus_minutes, duration),
        )

    return _patch_task(state, task_id, apply)


def delete_task(state: PlannerState, task_id: str) -> PlannerState:
    if state.find_task(task_id) is None:
        return state
    return replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id))


def toggle_done(state: PlannerState, task_id: str) -> PlannerState:
    return _patch_task(state, task_id, lambda t: replace(t, done=not t.done))


def toggle_checklist_item(state: PlannerState, task_id: str, item_id: str) -> PlannerState:
    task = state.find_task(task_id)
    if task is None or not any(item.id == item_id for item in task.checklist):
        return state

    def apply(task: Task) -> Task:
        checklist = tuple(
            replace(item, done=not item.done) if item.id == item_id else item
            for item in task.checklist
        )
        return replace(task, checklist=checklist)

    return _patch_task(state, task_id, apply)


def nudge_focus(state: PlannerState, task_id: str, delta: int) -> PlannerState:
    return _patch_task(state, task_id, lambda t: nudge_focus_minutes(t, delta))


# ============== Serialization ==============


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "day": task.day,
        "title": task.title,
        "time": task.time,
        "duration": task.duration,
        "priority": task.priority.value,
        "bucket": task.bucket.value,
        "icon": task.icon,
        "color": task.color.value,
        "done": task.done,
        "checklist": [
            {"id": item.id, "label": item.label, "done": item.done} for item in task.checklist
        ],
        "focusMinutes": task.focus_minutes,
    }


def state_to_dict(state: PlannerState) -> dict[str, Any]:
    """Encode state with the stored field names, preserving task order."""
    return {
        "selectedDay": state.selected_day,
        "weekStart": state.week_start,
        "mobileView": state.mobile_view.value,
        "collapsedPriority": {
            p.value: state.collapsed_priority.get(p, False) for p in PRIORITIES
        },
        "tasks": [task_to_dict(t) for t in state.tasks],
    }


def _iso_day(value: Any) -> str:
    if not isinstance(value, str):
        raise StateFormatError(f"Expected ISO date string, got {value!r}")
    try:
        return to_iso_date(from_iso_date(value))
    except ValueError as e:
        raise StateFormatError(str(e)) from e


def _integer(value: Any) -> int:
    # bool is an int subclass, but never a valid count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StateFormatError(f"Expected integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise StateFormatError(f"Expected integer, got {value!r}")
    return int(value)


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise StateFormatError(f"Expected string, got {value!r}")
    return value


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise StateFormatError(f"Expected boolean, got {value!r}")
    return value


def task_from_dict(data: dict[str, Any]) -> Task:
    """Decode one stored task. Raises StateFormatError on bad input."""
    try:
        return Task(
            id=_text(data["id"]),
            day=_iso_day(data["day"]),
            title=_text(data["title"]),
            time=_text(data["time"]),
            duration=_integer(data["duration"]),
            priority=Priority(data["priority"]),
            bucket=Bucket(data["bucket"]),
            icon=_text(data["icon"]),
            color=Tone(data["color"]),
            done=_flag(data["done"]),
            checklist=tuple(
                ChecklistItem(id=_text(item["id"]), label=_text(item["label"]), done=_flag(item["done"]))
                for item in data["checklist"]
            ),
            focus_minutes=_integer(data["focusMinutes"]),
        )
    except StateFormatError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise StateFormatError(f"Invalid task: {e!r}") from e


def state_from_dict(data: Any) -> PlannerState:
    """
    Decode stored planner state.

    Older blobs may lack ``mobileView`` or some ``collapsedPriority``
    entries; those take their defaults. Anything else missing or
    malformed raises StateFormatError.
    """
    if not isinstance(data, dict):
        raise StateFormatError(f"Expected an object, got {type(data).__name__}")
    try:
        selected_day = _iso_day(data["selectedDay"])
        week_start = start_of_week(_iso_day(data["weekStart"]))
        mobile_view = MobileView(data.get("mobileView", MobileView.MYDAY.value))
        raw_collapsed = data.get("collapsedPriority") or {}
        collapsed = default_collapsed()
        for key, value in raw_collapsed.items():
            collapsed[Priority(key)] = _flag(value)
        raw_tasks = data["tasks"]
        if not isinstance(raw_tasks, list):
            raise StateFormatError("Expected a list of tasks")
    except StateFormatError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StateFormatError(f"Invalid planner state: {e!r}") from e

    tasks = tuple(task_from_dict(t) for t in raw_tasks)
    ids = [t.id for t in tasks]
    if len(set(ids)) != len(ids):
        raise StateFormatError("Duplicate task ids")

    return PlannerState(
        selected_day=selected_day,
        week_start=week_start,
        mobile_view=mobile_view,
        collapsed_priority=collapsed,
        tasks=tasks,
    )
