"""Calm Planner CLI - terminal front-end for the planner store."""

import json
import logging
import sys
from dataclasses import replace
from datetime import date

import click

from .adapters.file_store import FileKeyValueStore
from .config import Config, load_config
from .core.calendar import format_time, from_iso_date, to_iso_date
from .core.focus import NUDGE_STEP
from .core.state import MobileView, task_to_dict
from .core.tasks import BUCKETS, ICON_OPTIONS, PRIORITIES, Bucket, Priority, Task, Tone, draft_from_task
from .store import PlannerStore

BUCKET_LABELS = {
    Bucket.ANYTIME: "Anytime",
    Bucket.MORNING: "Morning",
    Bucket.DAY: "Day",
    Bucket.EVENING: "Evening",
}
PRIORITY_LABELS = {
    Priority.HIGH: "▲ High",
    Priority.MEDIUM: "● Medium",
    Priority.LOW: "▼ Low",
}


class IsoDayType(click.ParamType):
    """A ``YYYY-MM-DD`` date, or ``today``."""

    name = "day"

    def convert(self, value, param, ctx):
        if value == "today":
            return to_iso_date(date.today())
        try:
            return to_iso_date(from_iso_date(value))
        except ValueError:
            self.fail(f"{value!r} is not a YYYY-MM-DD date", param, ctx)


ISO_DAY = IsoDayType()


def _open_store(config: Config | None = None) -> PlannerStore:
    config = config or load_config()
    return PlannerStore(FileKeyValueStore(config.data_path), key=config.storage_key)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _task_line(task: Task, show_bucket: bool = False) -> str:
    mark = "x" if task.done else " "
    meta = f"{format_time(task.time)} · {task.duration}m"
    if show_bucket:
        meta += f" · {BUCKET_LABELS[task.bucket]}"
    return f"[{mark}] {task.icon} {task.title}  {meta}  ({task.id})"


def _day_heading(day: str) -> str:
    return from_iso_date(day).strftime("%A, %B %d")


def _edit_options(func):
    """Options shared by add and edit; unset options keep the draft's value."""
    options = [
        click.option("--time", "time_", help="Start time as HH:MM"),
        click.option("--duration", type=int, help="Duration in minutes"),
        click.option("--priority", type=click.Choice([p.value for p in PRIORITIES]), help="Priority"),
        click.option("--bucket", type=click.Choice([b.value for b in BUCKETS]), help="Section of the day"),
        click.option("--icon", type=click.Choice(ICON_OPTIONS), help="Icon token"),
        click.option("--color", type=click.Choice([t.value for t in Tone]), help="Colour token"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _draft_changes(time_, duration, priority, bucket, icon, color) -> dict:
    changes = {}
    if time_ is not None:
        changes["time"] = time_
    if duration is not None:
        changes["duration"] = duration
    if priority is not None:
        changes["priority"] = Priority(priority)
    if bucket is not None:
        changes["bucket"] = Bucket(bucket)
    if icon is not None:
        changes["icon"] = icon
    if color is not None:
        changes["color"] = Tone(color)
    return changes


@click.group()
@click.version_option(package_name="calm-planner")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Calm Planner - plan your week, one day at a time."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(as_json: bool):
    """Show the selected day's tasks by section."""
    view = _open_store().view()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "day": view.selected_day,
                    "buckets": {
                        b.value: [task_to_dict(t) for t in tasks] for b, tasks in view.by_bucket.items()
                    },
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    click.echo(f"### {_day_heading(view.selected_day)} ({len(view.tasks)} tasks)")
    for bucket, tasks in view.by_bucket.items():
        click.echo()
        click.echo(BUCKET_LABELS[bucket])
        if not tasks:
            click.echo("  Nothing scheduled.")
        for task in tasks:
            click.echo(f"  {_task_line(task)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def priority(as_json: bool):
    """Show the selected day's tasks by priority."""
    view = _open_store().view()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "day": view.selected_day,
                    "priorities": {
                        p.value: {
                            "collapsed": view.collapsed.get(p, False),
                            "tasks": [task_to_dict(t) for t in tasks],
                        }
                        for p, tasks in view.by_priority.items()
                    },
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    for level, tasks in view.by_priority.items():
        collapsed = view.collapsed.get(level, False)
        click.echo(f"{PRIORITY_LABELS[level]} ({len(tasks)}) {'▾' if collapsed else '▴'}")
        if collapsed:
            continue
        if not tasks:
            click.echo("  No tasks here.")
        for task in tasks:
            click.echo(f"  {_task_line(task, show_bucket=True)}")


def _show_week(store: PlannerStore) -> None:
    state = store.state
    for iso in store.view().week_days:
        tasks = [t for t in state.tasks if t.day == iso]
        open_count = sum(1 for t in tasks if not t.done)
        marker = ">" if iso == state.selected_day else " "
        click.echo(f"{marker} {from_iso_date(iso).strftime('%a %d')}  {open_count}/{len(tasks)} open")


@main.group(invoke_without_command=True)
@click.pass_context
def week(ctx):
    """Show the visible week."""
    if ctx.invoked_subcommand is None:
        _show_week(_open_store())


@week.command("next")
def week_next():
    """Move to the following week."""
    store = _open_store()
    store.shift_week(1)
    _show_week(store)


@week.command("prev")
def week_prev():
    """Move to the previous week."""
    store = _open_store()
    store.shift_week(-1)
    _show_week(store)


@main.command()
@click.argument("target", type=ISO_DAY)
def select(target: str):
    """Select a day (YYYY-MM-DD or 'today')."""
    store = _open_store()
    store.select_day(target)
    click.echo(f"Selected {_day_heading(target)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def focus(as_json: bool):
    """Show the focus task for the selected day."""
    summary = _open_store().view().focus

    if as_json:
        if summary is None:
            click.echo(json.dumps(None))
            return
        click.echo(
            json.dumps(
                {
                    "task": task_to_dict(summary.task),
                    "progress": summary.progress,
                    "remaining": summary.remaining,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if summary is None:
        click.echo("All caught up.")
        return

    task = summary.task
    click.echo(f"{task.icon} {task.title}  ({task.id})")
    click.echo(f"{format_time(task.time)} · {task.duration}m")
    click.echo(f"{summary.display_progress}% done · {summary.remaining} minutes left")
    click.echo()
    for item in task.checklist[:3]:
        click.echo(f"  [{'x' if item.done else ' '}] {item.label}  ({item.id})")


@main.command()
@click.argument("title")
@click.option("--day", "target_day", type=ISO_DAY, help="Day to schedule on (defaults to the selected day)")
@_edit_options
def add(title, target_day, time_, duration, priority, bucket, icon, color):
    """Add a task."""
    config = load_config()
    store = _open_store(config)

    draft = replace(
        config.draft_defaults(),
        title=title,
        **_draft_changes(time_, duration, priority, bucket, icon, color),
    )

    task = store.create_task(draft, target_day)
    if task is None:
        _fail("Title cannot be blank.")
    click.echo(f"Added {_task_line(task)}")


@main.command()
@click.argument("task_id")
@click.option("--title", help="New title")
@_edit_options
def edit(task_id, title, time_, duration, priority, bucket, icon, color):
    """Edit a task."""
    store = _open_store()
    task = store.find_task(task_id)
    if task is None:
        _fail(f"No task with id {task_id}.")

    draft = replace(draft_from_task(task), **_draft_changes(time_, duration, priority, bucket, icon, color))
    if title is not None:
        draft = replace(draft, title=title)

    if not store.update_task(task_id, draft):
        _fail("Title cannot be blank.")
    click.echo(f"Updated {_task_line(store.find_task(task_id))}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task between done and open."""
    store = _open_store()
    if not store.toggle_done(task_id):
        _fail(f"No task with id {task_id}.")
    click.echo(_task_line(store.find_task(task_id)))


@main.command()
@click.argument("task_id")
def delete(task_id: str):
    """Delete a task."""
    store = _open_store()
    if not store.delete_task(task_id):
        _fail(f"No task with id {task_id}.")
    click.echo(f"Deleted {task_id}")


@main.command()
@click.argument("task_id")
@click.argument("item_id")
def check(task_id: str, item_id: str):
    """Toggle a checklist item."""
    store = _open_store()
    if not store.toggle_checklist_item(task_id, item_id):
        _fail(f"No checklist item {item_id} on task {task_id}.")
    task = store.find_task(task_id)
    for item in task.checklist:
        click.echo(f"  [{'x' if item.done else ' '}] {item.label}  ({item.id})")


@main.command()
@click.argument("task_id")
@click.option("--minutes", "-m", type=int, default=NUDGE_STEP, show_default=True, help="Minutes to add (negative to remove)")
def nudge(task_id: str, minutes: int):
    """Log focus minutes against a task."""
    store = _open_store()
    if not store.nudge_focus(task_id, minutes):
        _fail(f"No task with id {task_id}.")
    task = store.find_task(task_id)
    click.echo(f"{task.title}: {task.focus_minutes}/{task.duration} minutes")


@main.command()
@click.argument("mode", type=click.Choice([v.value for v in MobileView]))
def view(mode: str):
    """Choose the panel shown on narrow screens."""
    _open_store().set_mobile_view(MobileView(mode))
    click.echo(f"View set to {mode}")


@main.command()
@click.argument("level", type=click.Choice([p.value for p in PRIORITIES]))
def collapse(level: str):
    """Collapse or expand a priority group."""
    store = _open_store()
    store.toggle_collapsed(Priority(level))
    state = "collapsed" if store.state.collapsed_priority[Priority(level)] else "expanded"
    click.echo(f"{PRIORITY_LABELS[Priority(level)]} {state}")


@main.command()
@click.confirmation_option(prompt="Replace all tasks with the default week?")
def reset():
    """Start over with the default week of tasks."""
    _open_store().reset()
    click.echo("Planner reset.")
