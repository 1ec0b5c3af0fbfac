"""Planner store - owns the current state and persists every change."""

import json
import logging
from datetime import date
from typing import Callable

from .core import state as ops
from .core.calendar import to_iso_date
from .core.state import MobileView, PlannerState, create_initial_state
from .core.tasks import Priority, Task, TaskDraft
from .core.views import DayView, build_day_view
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "calm-planner-v1"


class PlannerStore:
    """
    Single owner of the planner state.

    Each operation runs one pure state transition, swaps the snapshot and
    writes the whole state back to the key-value store. Operations with no
    effect (unknown id, blank title) write nothing.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = STORAGE_KEY,
        today: date | None = None,
    ):
        self.backend = backend
        self.key = key
        self._state = self._load(today or date.today())

    @property
    def state(self) -> PlannerState:
        return self._state

    def view(self) -> DayView:
        """Current day view, derived fresh from the state."""
        return build_day_view(self._state)

    def find_task(self, task_id: str) -> Task | None:
        return self._state.find_task(task_id)

    # ============== Persistence ==============

    def _load(self, today: date) -> PlannerState:
        """Read stored state, falling back to a fresh seed on any problem."""
        try:
            raw = self.backend.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read planner state: {e}")
            raw = None

        if raw:
            try:
                return ops.state_from_dict(json.loads(raw))
            # JSONDecodeError and StateFormatError are both ValueErrors
            except (ValueError, RecursionError) as e:
                logger.warning(f"Discarding malformed planner state: {e}")
        else:
            logger.info("No stored planner state, seeding a new week")

        initial = create_initial_state(to_iso_date(today))
        self._save(initial)
        return initial

    def _save(self, state: PlannerState) -> None:
        payload = json.dumps(ops.state_to_dict(state), ensure_ascii=False)
        try:
            self.backend.set(self.key, payload)
        except OSError as e:
            logger.warning(f"Could not save planner state: {e}")

    def _commit(self, transition: Callable[[PlannerState], PlannerState]) -> bool:
        """Apply a transition. Returns False if it left the state unchanged."""
        next_state = transition(self._state)
        if next_state is self._state:
            return False
        self._state = next_state
        self._save(next_state)
        return True

    def reset(self, today: date | None = None) -> None:
        """Throw away all tasks and start again from the seed week."""
        self._commit(lambda _: create_initial_state(to_iso_date(today or date.today())))

    # ============== Operations ==============

    def select_day(self, day: str) -> None:
        self._commit(lambda s: ops.select_day(s, day))

    def shift_week(self, direction: int) -> None:
        self._commit(lambda s: ops.shift_week(s, direction))

    def set_mobile_view(self, view: MobileView) -> None:
        self._commit(lambda s: ops.set_mobile_view(s, view))

    def toggle_collapsed(self, priority: Priority) -> None:
        self._commit(lambda s: ops.toggle_collapsed(s, priority))

    def create_task(self, draft: TaskDraft, day: str | None = None) -> Task | None:
        """Create a task from a draft. Returns None if the draft was rejected."""
        if not self._commit(lambda s: ops.create_task(s, draft, day)):
            logger.debug("Rejected task draft with blank title or invalid day")
            return None
        return self._state.tasks[-1]

    def update_task(self, task_id: str, draft: TaskDraft) -> bool:
        changed = self._commit(lambda s: ops.update_task(s, task_id, draft))
        if not changed:
            logger.debug(f"No update applied to task {task_id}")
        return changed

    def delete_task(self, task_id: str) -> bool:
        return self._commit(lambda s: ops.delete_task(s, task_id))

    def toggle_done(self, task_id: str) -> bool:
        return self._commit(lambda s: ops.toggle_done(s, task_id))

    def toggle_checklist_item(self, task_id: str, item_id: str) -> bool:
        return self._commit(lambda s: ops.toggle_checklist_item(s, task_id, item_id))

    def nudge_focus(self, task_id: str, delta: int) -> bool:
        return self._commit(lambda s: ops.nudge_focus(s, task_id, delta))
