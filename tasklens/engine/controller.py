"""View state controller for tasklens.

Owns the raw task collection and the current view selection, and re-runs the
derivation engine whenever either changes. The engine itself never mutates
anything; all mutation happens here, under a lock, against an immutable
snapshot of the collection.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from tasklens.models.task import Task
from tasklens.models.view import ViewSelection, TaskView
from tasklens.engine.errors import InvalidSelectionError
from tasklens.engine.validation import validate_selection, validate_task, validate_tasks
from tasklens.engine.categories import available_categories
from tasklens.engine.view import compute_view

logger = logging.getLogger(__name__)


class ViewStateController:
    """Holds view state and publishes a derived TaskView on every change."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        selection: Optional[ViewSelection] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        due_soon_window: Optional[timedelta] = None,
    ):
        self._lock = threading.RLock()
        self._clock = clock
        self._due_soon_window = due_soon_window
        self._tasks: Tuple[Task, ...] = tuple(tasks)
        self._selection = selection or ViewSelection()
        validate_selection(self._selection)
        self._revision = 0
        self._view = TaskView()
        self._categories: List[str] = []
        self._refresh()

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Current raw collection snapshot."""
        with self._lock:
            return self._tasks

    @property
    def selection(self) -> ViewSelection:
        with self._lock:
            return self._selection

    @property
    def view(self) -> TaskView:
        """Most recently published derived view."""
        with self._lock:
            return self._view

    @property
    def categories(self) -> List[str]:
        """Category facets observed in the current collection."""
        with self._lock:
            return list(self._categories)

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def set_tasks(self, tasks: Iterable[Task]) -> TaskView:
        """Replace the whole raw collection.

        Raises:
            InvalidTaskRecordError: If any task is malformed; the current
                snapshot is kept
        """
        snapshot = tuple(tasks)
        validate_tasks(snapshot, now=self._clock())
        with self._lock:
            self._tasks = snapshot
            self._revision += 1
        return self._refresh()

    def upsert_task(self, task: Task) -> TaskView:
        """Replace a task with the same id, or add it to the front of the collection."""
        validate_task(task, now=self._clock())
        with self._lock:
            if any(existing.id == task.id for existing in self._tasks):
                self._tasks = tuple(task if existing.id == task.id else existing for existing in self._tasks)
            else:
                self._tasks = (task,) + self._tasks
            self._revision += 1
        return self._refresh()

    def remove_task(self, task_id: str) -> TaskView:
        """Drop a task from the collection (no-op if absent)."""
        with self._lock:
            self._tasks = tuple(task for task in self._tasks if task.id != task_id)
            self._revision += 1
        return self._refresh()

    def set_selection(self, selection: ViewSelection) -> TaskView:
        """Replace the view selection.

        Raises:
            InvalidSelectionError: If a selection value is outside its domain
        """
        validate_selection(selection)
        with self._lock:
            self._selection = selection
            self._revision += 1
        return self._refresh()

    def update_selection(self, **changes) -> TaskView:
        """Change individual selection fields, e.g. `update_selection(sort_key="title")`."""
        with self._lock:
            current = self._selection
        try:
            selection = ViewSelection(**{**current.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidSelectionError(f"Invalid view selection: {e}") from e
        return self.set_selection(selection)

    def _refresh(self) -> TaskView:
        """Derive from a consistent snapshot and publish it.

        If the state changed while deriving, derive again against the newer
        snapshot instead of publishing stale or mixed output.
        """
        while True:
            with self._lock:
                tasks = self._tasks
                selection = self._selection
                revision = self._revision

            view = compute_view(tasks, selection, now=self._clock(), due_soon_window=self._due_soon_window)
            categories = available_categories(tasks)

            with self._lock:
                if revision == self._revision:
                    self._view = view
                    self._categories = categories
                    logger.debug(f"Published view revision {revision}")
                    return view
            logger.debug(f"State changed during derivation of revision {revision}; recomputing")
