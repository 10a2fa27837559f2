"""Derivation engine entry point for tasklens.

Turns (raw task collection, view selection, now) into the visible task list
and summary statistics. Pure: no I/O, no shared state, inputs never mutated.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from tasklens.models.task import Task
from tasklens.models.view import ViewSelection, TaskView
from tasklens.engine.validation import validate_selection, validate_tasks, value_of
from tasklens.engine.filtering import filter_tasks
from tasklens.engine.sorting import sort_tasks
from tasklens.engine.statistics import compute_statistics

logger = logging.getLogger(__name__)


def compute_view(
    tasks: Sequence[Task],
    selection: ViewSelection,
    now: datetime,
    due_soon_window: Optional[timedelta] = None,
) -> TaskView:
    """Compute the visible task list and statistics for one owner.

    Filtering and sorting apply to the visible list only; statistics are
    computed over the whole raw collection.

    This function is deterministic - same inputs (including `now`) always
    produce same outputs.

    Args:
        tasks: Full raw collection for the current owner (order irrelevant)
        selection: Current view selection
        now: Reference instant for due-soon/overdue classification
        due_soon_window: Optional override of the due-soon window

    Returns:
        TaskView with visible_tasks in display order and statistics

    Raises:
        InvalidSelectionError: If a selection value is outside its domain
        InvalidTaskRecordError: If a task breaks the Task invariants
    """
    validate_selection(selection)
    validate_tasks(tasks, now=now)

    visible = sort_tasks(filter_tasks(tasks, selection), value_of(selection.sort_key))
    statistics = compute_statistics(tasks, now, due_soon_window=due_soon_window)

    logger.debug(
        f"Derived view: {len(visible)}/{len(tasks)} visible "
        f"(status={value_of(selection.filter_status)}, priority={value_of(selection.filter_priority)}, "
        f"category={selection.filter_category}, sort={value_of(selection.sort_key)})"
    )
    return TaskView(visible_tasks=visible, statistics=statistics)
