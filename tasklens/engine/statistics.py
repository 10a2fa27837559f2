"""Statistics stage of the derivation engine.

Statistics are always computed over the unfiltered raw collection so the
summary reflects the whole list regardless of the active filters.
"""

import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from tasklens.models.task import Task, TaskStatus, TaskPriority
from tasklens.models.view import TaskStatistics
from tasklens.models.constants import DUE_SOON_DAYS
from tasklens.engine.validation import value_of


def is_due_soon(task: Task, now: datetime, window: timedelta) -> bool:
    """Pending, has a due date, and `now < due_date <= now + window`."""
    if task.due_date is None or value_of(task.status) == TaskStatus.COMPLETED.value:
        return False
    return now < task.due_date <= now + window


def is_overdue(task: Task, now: datetime) -> bool:
    """Pending, has a due date, and the due date is strictly before `now`."""
    if task.due_date is None or value_of(task.status) == TaskStatus.COMPLETED.value:
        return False
    return task.due_date < now


def completion_percentage(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty list."""
    if total <= 0:
        return 0
    return int(math.floor(completed / total * 100 + 0.5))


def compute_statistics(
    tasks: Sequence[Task],
    now: datetime,
    due_soon_window: Optional[timedelta] = None,
) -> TaskStatistics:
    """Aggregate summary counts over a raw task collection.

    Args:
        tasks: The full, unfiltered collection for one owner
        now: Reference instant for due-soon/overdue classification
        due_soon_window: How far ahead counts as "due soon" (default 3 days)

    Returns:
        TaskStatistics
    """
    window = due_soon_window if due_soon_window is not None else timedelta(days=DUE_SOON_DAYS)

    total = len(tasks)
    completed = pending = 0
    by_priority = {p.value: 0 for p in TaskPriority}
    due_soon = overdue = 0

    for task in tasks:
        status = value_of(task.status)
        if status == TaskStatus.COMPLETED.value:
            completed += 1
        elif status == TaskStatus.PENDING.value:
            pending += 1
        by_priority[value_of(task.priority)] += 1
        if is_due_soon(task, now, window):
            due_soon += 1
        elif is_overdue(task, now):
            overdue += 1

    return TaskStatistics(
        total=total,
        completed=completed,
        pending=pending,
        high_priority=by_priority[TaskPriority.HIGH.value],
        medium_priority=by_priority[TaskPriority.MEDIUM.value],
        low_priority=by_priority[TaskPriority.LOW.value],
        due_soon=due_soon,
        overdue=overdue,
        completion_percentage=completion_percentage(completed, total),
    )
