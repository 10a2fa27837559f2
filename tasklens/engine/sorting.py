"""Sorting stage of the derivation engine.

Every sort is stable: tasks with equal keys keep their relative input order.
"""

from typing import Callable, Dict, List, Sequence

from tasklens.models.task import Task
from tasklens.models.view import SortKey
from tasklens.models.constants import PRIORITY_RANK
from tasklens.engine.errors import InvalidSelectionError
from tasklens.engine.validation import value_of


def _due_date_sort_key(task: Task) -> tuple:
    """Get sort key for due date.

    Tasks with due dates come before those without. Among tasks with due
    dates, earlier dates come first.

    Returns:
        Tuple for sorting: (has_no_due_date: 0 or 1, due_date or None)
    """
    if task.due_date is not None:
        return (0, task.due_date)
    # Undated tasks compare equal to each other, so input order is kept
    return (1, None)


def _priority_sort_key(task: Task) -> int:
    """High priority first (rank 1), then medium (2), then low (3)."""
    return PRIORITY_RANK[value_of(task.priority)]


def _title_sort_key(task: Task) -> tuple:
    """Case-insensitive alphabetical order, with case breaking ties."""
    return (task.title.casefold(), task.title)


def _sort_by_due_date(tasks: Sequence[Task]) -> List[Task]:
    return sorted(tasks, key=_due_date_sort_key)


def _sort_by_priority(tasks: Sequence[Task]) -> List[Task]:
    return sorted(tasks, key=_priority_sort_key)


def _sort_by_title(tasks: Sequence[Task]) -> List[Task]:
    return sorted(tasks, key=_title_sort_key)


def _sort_by_created_at(tasks: Sequence[Task]) -> List[Task]:
    # reverse=True keeps sort stability for equal timestamps
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)


_SORTERS: Dict[str, Callable[[Sequence[Task]], List[Task]]] = {
    SortKey.DUE_DATE.value: _sort_by_due_date,
    SortKey.PRIORITY.value: _sort_by_priority,
    SortKey.TITLE.value: _sort_by_title,
    SortKey.CREATED_AT.value: _sort_by_created_at,
}


def sort_tasks(tasks: Sequence[Task], sort_key: str) -> List[Task]:
    """Sort tasks by the given key.

    This function is deterministic - same inputs always produce same outputs.

    Title order is `str.casefold` followed by the raw title, not a
    locale-aware collation: accented letters sort by code point, so "Zebra"
    comes before "Éclair", and the order does not change with the locale.

    Args:
        tasks: Tasks to sort (not modified)
        sort_key: One of the SortKey values

    Returns:
        New list with the same tasks in display order

    Raises:
        InvalidSelectionError: If sort_key is not a known key
    """
    sorter = _SORTERS.get(value_of(sort_key))
    if sorter is None:
        raise InvalidSelectionError(f"Invalid sort_key {sort_key!r}")
    return sorter(tasks)
