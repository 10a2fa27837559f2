"""Filtering stage of the derivation engine.

All three filters are applied independently and must all pass (logical AND).
"""

from typing import List, Sequence

from tasklens.models.task import Task
from tasklens.models.view import ALL, ViewSelection
from tasklens.engine.validation import value_of


def matches_status(task: Task, filter_status: str) -> bool:
    return filter_status == ALL or value_of(task.status) == filter_status


def matches_priority(task: Task, filter_priority: str) -> bool:
    return filter_priority == ALL or value_of(task.priority) == filter_priority


def matches_category(task: Task, filter_category: str) -> bool:
    """Membership test against the task's labels (not prefix or substring)."""
    return filter_category == ALL or filter_category in task.categories


def filter_tasks(tasks: Sequence[Task], selection: ViewSelection) -> List[Task]:
    """Return the tasks that pass every active filter, in input order.

    Args:
        tasks: Raw task collection
        selection: Current view selection

    Returns:
        New list containing the matching tasks
    """
    filter_status = value_of(selection.filter_status)
    filter_priority = value_of(selection.filter_priority)
    filter_category = selection.filter_category

    return [
        task for task in tasks
        if matches_status(task, filter_status)
        and matches_priority(task, filter_priority)
        and matches_category(task, filter_category)
    ]
