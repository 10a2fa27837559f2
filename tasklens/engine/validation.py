"""Fail-fast input checks for the derivation engine.

Callers are expected to validate at the store boundary. These checks exist so
that a defect in a surrounding layer surfaces as an error instead of silently
wrong statistics.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from tasklens.models.task import TaskStatus, TaskPriority
from tasklens.models.view import ALL, StatusFilter, PriorityFilter, SortKey
from tasklens.engine.errors import InvalidSelectionError, InvalidTaskRecordError

_STATUS_VALUES = frozenset(s.value for s in TaskStatus)
_PRIORITY_VALUES = frozenset(p.value for p in TaskPriority)
_STATUS_FILTER_VALUES = frozenset(s.value for s in StatusFilter)
_PRIORITY_FILTER_VALUES = frozenset(p.value for p in PriorityFilter)
_SORT_KEY_VALUES = frozenset(k.value for k in SortKey)

_REQUIRED_TASK_FIELDS = ("id", "title", "status", "priority", "categories", "created_at")


def value_of(obj: Any) -> Any:
    """Return the enum value for enum members, the object itself otherwise."""
    return obj.value if hasattr(obj, "value") else obj


def validate_selection(selection: Any) -> None:
    """Raise InvalidSelectionError unless every selection field is in its domain."""
    checks = (
        ("filter_status", _STATUS_FILTER_VALUES),
        ("filter_priority", _PRIORITY_FILTER_VALUES),
        ("sort_key", _SORT_KEY_VALUES),
    )
    for field, allowed in checks:
        if not hasattr(selection, field):
            raise InvalidSelectionError(f"Selection is missing '{field}'")
        value = value_of(getattr(selection, field))
        if value not in allowed:
            raise InvalidSelectionError(
                f"Invalid {field} {value!r}; expected one of {sorted(allowed)}"
            )

    category = getattr(selection, "filter_category", None)
    if not isinstance(category, str) or not category:
        raise InvalidSelectionError(
            f"Invalid filter_category {category!r}; expected '{ALL}' or a category label"
        )


def validate_task(task: Any, now: Optional[datetime] = None) -> None:
    """Raise InvalidTaskRecordError if `task` breaks the Task invariants.

    When `now` is given, a due date must match its timezone-awareness so the
    two can be compared.
    """
    for field in _REQUIRED_TASK_FIELDS:
        if getattr(task, field, None) is None:
            raise InvalidTaskRecordError(
                f"Task {getattr(task, 'id', '?')!r} is missing required field '{field}'"
            )

    if not isinstance(task.title, str) or not task.title.strip():
        raise InvalidTaskRecordError(f"Task {task.id!r} has an empty title")

    status = value_of(task.status)
    if status not in _STATUS_VALUES:
        raise InvalidTaskRecordError(f"Task {task.id!r} has invalid status {status!r}")

    priority = value_of(task.priority)
    if priority not in _PRIORITY_VALUES:
        raise InvalidTaskRecordError(f"Task {task.id!r} has invalid priority {priority!r}")

    categories = list(task.categories)
    if len(set(categories)) != len(categories):
        raise InvalidTaskRecordError(f"Task {task.id!r} has duplicate categories {categories!r}")

    due_date = getattr(task, "due_date", None)
    if due_date is not None and now is not None:
        if (due_date.tzinfo is None) != (now.tzinfo is None):
            raise InvalidTaskRecordError(
                f"Task {task.id!r} due date and reference time differ in timezone awareness"
            )


def validate_tasks(tasks: Iterable[Any], now: Optional[datetime] = None) -> None:
    """Validate every task in a collection."""
    for task in tasks:
        validate_task(task, now=now)
