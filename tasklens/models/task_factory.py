"""Task creation factory for tasklens.

This module centralizes task creation and mutation logic so that defaults
and the status lifecycle are applied the same way everywhere.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from tasklens.models.task import Task, TaskStatus, TaskPriority
from tasklens.models.constants import DEFAULT_PRIORITY

# Fields an edit may never change
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


def normalize_categories(labels: Optional[Iterable[str]]) -> List[str]:
    """Trim labels, drop blanks, and remove duplicates keeping first-seen order.

    Comparison is case-sensitive: "Work" and "work" are distinct labels.

    Args:
        labels: Raw category labels (may be None)

    Returns:
        Ordered, duplicate-free list of labels
    """
    if not labels:
        return []
    seen = set()
    normalized: List[str] = []
    for label in labels:
        label = (label or "").strip()
        if label and label not in seen:
            seen.add(label)
            normalized.append(label)
    return normalized


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary."""
    return {
        "description": None,
        "status": TaskStatus.PENDING,
        "priority": DEFAULT_PRIORITY,
        "due_date": None,
        "categories": [],
    }


def create_task(
    user_id: str,
    title: str,
    description: Optional[str] = None,
    priority: Optional[TaskPriority] = None,
    due_date: Optional[datetime] = None,
    categories: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
) -> Task:
    """Create a new pending task owned by `user_id`.

    New tasks always start as pending regardless of input.

    Args:
        user_id: Owner of the task (the authenticated caller)
        title: Task title (required, non-empty)
        description: Optional task description
        priority: Task priority (defaults to medium)
        due_date: Optional due date
        categories: Category labels; normalized before storing
        now: Creation timestamp (defaults to current UTC time)

    Returns:
        Task object with defaults applied
    """
    now = now or datetime.utcnow()
    defaults = create_task_defaults()

    return Task(
        id=str(uuid.uuid4()),
        user_id=user_id,
        title=title.strip(),
        description=description if description is not None else defaults["description"],
        status=defaults["status"],
        priority=priority if priority is not None else defaults["priority"],
        due_date=due_date if due_date is not None else defaults["due_date"],
        categories=normalize_categories(categories) if categories is not None else defaults["categories"],
        created_at=now,
        updated_at=now,
    )


def apply_task_update(task: Task, updates: Dict[str, Any], now: Optional[datetime] = None) -> Task:
    """Return a copy of `task` with `updates` applied.

    Immutable fields (id, owner, creation time) are ignored if present.

    Args:
        task: Task to update
        updates: Field values to change
        now: Timestamp recorded as updated_at

    Returns:
        New Task object
    """
    changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
    if "categories" in changes:
        changes["categories"] = normalize_categories(changes["categories"])
    if "title" in changes and changes["title"] is not None:
        changes["title"] = changes["title"].strip()
    changes["updated_at"] = now or datetime.utcnow()
    # Re-validate through the model so enums and invariants hold after the edit
    return Task(**{**task.model_dump(), **changes})


def toggle_status(status: str) -> TaskStatus:
    """Flip a status between pending and completed."""
    if status == TaskStatus.COMPLETED:
        return TaskStatus.PENDING
    return TaskStatus.COMPLETED


def toggle_task(task: Task, now: Optional[datetime] = None) -> Task:
    """Return a copy of `task` with its status flipped."""
    return apply_task_update(task, {"status": toggle_status(task.status)}, now=now)
