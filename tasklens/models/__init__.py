"""Data models for tasklens."""

from tasklens.models.task import Task, TaskStatus, TaskPriority
from tasklens.models.view import (
    StatusFilter,
    PriorityFilter,
    SortKey,
    ViewSelection,
    TaskStatistics,
    TaskView,
)
from tasklens.models.user import User, UserPreferences

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "StatusFilter",
    "PriorityFilter",
    "SortKey",
    "ViewSelection",
    "TaskStatistics",
    "TaskView",
    "User",
    "UserPreferences",
]
