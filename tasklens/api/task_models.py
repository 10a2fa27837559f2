"""Request/response models for task endpoints."""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from tasklens.models.task import Task, TaskStatus, TaskPriority
from tasklens.models.task_factory import normalize_categories
from tasklens.models.constants import MAX_TITLE_LENGTH
from tasklens.models.view import ViewSelection, TaskStatistics


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store convention: timestamps are naive UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _clean_title(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


class TaskCreateRequest(BaseModel):
    """Request model for creating a task."""
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(None, description="Due date")
    categories: List[str] = Field(default_factory=list, description="Category labels")

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: str) -> str:
        return _clean_title(v)

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, v: List[str]) -> List[str]:
        return normalize_categories(v)


class TaskUpdateRequest(BaseModel):
    """Request model for editing a task. Only fields that are sent are changed."""
    title: Optional[str] = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    categories: Optional[List[str]] = None

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: Optional[str]) -> Optional[str]:
        return _clean_title(v)

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)


class TaskResponse(BaseModel):
    """Response for a single task."""
    task: Task


class TaskListResponse(BaseModel):
    """Response for the raw task collection."""
    tasks: List[Task]
    count: int


class TaskViewResponse(BaseModel):
    """Response for the filtered, sorted view with statistics."""
    selection: ViewSelection
    tasks: List[Task]
    count: int
    statistics: TaskStatistics
    show_statistics: bool = Field(..., description="False when the user has no tasks at all")
    categories: List[str] = Field(default_factory=list, description="Category facets for filtering")


class CategoriesResponse(BaseModel):
    """Response for category facets and form suggestions."""
    categories: List[str]
    suggestions: List[str]
