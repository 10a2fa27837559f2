"""View selection and derived view models for tasklens.

A ViewSelection is the ephemeral filter/sort state chosen by the user. A
TaskView is what the derivation engine produces from it: the ordered visible
subset plus statistics over the whole raw collection.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field

from tasklens.models.task import Task


ALL = "all"


class StatusFilter(str, Enum):
    """Status filter values."""
    ALL = ALL
    PENDING = "pending"
    COMPLETED = "completed"


class PriorityFilter(str, Enum):
    """Priority filter values."""
    ALL = ALL
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortKey(str, Enum):
    """Sort keys for the visible task list."""
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    TITLE = "title"
    CREATED_AT = "created_at"


class ViewSelection(BaseModel):
    """Filter and sort state for one recomputation.

    `filter_category` is free text: any observed label, or "all".
    """

    filter_status: StatusFilter = Field(StatusFilter.ALL, description="Status filter")
    filter_priority: PriorityFilter = Field(PriorityFilter.ALL, description="Priority filter")
    filter_category: str = Field(ALL, description="Category label to filter on, or 'all'")
    sort_key: SortKey = Field(SortKey.DUE_DATE, description="Sort key")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        frozen = True


class TaskStatistics(BaseModel):
    """Summary counts over the unfiltered raw collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    due_soon: int = 0
    overdue: int = 0
    completion_percentage: int = 0

    @property
    def has_tasks(self) -> bool:
        """Statistics are only displayed when there is at least one task."""
        return self.total > 0


class TaskView(BaseModel):
    """Derived output: visible tasks in display order plus statistics."""

    visible_tasks: List[Task] = Field(default_factory=list)
    statistics: TaskStatistics = Field(default_factory=TaskStatistics)
