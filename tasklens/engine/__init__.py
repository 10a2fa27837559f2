"""Task list derivation engine for tasklens."""

from tasklens.engine.errors import DerivationError, InvalidSelectionError, InvalidTaskRecordError
from tasklens.engine.filtering import filter_tasks
from tasklens.engine.sorting import sort_tasks
from tasklens.engine.statistics import compute_statistics
from tasklens.engine.categories import available_categories, category_suggestions
from tasklens.engine.view import compute_view
from tasklens.engine.controller import ViewStateController

__all__ = [
    "DerivationError",
    "InvalidSelectionError",
    "InvalidTaskRecordError",
    "filter_tasks",
    "sort_tasks",
    "compute_statistics",
    "available_categories",
    "category_suggestions",
    "compute_view",
    "ViewStateController",
]
