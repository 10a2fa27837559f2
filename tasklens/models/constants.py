"""Constants for tasklens.

This module centralizes magic numbers and default values used throughout the application.
"""

import os
from typing import Dict, Tuple

from dotenv import load_dotenv

from tasklens.models.task import TaskPriority

load_dotenv()


# Task defaults
DEFAULT_PRIORITY = TaskPriority.MEDIUM

# Sort rank for priority (lower sorts first)
PRIORITY_RANK: Dict[str, int] = {
    TaskPriority.HIGH.value: 1,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 3,
}

# Statistics window for "due soon"
DUE_SOON_DAYS = int(os.getenv("DUE_SOON_DAYS", "3"))

# Seed list offered as category suggestions before any task uses a label
_DEFAULT_CATEGORY_SUGGESTIONS = "Work,Personal,Study,Health,Finance,Home,Shopping,Family,Travel"
CATEGORY_SUGGESTIONS: Tuple[str, ...] = tuple(
    label.strip()
    for label in os.getenv("CATEGORY_SUGGESTIONS", _DEFAULT_CATEGORY_SUGGESTIONS).split(",")
    if label.strip()
)

# Validation
MIN_PASSWORD_LENGTH = 6
MAX_TITLE_LENGTH = 200
