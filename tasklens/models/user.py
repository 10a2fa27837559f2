"""User data model for tasklens."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from tasklens.models.view import StatusFilter, SortKey


class UserPreferences(BaseModel):
    """Per-user view defaults and notification flags."""

    default_view: StatusFilter = Field(StatusFilter.ALL, description="Status filter applied when none is given")
    default_sort: SortKey = Field(SortKey.DUE_DATE, description="Sort key applied when none is given")
    email_notifications: bool = Field(True, description="Whether the user wants email notifications")
    task_reminders: bool = Field(True, description="Whether the user wants due-date reminders")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class User(BaseModel):
    """User model for tasklens."""
    
    id: str = Field(..., description="Unique user identifier (UUID v4)")
    email: str = Field(..., description="User email address (stored lowercased)")
    name: Optional[str] = Field(None, description="User display name")
    preferences: UserPreferences = Field(default_factory=UserPreferences, description="View defaults")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True
