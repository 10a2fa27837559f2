"""SQLAlchemy database models for tasklens."""

from datetime import datetime
from typing import Union, TypeVar, Type
import uuid
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey

from tasklens.database.database import Base
from tasklens.models.task import TaskStatus, TaskPriority

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).
    
    Args:
        enum_obj: Enum instance or string value
        
    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T]) -> T:
    """Convert a stored string to its enum member.

    Stored values are never defaulted: a row with an unknown status or
    priority is corrupt and must not reach the engine as a valid task.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to

    Returns:
        Enum instance

    Raises:
        ValueError: If `value` is not a member of `enum_class`
    """
    try:
        return enum_class(value)
    except ValueError:
        raise ValueError(f"Invalid stored {enum_class.__name__} value {value!r}") from None


class UserDB(Base):
    """Database model for User."""
    
    __tablename__ = "users"
    
    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    
    # User profile
    email = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    preferences = Column(JSON, nullable=False, default=dict)
    
    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from tasklens.models.user import User, UserPreferences
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            preferences=UserPreferences(**(self.preferences or {})),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
    
    @classmethod
    def from_pydantic(cls, user, password_hash: str):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=password_hash,
            preferences=user.preferences.model_dump(mode="json"),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TaskDB(Base):
    """Database model for Task."""
    
    __tablename__ = "tasks"
    
    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    
    # Owner
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # Basic fields
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default=TaskStatus.PENDING.value, index=True)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(DateTime, nullable=True)
    
    # Category labels (stored as JSON array, order preserved)
    categories = Column(JSON, nullable=False, default=list)
    
    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from tasklens.models.task import Task
        
        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            status=value_to_enum(self.status, TaskStatus),
            priority=value_to_enum(self.priority, TaskPriority),
            due_date=self.due_date,
            categories=list(self.categories or []),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
    
    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            status=enum_to_value(task.status),
            priority=enum_to_value(task.priority),
            due_date=task.due_date,
            categories=list(task.categories),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
