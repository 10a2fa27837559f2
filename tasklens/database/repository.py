"""Repository layer for task database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from tasklens.models.task import Task, TaskStatus
from tasklens.models.task_factory import toggle_status
from tasklens.database.models import TaskDB, enum_to_value, value_to_enum

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations.

    Every query is scoped to a single owner; a task is never visible to, or
    changeable by, another user.
    """
    
    def __init__(self, db: Session):
        self.db = db

    def _query_owned(self, user_id: str, task_id: str) -> Optional[TaskDB]:
        return self.db.query(TaskDB).filter(
            TaskDB.id == task_id,
            TaskDB.user_id == user_id,
        ).first()
    
    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def get(self, user_id: str, task_id: str) -> Optional[Task]:
        """Get task by ID for a specific user."""
        task_db = self._query_owned(user_id, task_id)
        return task_db.to_pydantic() if task_db else None
    
    def get_all(self, user_id: str) -> List[Task]:
        """Get all tasks for a user sorted by creation date (newest first)."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.user_id == user_id,
        ).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def update(self, task: Task) -> Task:
        """Update an existing task (user_id must match task.user_id).

        id, user_id and created_at are never changed.
        """
        task_db = self._query_owned(task.user_id, task.id)
        if not task_db:
            raise ValueError(f"Task {task.id} not found")
        
        task_db.title = task.title
        task_db.description = task.description
        task_db.status = enum_to_value(task.status)
        task_db.priority = enum_to_value(task.priority)
        task_db.due_date = task.due_date
        task_db.categories = list(task.categories)
        task_db.updated_at = task.updated_at
        
        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def toggle(self, user_id: str, task_id: str) -> Optional[Task]:
        """Flip a task between pending and completed. Returns None if not found."""
        task_db = self._query_owned(user_id, task_id)
        if not task_db:
            return None

        try:
            task_db.status = toggle_status(value_to_enum(task_db.status, TaskStatus)).value
            task_db.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Toggled task {task_id} to {task_db.status}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to toggle task {task_id}: {type(e).__name__}: {str(e)}")
            raise
    
    def delete(self, user_id: str, task_id: str) -> bool:
        """Permanently delete a task by ID for a specific user."""
        task_db = self._query_owned(user_id, task_id)
        if not task_db:
            return False
        
        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_all(self, user_id: str) -> int:
        """Permanently delete every task owned by a user. Returns the number deleted."""
        try:
            affected = (
                self.db.query(TaskDB)
                .filter(TaskDB.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            logger.debug(f"Deleted {affected} tasks for user {user_id}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete tasks for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
