"""Sample data seeder for tasklens.

Usage:
    python -m tasklens.database.seed -i   # import sample user and tasks
    python -m tasklens.database.seed -d   # delete all users and tasks
"""

import sys
import uuid
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from tasklens.auth.passwords import hash_password
from tasklens.database.database import SessionLocal, init_db
from tasklens.database.models import UserDB
from tasklens.database.repository import TaskRepository
from tasklens.database.user_repository import UserRepository
from tasklens.models.task import TaskPriority, TaskStatus
from tasklens.models.task_factory import create_task, apply_task_update
from tasklens.models.user import User

SAMPLE_EMAIL = "test@example.com"
SAMPLE_PASSWORD = "password123"


def clear_data(db: Session) -> int:
    """Delete every user and their tasks. Returns the number of tasks deleted."""
    task_repo = TaskRepository(db)
    deleted = sum(task_repo.delete_all(user_id) for (user_id,) in db.query(UserDB.id).all())
    UserRepository(db).delete_all()
    return deleted


def seed_sample_data(db: Session, now: Optional[datetime] = None) -> User:
    """Add the sample user with three tasks: due tomorrow, done yesterday, due in two days."""
    now = now or datetime.utcnow()
    user = UserRepository(db).create(
        User(id=str(uuid.uuid4()), email=SAMPLE_EMAIL, name="Test User", created_at=now, updated_at=now),
        hash_password(SAMPLE_PASSWORD),
    )

    task_repo = TaskRepository(db)
    task_repo.create(create_task(
        user.id,
        "Complete project proposal",
        description="Finish the project proposal for the client meeting",
        priority=TaskPriority.HIGH,
        due_date=now + timedelta(days=1),
        categories=["Work"],
        now=now,
    ))
    meeting = create_task(
        user.id,
        "Schedule team meeting",
        description="Set up a team meeting to discuss project timeline",
        priority=TaskPriority.MEDIUM,
        due_date=now - timedelta(days=1),
        categories=["Work"],
        now=now,
    )
    task_repo.create(apply_task_update(meeting, {"status": TaskStatus.COMPLETED}, now=now))
    task_repo.create(create_task(
        user.id,
        "Research new technologies",
        description="Look into new frameworks for upcoming projects",
        priority=TaskPriority.LOW,
        due_date=now + timedelta(days=2),
        categories=["Study"],
        now=now,
    ))
    return user


def create_sample_data() -> None:
    """Replace all data with a test user and three sample tasks."""
    init_db()
    db = SessionLocal()
    try:
        clear_data(db)
        print("Data cleared...")
        seed_sample_data(db)
        print(f"Sample data created successfully! Log in as {SAMPLE_EMAIL} / {SAMPLE_PASSWORD}")
    except Exception as e:
        db.rollback()
        print(f"Error creating sample data: {e}")
        raise
    finally:
        db.close()


def delete_data() -> None:
    """Delete every user and task."""
    init_db()
    db = SessionLocal()
    try:
        deleted = clear_data(db)
        print(f"All data deleted ({deleted} tasks)...")
    except Exception as e:
        db.rollback()
        print(f"Error deleting data: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "-i":
        create_sample_data()
    elif len(sys.argv) > 1 and sys.argv[1] == "-d":
        delete_data()
    else:
        print("Please provide proper command: -i (import) or -d (delete)")
        sys.exit(1)
