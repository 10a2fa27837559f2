"""Pytest fixtures and configuration for tasklens tests."""

import os

# Must be set before tasklens modules read the environment
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from tasklens.auth.passwords import hash_password
from tasklens.database.database import Base
from tasklens.database.repository import TaskRepository
from tasklens.models.task import Task, TaskStatus, TaskPriority


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Fixed reference instant for deterministic due-date tests
NOW = datetime(2026, 1, 26, 12, 0, 0)

TEST_PASSWORD = "password123"


@pytest.fixture(scope="function")
def db_session(test_user_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Also creates a test user in the database.
    """
    from tasklens.database.models import UserDB

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    # Create test user (required for foreign key constraints)
    now = datetime.utcnow()
    test_user_db = UserDB(
        id=test_user_id,
        email="test@example.com",
        name="Test User",
        password_hash=hash_password(TEST_PASSWORD),
        preferences={},
        created_at=now,
        updated_at=now,
    )
    session.add(test_user_db)
    session.commit()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def now():
    """Reference instant for due-soon/overdue classification."""
    return NOW


@pytest.fixture
def sample_task_base(test_user_id):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "user_id": test_user_id,
        "title": "Test Task",
        "description": "Test description",
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.MEDIUM,
        "due_date": None,
        "categories": [],
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks with a fresh id and the given overrides.

    `due_in` is a convenience: a timedelta relative to NOW.
    """
    def _make(title="Task", due_in=None, **overrides):
        data = {**sample_task_base, "id": str(uuid.uuid4()), "title": title, "created_at": NOW, "updated_at": NOW}
        if due_in is not None:
            data["due_date"] = NOW + due_in
        data.update(overrides)
        return Task(**data)
    return _make


@pytest.fixture
def example_tasks(make_task):
    """A (high, pending, +1d), B (medium, completed, -1d), C (low, pending, +2d)."""
    a = make_task("A", priority=TaskPriority.HIGH, status=TaskStatus.PENDING, due_in=timedelta(days=1))
    b = make_task("B", priority=TaskPriority.MEDIUM, status=TaskStatus.COMPLETED, due_in=timedelta(days=-1))
    c = make_task("C", priority=TaskPriority.LOW, status=TaskStatus.PENDING, due_in=timedelta(days=2))
    return a, b, c


@pytest.fixture
def test_user(test_user_id):
    """Create a test user object."""
    from tasklens.models.user import User
    now = datetime.utcnow()
    return User(
        id=test_user_id,
        email="test@example.com",
        name="Test User",
        created_at=now,
        updated_at=now,
    )


def _override_db(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    return override_get_db


@pytest.fixture
def test_client(db_session: Session, test_user):
    """Create a FastAPI test client with overridden database dependency and authentication."""
    from tasklens.api.app import app
    from tasklens.database.database import get_db
    from tasklens.auth.dependencies import get_current_user

    # Override authentication to return test user
    def override_get_current_user():
        return test_user

    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(db_session: Session):
    """FastAPI test client with real bearer-token authentication (only the DB is overridden)."""
    from tasklens.api.app import app
    from tasklens.database.database import get_db

    app.dependency_overrides[get_db] = _override_db(db_session)

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
