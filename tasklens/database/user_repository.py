"""Repository for User database operations."""

import logging
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from tasklens.models.user import User
from tasklens.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None
    
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email.strip().lower()).first()
        return user_db.to_pydantic() if user_db else None

    def get_with_password_hash(self, email: str) -> Optional[Tuple[User, str]]:
        """Get a user and their stored password hash for credential checks."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email.strip().lower()).first()
        if not user_db:
            return None
        return user_db.to_pydantic(), user_db.password_hash

    def get_password_hash(self, user_id: str) -> Optional[str]:
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.password_hash if user_db else None
    
    def create(self, user: User, password_hash: str) -> User:
        """Create a new user with a hashed password."""
        try:
            user_db = UserDB.from_pydantic(user, password_hash)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user.id}: {user.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise

    def update(self, user: User, password_hash: Optional[str] = None) -> User:
        """Update profile fields, and the password hash when one is given."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user.id).first()
        if not user_db:
            raise ValueError(f"User {user.id} not found")

        user_db.email = user.email
        user_db.name = user.name
        user_db.preferences = user.preferences.model_dump(mode="json")
        user_db.updated_at = user.updated_at
        if password_hash is not None:
            user_db.password_hash = password_hash

        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user.id}: {user.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_all(self) -> int:
        """Delete every user (tasks cascade). Used by the seeder."""
        try:
            affected = self.db.query(UserDB).delete(synchronize_session=False)
            self.db.commit()
            logger.debug(f"Deleted {affected} users")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete users: {type(e).__name__}: {str(e)}")
            raise
