"""FastAPI dependencies that resolve the caller of a request."""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from tasklens.auth.jwt import AccessTokenError, ExpiredAccessTokenError, get_user_id_from_token
from tasklens.database.database import get_db
from tasklens.database.user_repository import UserRepository
from tasklens.models.user import User

logger = logging.getLogger(__name__)

# auto_error is off so a missing header yields our 401 rather than FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to the user every task query is scoped to.

    Raises:
        HTTPException: 401 with "Not authenticated", "Token has expired",
            "Invalid token" or "User not found"
    """
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except ExpiredAccessTokenError:
        raise _unauthorized("Token has expired")
    except AccessTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid token")

    # A token can outlive its account
    user = UserRepository(db).get(user_id)
    if not user:
        raise _unauthorized("User not found")
    return user
