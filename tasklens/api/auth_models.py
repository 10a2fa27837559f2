"""Request/response models for authentication endpoints."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from tasklens.models.constants import MIN_PASSWORD_LENGTH
from tasklens.models.user import UserPreferences


def _normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValueError("Please include a valid email")
    return value


class RegisterRequest(BaseModel):
    """Request model for account registration."""
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., description="Email address (used to log in)")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: str = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class ProfileUpdateRequest(BaseModel):
    """Request model for profile updates.

    Changing the password requires both `current_password` and `new_password`.
    """
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    preferences: Optional[UserPreferences] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v) if v is not None else None


class AuthResponse(BaseModel):
    """Response model for authentication."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: dict
