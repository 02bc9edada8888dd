"""User schemas: write-time validation and the public account view."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

FORBIDDEN_PASSWORD_WORD = "password"  # noqa: S105


def check_password_word(value: str) -> str:
    """Reject passwords containing the word "password" in any case."""
    if FORBIDDEN_PASSWORD_WORD in value.lower():
        raise ValueError('Password should not contain the word "password"')
    return value


class UserCreate(BaseModel):
    """Fields accepted when registering a user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=7)
    age: int = Field(0, ge=0)
    avatar: bytes | None = None

    @field_validator("name", "password", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_without_forbidden_word(cls, value: str) -> str:
        return check_password_word(value)


class UserUpdate(BaseModel):
    """Fields accepted when updating a user; only supplied fields are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, min_length=7)
    age: int | None = Field(None, ge=0)
    avatar: bytes | None = None

    @field_validator("name", "password", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("name", "email", "password", "age")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        """Required fields may be omitted but not cleared."""
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("password")
    @classmethod
    def password_without_forbidden_word(cls, value: str) -> str:
        return check_password_word(value)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str


class UserResponse(BaseModel):
    """Public view of a user.

    Never carries ``password``, ``tokens`` or ``avatar``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: int
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


def to_public_view(user: Any) -> dict[str, Any]:
    """Return the user's public fields as a plain dict."""
    return UserResponse.model_validate(user).model_dump()
