"""Pydantic schemas for API requests and responses."""

from src.schemas.task import TaskCreate, TaskResponse
from src.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
    to_public_view,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "to_public_view",
    "TaskCreate",
    "TaskResponse",
]
