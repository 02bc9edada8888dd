"""SQLAlchemy models."""

from src.models.task import Task
from src.models.user import User, UserToken

__all__ = [
    "User",
    "UserToken",
    "Task",
]
