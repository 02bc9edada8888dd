"""Task model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A task owned by a user.

    The owner is referenced by id only; the user model holds no relationship
    back to its tasks, see ``TaskService.list_owned_tasks``.
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(1000), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
