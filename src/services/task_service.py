"""Task service: the store of tasks owned by users."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.task import Task
from src.schemas.task import TaskCreate
from src.services.errors import PersistenceError

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_owned_tasks(self, owner_id: int) -> list[Task]:
        """Get every task owned by the user, oldest first."""
        return self.db.query(Task).filter(Task.owner_id == owner_id).order_by(Task.id).all()

    def create_task(self, owner_id: int, data: TaskCreate) -> Task:
        """Create a task owned by the user."""
        task = Task(owner_id=owner_id, description=data.description, completed=data.completed)
        self.db.add(task)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to save task") from e
        self.db.refresh(task)
        return task

    def delete_owned_tasks(self, owner_id: int) -> int:
        """Delete every task owned by the user and return how many were removed."""
        try:
            deleted = (
                self.db.query(Task)
                .filter(Task.owner_id == owner_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to delete tasks") from e
        logger.info(f"Deleted {deleted} tasks owned by user {owner_id}")
        return deleted
