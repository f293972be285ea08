import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from .database import get_db
from .models import Task
from .schemas import TaskCreate

logger = logging.getLogger(__name__)

# upper bound of the Integer primary key column
MAX_TASK_ID = 2**31 - 1

# columns FindWhere may filter on
FILTERABLE_COLUMNS = {
    "priority": Task.priority,
    "is_completed": Task.is_completed,
}


class RepositoryError(RuntimeError):
    pass


class TaskRepository:
    """All database access for Task rows. One instance per request session."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to %s task", action)
            raise RepositoryError(f"Failed to {action} task") from e

    def create(self, data: TaskCreate) -> Task:
        obj = Task(
            title=data.title,
            description=data.description,
            priority=data.priority,
            due_date=data.due_date,
            tags=data.tags,
            is_completed=data.is_completed,
        )
        self.db.add(obj)
        self._commit("create")
        self.db.refresh(obj)
        return obj

    def find_all(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.id).all()

    def find_by_id(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def update(self, obj: Task, changes: Dict[str, Any]) -> Task:
        for name, value in changes.items():
            setattr(obj, name, value)
        # refreshed even when no column changed
        obj.updated_at = func.now()
        self._commit("update")
        self.db.refresh(obj)
        return obj

    def delete(self, obj: Task) -> None:
        self.db.delete(obj)
        self._commit("delete")

    def find_where(self, column: str, value: Any) -> List[Task]:
        if column not in FILTERABLE_COLUMNS:
            raise ValueError(f"Cannot filter tasks on {column!r}")
        return (
            self.db.query(Task)
            .filter(FILTERABLE_COLUMNS[column] == value)
            .order_by(Task.id)
            .all()
        )


def get_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)
