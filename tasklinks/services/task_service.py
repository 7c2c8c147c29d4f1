"""Task service"""

from sqlalchemy.orm import Session
from typing import Optional
from tasklinks.models.task import Task


def get_project_id(db: Session, task_id: int) -> Optional[int]:
    return db.query(Task.project_id).filter(Task.id == task_id).scalar()
