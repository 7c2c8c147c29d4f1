from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Dict, List

from tasklinks.core.database import get_db
from tasklinks.models.task import Task
from tasklinks.schemas.task_link import TaskLinkDetail
from tasklinks.routers.task_links import get_task_link_service
from tasklinks.services.task_link_service import TaskLinkService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_or_404(task_id: int, db: Session) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/{task_id}/links", response_model=List[TaskLinkDetail])
def list_task_links(
    task_id: int,
    db: Session = Depends(get_db),
    service: TaskLinkService = Depends(get_task_link_service)
):
    get_task_or_404(task_id, db)
    return service.get_all(task_id)


@router.get("/{task_id}/links/grouped", response_model=Dict[str, List[TaskLinkDetail]])
def list_task_links_grouped(
    task_id: int,
    db: Session = Depends(get_db),
    service: TaskLinkService = Depends(get_task_link_service)
):
    """Liens groupés par label, dans l'ordre de get_all"""
    get_task_or_404(task_id, db)
    return service.get_all_grouped_by_label(task_id)
