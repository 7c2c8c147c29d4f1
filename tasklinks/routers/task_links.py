from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from tasklinks.core.database import get_db
from tasklinks.core.events import EventSink
from tasklinks.schemas.task_link import TaskLinkCreate, TaskLinkCreated, TaskLinkResponse, TaskLinkUpdate
from tasklinks.services.task_link_service import TaskLinkService

router = APIRouter(prefix="/task-links", tags=["task-links"])


def get_event_sink(request: Request) -> EventSink:
    """Dispatcher créé au démarrage de l'app"""
    return request.app.state.events


def get_task_link_service(
    db: Session = Depends(get_db),
    events: EventSink = Depends(get_event_sink)
) -> TaskLinkService:
    return TaskLinkService(db, events)


@router.post("", response_model=TaskLinkCreated, status_code=status.HTTP_201_CREATED)
def create_task_link(link_data: TaskLinkCreate, service: TaskLinkService = Depends(get_task_link_service)):
    """
    Lier deux tâches.

    LOGIQUE:
    1. Résoudre la relation opposée (404 si la relation n'existe pas)
    2. Créer les DEUX lignes (A → B et B → A) dans une seule transaction
    3. Retourner l'id de la ligne A → B

    EXEMPLE:
    POST /task-links
    {"task_id": 1, "opposite_task_id": 2, "link_id": 2}
    → tâche 1 "blocks" tâche 2, tâche 2 "is blocked by" tâche 1

    Un lien déjà existant → 409
    """
    task_link_id = service.create(link_data.task_id, link_data.opposite_task_id, link_data.link_id)
    return {"id": task_link_id}


@router.get("/{task_link_id}", response_model=TaskLinkResponse)
def get_task_link(task_link_id: int, service: TaskLinkService = Depends(get_task_link_service)):
    return service.get_by_id_or_raise(task_link_id)


@router.put("/{task_link_id}", response_model=TaskLinkResponse)
def update_task_link(
    task_link_id: int,
    link_data: TaskLinkUpdate,
    service: TaskLinkService = Depends(get_task_link_service)
):
    """
    Modifier un lien: la ligne ET son miroir changent ensemble.

    - 404 si le lien n'existe pas
    - 500 (task_link_mirror_missing) si le miroir a disparu
    - 409 si le nouveau lien existe déjà
    """
    service.update(task_link_id, link_data.task_id, link_data.opposite_task_id, link_data.link_id)
    return service.get_by_id_or_raise(task_link_id)


@router.delete("/{task_link_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_link(task_link_id: int, service: TaskLinkService = Depends(get_task_link_service)):
    # supprime les deux lignes de la paire
    service.remove(task_link_id)
