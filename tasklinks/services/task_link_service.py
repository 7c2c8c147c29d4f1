"""Task link service.

A link between task A and task B is stored as two mirrored rows:
(A, B, R) and (B, A, opposite(R)). Every public mutation writes both rows in
one transaction and rolls back on any failure, so a half-written pair is
never committed. Events go out after the commit, one per written row.
"""

import logging
from contextlib import contextmanager
from typing import Dict, List, Optional

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tasklinks.core.config import settings
from tasklinks.core.errors import (
    DuplicateTaskLinkError,
    MirrorLinkMissingError,
    PartialWriteError,
    TaskLinkNotFoundError,
)
from tasklinks.core.events import (
    EVENT_TASK_LINK_CREATE_UPDATE,
    EVENT_TASK_LINK_DELETE,
    EventSink,
)
from tasklinks.models.column import BoardColumn
from tasklinks.models.project import Project
from tasklinks.models.relation import Relation
from tasklinks.models.task import Task
from tasklinks.models.task_link import TaskLink
from tasklinks.models.user import User
from tasklinks.schemas.task_link import TaskLinkDetail, TaskLinkEventPayload
from tasklinks.services import relation_service
from tasklinks.services.task_service import get_project_id

logger = logging.getLogger(__name__)


# SQLSTATE unique_violation (PostgreSQL)
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    sqlstate = getattr(exc.orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    # SQLite ne donne pas de code, seulement le message
    return "unique constraint failed" in str(exc.orig).lower()


class TaskLinkService:

    def __init__(self, db: Session, events: EventSink, publish_on_remove: Optional[bool] = None):
        self.db = db
        self.events = events
        if publish_on_remove is None:
            publish_on_remove = settings.TASKLINK_PUBLISH_ON_REMOVE
        self.publish_on_remove = publish_on_remove

    # ---------- lecture ----------

    def get_by_id(self, task_link_id: int) -> Optional[TaskLink]:
        return self.db.get(TaskLink, task_link_id)

    def get_by_id_or_raise(self, task_link_id: int) -> TaskLink:
        task_link = self.get_by_id(task_link_id)
        if task_link is None:
            raise TaskLinkNotFoundError(task_link_id)
        return task_link

    def find_mirror(self, task_link: TaskLink) -> Optional[TaskLink]:
        """Return the row describing the same pair from the opposite task.

        The unique index on (task_id, opposite_task_id, link_id) guarantees
        at most one match. None means the pair is corrupted.
        """
        opposite_link_id = relation_service.get_opposite_link_id(self.db, task_link.link_id)

        return self.db.query(TaskLink).filter(
            TaskLink.task_id == task_link.opposite_task_id,
            TaskLink.opposite_task_id == task_link.task_id,
            TaskLink.link_id == opposite_link_id,
        ).first()

    def get_all(self, task_id: int) -> List[TaskLinkDetail]:
        """All links of a task, with the opposite task's board data.

        Ordered by relation, then column position (rightmost first), active
        tasks before closed ones, task position and id. Links to a task whose
        task, column or project no longer exists are left out; unassigned
        tasks are kept.
        """
        rows = (
            self.db.query(
                TaskLink.id,
                TaskLink.opposite_task_id.label("task_id"),
                Relation.label,
                Task.title,
                Task.is_active,
                Task.project_id,
                Task.column_id,
                Task.color_id,
                Task.time_spent.label("task_time_spent"),
                Task.time_estimated.label("task_time_estimated"),
                Task.owner_id.label("task_assignee_id"),
                User.username.label("task_assignee_username"),
                User.name.label("task_assignee_name"),
                BoardColumn.title.label("column_title"),
                Project.name.label("project_name"),
            )
            .join(Relation, Relation.id == TaskLink.link_id)
            .join(Task, Task.id == TaskLink.opposite_task_id)
            .join(BoardColumn, BoardColumn.id == Task.column_id)
            .join(Project, Project.id == Task.project_id)
            .outerjoin(User, User.id == Task.owner_id)
            .filter(TaskLink.task_id == task_id)
            .order_by(
                Relation.id.asc(),
                BoardColumn.position.desc(),
                Task.is_active.desc(),
                Task.position.asc(),
                Task.id.asc(),
            )
            .all()
        )

        return [TaskLinkDetail(**row._mapping) for row in rows]

    def get_all_grouped_by_label(self, task_id: int) -> Dict[str, List[TaskLinkDetail]]:
        result: Dict[str, List[TaskLinkDetail]] = {}

        for link in self.get_all(task_id):
            result.setdefault(link.label, []).append(link)

        return result

    # ---------- écriture ----------

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def _pair_write(self, task_id: int, opposite_task_id: int, link_id: int):
        try:
            with self._transaction():
                yield
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise DuplicateTaskLinkError(task_id, opposite_task_id, link_id) from exc
            raise

    def _fire_events(self, event_name: str, events: List[dict]) -> None:
        for values in events:
            payload = TaskLinkEventPayload(
                **values,
                project_id=get_project_id(self.db, values["task_id"]),
            )
            self.events.publish(event_name, payload.model_dump())

    def create(self, task_id: int, opposite_task_id: int, link_id: int) -> int:
        """Link two tasks and return the id of the forward row."""
        events = []

        with self._pair_write(task_id, opposite_task_id, link_id):
            opposite_link_id = relation_service.get_opposite_link_id(self.db, link_id)

            values = dict(task_id=task_id, opposite_task_id=opposite_task_id, link_id=link_id)
            task_link = TaskLink(**values)
            self.db.add(task_link)
            self.db.flush()
            task_link_id = task_link.id
            events.append(values)

            values = dict(task_id=opposite_task_id, opposite_task_id=task_id, link_id=opposite_link_id)
            self.db.add(TaskLink(**values))
            self.db.flush()
            events.append(values)

        logger.info("Linked task %s to task %s (relation %s)", task_id, opposite_task_id, link_id)
        self._fire_events(EVENT_TASK_LINK_CREATE_UPDATE, events)

        return task_link_id

    def update(self, task_link_id: int, task_id: int, opposite_task_id: int, link_id: int) -> bool:
        """Rewrite both rows of a pair. All or nothing.

        When the new forward values are the current mirror's values, the two
        rows trade contents. They are then deleted and inserted again under
        their own ids instead of being updated one after the other.
        """
        events = []

        with self._pair_write(task_id, opposite_task_id, link_id):
            task_link = self.db.query(TaskLink).filter(
                TaskLink.id == task_link_id
            ).with_for_update().first()

            if task_link is None:
                raise TaskLinkNotFoundError(task_link_id)

            # le miroir se cherche avec les valeurs AVANT modification
            opposite_task_link = self.find_mirror(task_link)
            if opposite_task_link is None:
                logger.error("Task link %s has no mirror row", task_link_id)
                raise MirrorLinkMissingError(task_link_id)
            opposite_task_link_id = opposite_task_link.id

            current_mirror = dict(
                task_id=task_link.opposite_task_id,
                opposite_task_id=task_link.task_id,
                link_id=relation_service.get_opposite_link_id(self.db, task_link.link_id),
            )
            opposite_link_id = relation_service.get_opposite_link_id(self.db, link_id)

            forward = dict(task_id=task_id, opposite_task_id=opposite_task_id, link_id=link_id)
            mirror = dict(task_id=opposite_task_id, opposite_task_id=task_id, link_id=opposite_link_id)

            if forward == current_mirror:
                rs1, rs2 = self._swap_rows(task_link_id, forward, opposite_task_link_id, mirror)
            else:
                rs1 = self.db.query(TaskLink).filter(TaskLink.id == task_link_id).update(forward)
                rs2 = self.db.query(TaskLink).filter(TaskLink.id == opposite_task_link_id).update(mirror)
            events.extend([forward, mirror])

            if not (rs1 and rs2):
                logger.error("Partial update of task link %s (%s/%s rows)", task_link_id, rs1, rs2)
                raise PartialWriteError(task_link_id)

        logger.info("Updated task link %s", task_link_id)
        self._fire_events(EVENT_TASK_LINK_CREATE_UPDATE, events)

        return True

    def _swap_rows(self, task_link_id: int, forward: dict, opposite_task_link_id: int, mirror: dict):
        # deux UPDATE successifs heurteraient l'index unique
        rs1 = self.db.query(TaskLink).filter(
            TaskLink.id == task_link_id
        ).delete(synchronize_session=False)
        rs2 = self.db.query(TaskLink).filter(
            TaskLink.id == opposite_task_link_id
        ).delete(synchronize_session=False)

        if rs1 and rs2:
            self.db.execute(insert(TaskLink).values(id=task_link_id, **forward))
            self.db.execute(insert(TaskLink).values(id=opposite_task_link_id, **mirror))
            logger.debug("Swapped rows of task links %s and %s", task_link_id, opposite_task_link_id)

        return rs1, rs2

    def remove(self, task_link_id: int) -> bool:
        """Delete both rows of a pair."""
        events = []

        with self._transaction():
            task_link = self.db.query(TaskLink).filter(
                TaskLink.id == task_link_id
            ).with_for_update().first()

            if task_link is None:
                raise TaskLinkNotFoundError(task_link_id)

            values = dict(
                task_id=task_link.task_id,
                opposite_task_id=task_link.opposite_task_id,
                link_id=task_link.link_id,
            )
            opposite_link_id = relation_service.get_opposite_link_id(self.db, task_link.link_id)

            self.db.query(TaskLink).filter(TaskLink.id == task_link_id).delete()
            events.append(values)

            deleted = self.db.query(TaskLink).filter(
                TaskLink.task_id == values["opposite_task_id"],
                TaskLink.opposite_task_id == values["task_id"],
                TaskLink.link_id == opposite_link_id,
            ).delete()

            if deleted:
                events.append(dict(
                    task_id=values["opposite_task_id"],
                    opposite_task_id=values["task_id"],
                    link_id=opposite_link_id,
                ))
            else:
                logger.warning("Task link %s removed without a mirror row", task_link_id)

        logger.info("Removed task link %s", task_link_id)
        if self.publish_on_remove:
            self._fire_events(EVENT_TASK_LINK_DELETE, events)

        return True
