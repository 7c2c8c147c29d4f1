"""Typed errors raised by the task link store.

Callers (and the HTTP layer) must be able to tell "link not found" from
"duplicate link" from "internal inconsistency", so every failure mode has its
own class, a stable `code` and the HTTP status the API answers with.
"""


class TaskLinkError(Exception):
    """Base exception for all task link failures."""

    code = "task_link_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message, "code": self.code}


class TaskLinkNotFoundError(TaskLinkError):
    code = "task_link_not_found"
    http_status = 404

    def __init__(self, task_link_id: int):
        super().__init__(f"Task link {task_link_id} not found")
        self.task_link_id = task_link_id


class RelationNotFoundError(TaskLinkError):
    code = "relation_not_found"
    http_status = 404

    def __init__(self, link_id: int):
        super().__init__(f"Relation {link_id} not found")
        self.link_id = link_id


class MirrorLinkMissingError(TaskLinkError):
    """The mirror row of an existing task link is gone (corrupted pair)."""

    code = "task_link_mirror_missing"
    http_status = 500

    def __init__(self, task_link_id: int):
        super().__init__(f"Task link {task_link_id} has no mirror row")
        self.task_link_id = task_link_id


class DuplicateTaskLinkError(TaskLinkError):
    """Storage rejected a write because the pair already exists."""

    code = "task_link_duplicate"
    http_status = 409

    def __init__(self, task_id: int, opposite_task_id: int, link_id: int):
        super().__init__(
            f"Task {task_id} is already linked to task {opposite_task_id} with relation {link_id}"
        )
        self.task_id = task_id
        self.opposite_task_id = opposite_task_id
        self.link_id = link_id


class PartialWriteError(TaskLinkError):
    """One row of a pair was written and the other was not (rolled back)."""

    code = "task_link_partial_write"
    http_status = 500

    def __init__(self, task_link_id: int):
        super().__init__(f"Task link {task_link_id} could not be updated on both sides")
        self.task_link_id = task_link_id
