"""Pydantic schemas for task link request/response validation."""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class TaskLinkCreate(BaseModel):
    """Lier deux tâches"""
    task_id: int
    opposite_task_id: int
    link_id: int


class TaskLinkUpdate(BaseModel):
    task_id: int
    opposite_task_id: int
    link_id: int


class TaskLinkCreated(BaseModel):
    id: int


class TaskLinkResponse(BaseModel):
    """One physical row of a link pair."""

    id: int
    task_id: int
    opposite_task_id: int
    link_id: int

    model_config = ConfigDict(from_attributes=True)


class TaskLinkDetail(BaseModel):
    """A link seen from its owning task, enriched with the opposite task.

    `task_id` is the *opposite* task here, as displayed next to the label.
    """

    id: int
    task_id: int
    label: str
    title: str
    is_active: bool
    project_id: int
    column_id: int
    color_id: Optional[str]
    task_time_spent: Optional[float]
    task_time_estimated: Optional[float]
    task_assignee_id: Optional[int]
    task_assignee_username: Optional[str]
    task_assignee_name: Optional[str]
    column_title: str
    project_name: str

    model_config = ConfigDict(from_attributes=True)


class TaskLinkEventPayload(BaseModel):
    task_id: int
    opposite_task_id: int
    link_id: int
    project_id: Optional[int] = None
