"""Pydantic schemas for tasks.

Learn: Separate schemas for create/read keep the API clean.
- TaskCreate: what you POST (status is not accepted — always OPEN)
- StatusUpdate: what you PATCH to /tasks/:id/status
- TaskRead: what the API returns (owner_id only, never the owner)
"""

from datetime import datetime

from pydantic import BaseModel, Field

from tasktrack.db.models import TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)

    # Whitespace-only titles/descriptions fail min_length after stripping.
    # Unknown keys (e.g. "status") are ignored.
    model_config = {"str_strip_whitespace": True}


class StatusUpdate(BaseModel):
    status: TaskStatus


class TaskRead(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
