"""Task API routes.

Learn: These routes translate HTTP to TaskService calls and map domain
errors to status codes. Every route receives the authenticated user
and passes it (or its id) down, so every query is owner-scoped.

- GET /tasks?search=&status= → the caller's tasks, oldest first
- GET /tasks/:id → one task (404 if absent or not owned)
- POST /tasks → create (status always OPEN)
- PATCH /tasks/:id/status → change status
- DELETE /tasks/:id → delete (404 if absent or not owned)
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import get_current_user
from tasktrack.db.engine import get_db
from tasktrack.db.models import TaskStatus, User
from tasktrack.errors import InternalError, NotFoundError
from tasktrack.repositories.tasks import TaskFilter
from tasktrack.schemas.task import StatusUpdate, TaskCreate, TaskRead
from tasktrack.services.task_service import TaskService

logger = structlog.get_logger()

router = APIRouter(prefix="/tasks")

# tasks.id is a 32-bit INTEGER column; larger ids cannot be bound
MAX_TASK_ID = 2**31 - 1


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


def task_filter(
    search: Optional[str] = Query(None, min_length=1, description="Substring of title or description"),
    status: Optional[TaskStatus] = Query(None, description="Filter by status"),
) -> TaskFilter:
    """Parse list query params into a TaskFilter (422 on bad values)."""
    return TaskFilter(search=search, status=status)


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    filters: TaskFilter = Depends(task_filter),
    user: User = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """List the caller's tasks with optional filters."""
    logger.debug("tasks.list", search=filters.search, status=filters.status)
    try:
        return await svc.list_tasks(user, filters)
    except InternalError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
    user: User = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Get a single task by ID."""
    try:
        return await svc.get_task(task_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    user: User = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a new task in OPEN status."""
    try:
        return await svc.create_task(user, body.title, body.description)
    except InternalError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_task_status(
    body: StatusUpdate,
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
    user: User = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Change a task's status (OPEN, IN_PROGRESS or DONE)."""
    try:
        return await svc.update_status(task_id, body.status, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{task_id}")
async def delete_task(
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
    user: User = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Delete a task."""
    try:
        await svc.delete_task(task_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": True}
