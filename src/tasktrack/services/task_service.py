"""Task service — owner-scoped task management.

Learn: Every operation takes the requesting owner and passes the owner's
id down to the repository, so a foreign task behaves exactly like a
missing one (NotFoundError). Status is forced to OPEN on creation and
only changes through update_status.
"""

from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.db.models import Task, TaskStatus, User
from tasktrack.errors import InternalError, NotFoundError
from tasktrack.repositories.tasks import TaskFilter, TaskRepository

logger = structlog.get_logger()


class TaskService:
    """Business logic for task CRUD, scoped to the task owner."""

    def __init__(self, db: AsyncSession, tasks: Optional[TaskRepository] = None):
        self.db = db
        self.tasks = tasks or TaskRepository(db)

    # ─── Read ────────────────────────────────────────────

    async def list_tasks(
        self, owner: User, filters: Optional[TaskFilter] = None
    ) -> list[Task]:
        """List the owner's tasks matching the filters, oldest first."""
        filters = filters or TaskFilter()
        try:
            return await self.tasks.list_by_owner(owner.id, filters)
        except SQLAlchemyError:
            logger.exception(
                "tasks.list_failed",
                username=owner.username,
                search=filters.search,
                status=filters.status,
            )
            raise InternalError("Failed to retrieve tasks")

    async def get_task(self, task_id: int, owner_id: int) -> Task:
        task = await self.tasks.get(task_id, owner_id)
        if task is None:
            raise NotFoundError(f"Task with ID {task_id} not found")
        return task

    # ─── Create ──────────────────────────────────────────

    async def create_task(self, owner: User, title: str, description: str) -> Task:
        """Create a task in OPEN status for the owner."""
        owner_id, username = owner.id, owner.username
        try:
            task = await self.tasks.add(title, description, owner_id)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(
                "tasks.create_failed",
                username=username,
                title=title,
                description=description,
            )
            raise InternalError("Failed to create task")

        await self.db.refresh(task)
        logger.info("tasks.created", task_id=task.id, owner_id=owner_id)
        return task

    # ─── Update ──────────────────────────────────────────

    async def update_status(
        self, task_id: int, new_status: TaskStatus, owner_id: int
    ) -> Task:
        """Change a task's status. Title, description and owner are untouched.

        Raises:
            NotFoundError: task absent or owned by someone else
        """
        task = await self.get_task(task_id, owner_id)
        old_status = task.status
        task.status = TaskStatus(new_status).value
        await self.db.commit()
        await self.db.refresh(task)

        logger.info(
            "tasks.status_changed",
            task_id=task_id,
            old_status=old_status,
            new_status=task.status,
        )
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, task_id: int, owner_id: int) -> None:
        """Delete a task with one owner-scoped DELETE.

        Learn: No existence check first; the affected row count says whether
        the task existed and belonged to the owner.

        Raises:
            NotFoundError: zero rows matched
        """
        deleted = await self.tasks.delete(task_id, owner_id)
        if deleted == 0:
            raise NotFoundError(f"Task with ID {task_id} not found")
        await self.db.commit()
        logger.info("tasks.deleted", task_id=task_id, owner_id=owner_id)
