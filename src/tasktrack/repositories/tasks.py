"""Task store — owner-scoped persistence for tasks.

Learn: Every statement here carries an owner_id predicate. A task owned
by someone else is therefore invisible: lookups return None and
mutations affect zero rows, exactly as if the task did not exist.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.db.models import Task, TaskStatus


@dataclass(frozen=True)
class TaskFilter:
    """Optional list filters. None means "no constraint"."""

    search: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskRepository:
    """Queries and mutations on the tasks table, always scoped by owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_owner(self, owner_id: int, filters: TaskFilter) -> list[Task]:
        """List an owner's tasks in creation order.

        Learn: Filters are applied conditionally — only when the caller
        provides them. Search is a case-sensitive substring match on
        title OR description; autoescape makes % and _ match literally.
        """
        query = select(Task).where(Task.owner_id == owner_id).order_by(Task.id)
        if filters.status is not None:
            query = query.where(Task.status == TaskStatus(filters.status).value)
        if filters.search:
            query = query.where(
                or_(
                    Task.title.contains(filters.search, autoescape=True),
                    Task.description.contains(filters.search, autoescape=True),
                )
            )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, task_id: int, owner_id: int) -> Optional[Task]:
        result = await self.db.execute(
            select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        return result.scalars().first()

    async def add(self, title: str, description: str, owner_id: int) -> Task:
        task = Task(
            title=title,
            description=description,
            status=TaskStatus.OPEN.value,
            owner_id=owner_id,
        )
        self.db.add(task)
        await self.db.flush()
        return task

    async def delete(self, task_id: int, owner_id: int) -> int:
        """Delete in a single statement. Returns the number of rows removed."""
        result = await self.db.execute(
            delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        return result.rowcount
