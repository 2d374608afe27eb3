"""Data access — one repository per table.

Repositories issue queries and return ORM records; they hold no business
rules. Services own transactions (commit/rollback) and error mapping.
"""

from tasktrack.repositories.tasks import TaskFilter, TaskRepository
from tasktrack.repositories.users import UserRepository

__all__ = ["TaskFilter", "TaskRepository", "UserRepository"]
