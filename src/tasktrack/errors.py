"""Domain errors raised by the service layer.

Route handlers translate these into HTTP responses; services never
raise HTTPException themselves.
"""


class TaskTrackError(Exception):
    """Base class for all domain errors."""


class ConflictError(TaskTrackError):
    """Raised when a unique value (e.g. a username) is already taken. → 409"""


class UnauthorizedError(TaskTrackError):
    """Raised for bad credentials. → 401"""


class NotFoundError(TaskTrackError):
    """Raised when a record is absent or not owned by the caller. → 404"""


class InternalError(TaskTrackError):
    """Raised for unexpected persistence failures; details stay in the logs. → 500"""
