"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level for the tasks router
using FastAPI's dependencies parameter, so no task route can be reached
without a valid token. Health and auth routers are open.
"""

from fastapi import APIRouter, Depends

from tasktrack.api.auth import router as auth_router
from tasktrack.api.health import router as health_router
from tasktrack.api.tasks import router as tasks_router
from tasktrack.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid Bearer token
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
