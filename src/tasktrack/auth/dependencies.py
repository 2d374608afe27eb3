"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract and
validate the current user from the request.

Per request the flow is:
  Unauthenticated → (valid token + user found) → Authenticated
  Unauthenticated → (missing/invalid/expired token, or user gone) → Rejected (401)
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.jwt import TokenError, verify_token
from tasktrack.db.engine import get_db
from tasktrack.db.models import User
from tasktrack.repositories.users import UserRepository

logger = structlog.get_logger()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the Bearer token to a User (401 otherwise).

    Learn: The token only proves who the caller *was* when it was issued.
    We re-load the user on every request so a token for a user that no
    longer exists is rejected. The loaded user is also stored on
    request.state and bound to the log context.
    """
    scheme, _, token = (authorization or "").partition(" ")
    # Auth scheme names are case-insensitive (RFC 7235)
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Authentication required")

    try:
        username = verify_token(token.strip())
    except TokenError as e:
        raise _unauthorized(str(e))

    user = await UserRepository(db).get_by_username(username)
    if user is None:
        logger.info("auth.token_user_missing", username=username)
        raise _unauthorized("User not found")

    request.state.user = user
    structlog.contextvars.bind_contextvars(username=user.username)
    return user
