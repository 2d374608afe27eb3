"""JWT access token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries only the username (as "sub") plus expiry — no roles
or scopes — so authorization downstream is purely "is this the owner".
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from tasktrack.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""


def create_access_token(
    username: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed access token for a username."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload = {
        "sub": username,
        "type": "access",
        "exp": expires,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """Verify an access token and return its username claim.

    Raises TokenError on a bad signature, expiry, wrong token type
    or missing subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    if payload.get("type") != "access":
        raise TokenError("Not an access token")

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise TokenError("Token has no subject")
    return username
