"""Auth service — user registration and credential validation.

Learn: Service layer separates business logic from HTTP routing.
Routes call services, services call repositories. Domain errors from
tasktrack.errors are raised here and mapped to status codes by the routes.
"""

from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.jwt import create_access_token
from tasktrack.auth.password import generate_salt, hash_password, verify_password
from tasktrack.db.models import User
from tasktrack.errors import ConflictError, InternalError, UnauthorizedError
from tasktrack.repositories.users import UserRepository

logger = structlog.get_logger()


class AuthService:
    """Sign-up, credential validation and token issuing."""

    def __init__(self, db: AsyncSession, users: Optional[UserRepository] = None):
        self.db = db
        self.users = users or UserRepository(db)

    async def sign_up(self, username: str, password: str) -> User:
        """Register a user with a freshly salted password digest.

        Learn: We don't check for an existing username first — the unique
        index is the source of truth, and checking first would race with
        a concurrent sign-up. The violation is translated instead.

        Raises:
            ConflictError: username already taken
            InternalError: any other persistence failure
        """
        salt = generate_salt()
        digest = hash_password(password, salt)
        try:
            user = await self.users.add(username, digest, salt)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("auth.signup_conflict", username=username)
            raise ConflictError("Username already exists")
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("auth.signup_failed", username=username)
            raise InternalError("Failed to create user")

        await self.db.refresh(user)
        logger.info("auth.signup", user_id=user.id, username=user.username)
        return user

    async def validate_credentials(self, username: str, password: str) -> Optional[str]:
        """Return the username if the password matches, else None.

        Unknown users and wrong passwords both return None, so callers
        cannot tell them apart.
        """
        user = await self.users.get_by_username(username)
        if user is None:
            return None
        if not verify_password(password, user.salt, user.password_hash):
            return None
        return user.username

    async def sign_in(self, username: str, password: str) -> str:
        """Validate credentials and issue an access token.

        Raises:
            UnauthorizedError: unknown user or wrong password
        """
        validated = await self.validate_credentials(username, password)
        if validated is None:
            logger.info("auth.signin_rejected", username=username)
            raise UnauthorizedError("Invalid credentials")
        return create_access_token(validated)
