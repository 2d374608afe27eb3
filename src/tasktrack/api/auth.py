"""Auth API — sign-up, sign-in, current user.

Learn: Routes for user authentication:
- POST /auth/signup → create a new user account (409 if the name is taken)
- POST /auth/signin → username/password → JWT access token
- GET /auth/me → the user behind the Bearer token
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import get_current_user
from tasktrack.db.engine import get_db
from tasktrack.db.models import User
from tasktrack.errors import ConflictError, InternalError, UnauthorizedError
from tasktrack.schemas.auth import SignInRequest, SignUpRequest, TokenResponse, UserRead
from tasktrack.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _auth_svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/signup", response_model=UserRead, status_code=201)
async def sign_up(body: SignUpRequest, svc: AuthService = Depends(_auth_svc)):
    """Create a new user account."""
    try:
        return await svc.sign_up(body.username, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InternalError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/signin", response_model=TokenResponse)
async def sign_in(body: SignInRequest, svc: AuthService = Depends(_auth_svc)):
    """Sign in with username and password → JWT access token."""
    try:
        token = await svc.sign_in(body.username, body.password)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserRead)
async def get_me(user: User = Depends(get_current_user)):
    """Get the current authenticated user's info."""
    return user
