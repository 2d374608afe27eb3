"""Pydantic schemas for sign-up, sign-in and the current user."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tasktrack.auth.password import MAX_PASSWORD_BYTES

# At least one upper-case letter, one lower-case letter, and a digit or symbol
_STRONG_PASSWORD = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*[\d\W]).*$")


class AuthCredentials(BaseModel):
    username: str = Field(..., min_length=4, max_length=20)
    password: str = Field(..., min_length=8, max_length=32)


class SignUpRequest(AuthCredentials):
    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if not _STRONG_PASSWORD.match(value):
            raise ValueError("Password too weak")
        return value


class SignInRequest(AuthCredentials):
    """Length limits only — a weak password just fails to match."""


class TokenResponse(BaseModel):
    """Serialized as {"accessToken": ..., "tokenType": "bearer"}."""

    access_token: str = Field(serialization_alias="accessToken")
    token_type: str = Field(default="bearer", serialization_alias="tokenType")


class UserRead(BaseModel):
    id: int
    username: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
