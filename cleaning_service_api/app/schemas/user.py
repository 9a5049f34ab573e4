"""
Pydantic models for users and authentication.

Credentials are accepted as optional strings so that a missing or
blank username/password reaches the service layer, which rejects it
with a uniform 400 message instead of a schema error.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """Body of ``POST /register`` and ``POST /login``."""

    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["s3cret-pass"])


class UserRead(BaseModel):
    """Public identity of a user.  The password hash is never returned."""

    id: int
    username: str

    model_config = {
        "from_attributes": True,
    }


class AuthResponse(BaseModel):
    """Token issued on successful registration or login."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead
