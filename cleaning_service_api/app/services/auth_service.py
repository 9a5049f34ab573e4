"""
Authentication: registration, login and bearer token verification.

``AuthService`` combines the credential store (``UserService``) with
the token primitives in ``core.security``.  Tokens carry the username
as ``sub`` and the numeric id as ``user_id``; the id is what booking
queries are scoped by.
"""

import logging
from typing import Any, Dict, Optional

from cleaning_service_api.app.core.security import create_access_token, decode_access_token
from cleaning_service_api.app.schemas.user import AuthResponse, UserRead
from cleaning_service_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Raised by ``AuthService.login`` for an unknown user or wrong password."""


def _issue_token(user: UserRead) -> AuthResponse:
    token = create_access_token({"sub": user.username, "user_id": user.id})
    return AuthResponse(access_token=token, user=user)


def _require_credentials(username: Optional[str], password: Optional[str]) -> str:
    username = (username or "").strip()
    if not username or not password:
        raise ValueError("Username and password are required")
    return username


class AuthService:
    """Issue and verify bearer tokens."""

    @classmethod
    async def register(cls, username: Optional[str], password: Optional[str]) -> AuthResponse:
        """Create an account and return a token for it.

        Raises ``ValueError`` if a credential is missing or the
        username is taken.
        """
        username = _require_credentials(username, password)
        user = await UserService.create_user(username, password)
        return _issue_token(user)

    @classmethod
    async def login(cls, username: Optional[str], password: Optional[str]) -> AuthResponse:
        """Check a username/password pair and return a fresh token.

        Raises ``ValueError`` if a credential is missing and
        ``InvalidCredentialsError`` if the pair does not match a user.
        """
        username = _require_credentials(username, password)
        user = await UserService.authenticate(username, password)
        if user is None:
            raise InvalidCredentialsError("Invalid credentials")
        return _issue_token(user)

    @classmethod
    async def verify(cls, token: str) -> Optional[Dict[str, Any]]:
        """Return the identity embedded in ``token`` or ``None``.

        The token must be well formed, correctly signed, unexpired and
        name a user that still exists.
        """
        payload = decode_access_token(token)
        if not payload:
            return None
        user_id = payload.get("user_id")
        if not isinstance(user_id, int):
            return None
        user = await UserService.get_user_by_id(user_id)
        if user is None or user.username != payload.get("sub"):
            logger.warning("Rejected token for unknown user id %s", user_id)
            return None
        payload["username"] = user.username
        return payload
