"""
Authentication endpoints for API v1.

``POST /register`` creates an account and ``POST /login`` exchanges a
username and password for a bearer token.  ``GET /me`` echoes the
identity of the token holder.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from cleaning_service_api.app.core.security import get_current_user
from cleaning_service_api.app.schemas.user import AuthResponse, UserCredentials, UserRead
from cleaning_service_api.app.services.auth_service import AuthService, InvalidCredentialsError


router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(credentials: UserCredentials) -> AuthResponse:
    """Register a new account and return a token for it.

    Returns 400 if the username or password is missing or the username
    is already taken.
    """
    try:
        return await AuthService.register(credentials.username, credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserCredentials) -> AuthResponse:
    """Authenticate and return a fresh token.

    Returns 400 if a credential is missing and 401 if the username is
    unknown or the password is wrong.
    """
    try:
        return await AuthService.login(credentials.username, credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: Dict[str, Any] = Depends(get_current_user)) -> UserRead:
    return UserRead(id=current_user["user_id"], username=current_user["username"])
