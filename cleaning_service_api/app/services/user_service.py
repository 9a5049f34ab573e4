"""
Business logic for the credential store.

Users are identified by a unique username and carry a PBKDF2 password
hash.  Accounts are created at registration and are not modified by
the API afterwards.
"""

import logging
import sqlite3
from typing import Optional

from cleaning_service_api.app.core.db import get_connection
from cleaning_service_api.app.core.security import hash_password, verify_password
from cleaning_service_api.app.schemas.user import UserRead


logger = logging.getLogger(__name__)


class UserService:
    """Persistence operations for user accounts."""

    @classmethod
    async def create_user(cls, username: str, password: str) -> UserRead:
        """Insert a new user with a hashed password.

        Raises ``ValueError`` if the username is already taken.
        """
        hashed = hash_password(password)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (username, password_hash) VALUES (?, ?)",
                    (username, hashed),
                )
            except sqlite3.IntegrityError:
                conn.rollback()
                raise ValueError("Username already exists") from None
            user_id = cursor.lastrowid
            conn.commit()
            logger.info("Registered user %s (id=%s)", username, user_id)
            return UserRead(id=user_id, username=username)
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, username: str, password: str) -> Optional[UserRead]:
        """Return the user if the password matches, otherwise ``None``.

        An unknown username and a wrong password are indistinguishable
        to the caller.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, username, password_hash FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        finally:
            conn.close()
        if not row or not verify_password(password, row["password_hash"]):
            logger.info("Failed login attempt for %s", username)
            return None
        return UserRead(id=row["id"], username=row["username"])

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, username FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
            if row:
                return UserRead(id=row["id"], username=row["username"])
            return None
        finally:
            conn.close()
