"""
Business logic for users.

Users are created once at registration and looked up by username or
e‑mail at login.  Uniqueness of both columns is left to the database:
a UNIQUE violation surfaces as ``ConflictError``.
"""

import logging
import sqlite3
import uuid
from typing import Optional

from ..core.db import get_connection, utcnow
from ..core.exceptions import ConflictError, StoreError
from ..schemas.user import UserInDB


logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, username, email, password, created_at, updated_at"


def _row_to_user(row: sqlite3.Row) -> UserInDB:
    return UserInDB(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        password_hash=row["password"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserService:
    """Persistence operations for users."""

    @classmethod
    async def create_user(cls, username: str, email: str, password_hash: str) -> UserInDB:
        """Insert a new user and return it.

        Raises
        ------
        ConflictError
            If the username or e‑mail is already taken.
        StoreError
            On any other database failure.
        """
        user_id = str(uuid.uuid4())
        now = utcnow()
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO users (id, username, email, password, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (user_id, username, email, password_hash, now, now),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            logger.info("Registration rejected for %s: %s", username, e)
            raise ConflictError() from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Failed to create user %s", username)
            raise StoreError("Unable to register user") from e
        finally:
            conn.close()
        logger.info("Registered user %s (%s)", username, user_id)
        return UserInDB(
            id=user_id,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    async def get_by_username(cls, username: str) -> Optional[UserInDB]:
        return await cls._get_one("username", username)

    @classmethod
    async def get_by_email(cls, email: str) -> Optional[UserInDB]:
        return await cls._get_one("email", email)

    @classmethod
    async def _get_one(cls, column: str, value: str) -> Optional[UserInDB]:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE {column} = ?",
                (value,),
            ).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()
