"""SQLite-backed user repository."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from typing import TYPE_CHECKING

from shared.auth.models import User
from shared.dal.user_repository import UserRepository

if TYPE_CHECKING:
    from shared.db.connection import Database


class SqliteUserRepository(UserRepository):
    """SQLite implementation of UserRepository.

    Inserts run under an asyncio lock and rely on the unique indexes on
    username and email, mapping IntegrityError to a domain ValueError.
    Lookups are exact (case-sensitive) matches.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_user(self, user: User) -> None:
        """Insert a user. Raises ValueError on duplicate id, username, or email."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO users (id, username, email, data) VALUES (?, ?, ?, ?)",
                    (user.user_id, user.username, user.email, user.model_dump_json()),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError as exc:
                self._db.connection.rollback()
                error_msg = str(exc).lower()
                if "users.id" in error_msg:
                    raise ValueError(f"User with id '{user.user_id}' already exists") from exc
                if "users.username" in error_msg or "idx_users_username" in error_msg:
                    raise ValueError(f"Username '{user.username}' already taken") from exc
                if "users.email" in error_msg or "idx_users_email" in error_msg:
                    raise ValueError(f"Email '{user.email}' already registered") from exc
                raise ValueError(str(exc)) from exc  # pragma: no cover

    async def get_by_username(self, username: str) -> User | None:
        """Look up a user by exact username."""
        row = self._db.connection.execute(
            "SELECT data FROM users WHERE username = ?",
            (username,),
        ).fetchone()
        if row is None:
            return None
        return User.model_validate(json.loads(row[0]))

    async def find_by_username_or_email(self, username: str, email: str) -> User | None:
        """Return any user holding either the username or the email."""
        row = self._db.connection.execute(
            "SELECT data FROM users WHERE username = ? OR email = ? LIMIT 1",
            (username, email),
        ).fetchone()
        if row is None:
            return None
        return User.model_validate(json.loads(row[0]))
