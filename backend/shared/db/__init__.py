"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.post_repository import SqlitePostRepository
from shared.db.user_repository import SqliteUserRepository

__all__ = [
    "Database",
    "SqlitePostRepository",
    "SqliteUserRepository",
]
