"""SQLite-backed post repository."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import structlog

from shared.dal.models import Post
from shared.dal.post_repository import PostRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqlitePostRepository(PostRepository):
    """SQLite implementation of PostRepository.

    Each post is a JSON document; ``owner_id`` is duplicated into an indexed
    column so ownership is part of every WHERE clause.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_post(self, post: Post) -> None:
        async with self._lock:
            self._db.connection.execute(
                "INSERT INTO posts (id, owner_id, data) VALUES (?, ?, ?)",
                (post.post_id, post.owner_id, post.model_dump_json()),
            )
            self._db.connection.commit()

    async def list_by_owner(self, owner_id: str) -> list[Post]:
        """Return the owner's posts in insertion order."""
        rows = self._db.connection.execute(
            "SELECT data FROM posts WHERE owner_id = ? ORDER BY rowid",
            (owner_id,),
        ).fetchall()
        return [Post.model_validate(json.loads(row[0])) for row in rows]

    async def update_owned(self, post_id: str, owner_id: str, text: str) -> Post | None:
        """Replace the text of a post the owner holds. Return the updated post or None."""
        async with self._lock:
            rows = self._db.connection.execute(
                "UPDATE posts SET data = json_set(data, '$.text', ?) WHERE id = ? AND owner_id = ? RETURNING data",
                (text, post_id, owner_id),
            ).fetchall()
            self._db.connection.commit()
        if not rows:
            logger.debug("update matched no owned post", post_id=post_id, owner_id=owner_id)
            return None
        return Post.model_validate(json.loads(rows[0][0]))

    async def delete_owned(self, post_id: str, owner_id: str) -> Post | None:
        """Delete a post the owner holds. Return the deleted post or None."""
        async with self._lock:
            rows = self._db.connection.execute(
                "DELETE FROM posts WHERE id = ? AND owner_id = ? RETURNING data",
                (post_id, owner_id),
            ).fetchall()
            self._db.connection.commit()
        if not rows:
            logger.debug("delete matched no owned post", post_id=post_id, owner_id=owner_id)
            return None
        return Post.model_validate(json.loads(rows[0][0]))
