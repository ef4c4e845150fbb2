"""Owner-scoped post operations on top of the post repository."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import Post

if TYPE_CHECKING:
    from shared.dal.post_repository import PostRepository

logger = structlog.get_logger()


class PostError(Exception):
    """Base class for post operation failures."""


class InvalidPostError(PostError):
    """Post content is missing or not a string."""


class PostNotFoundError(PostError):
    """No post with this id is owned by the caller."""


class PostService:
    """Create, list, update and delete posts for the authenticated owner."""

    def __init__(self, post_repo: PostRepository) -> None:
        self._post_repo = post_repo

    async def create(self, owner_id: str, text: object) -> Post:
        post = Post(post_id=str(uuid4()), owner_id=owner_id, text=_require_text(text))
        await self._post_repo.create_post(post)
        logger.info("post created", post_id=post.post_id, owner_id=owner_id)
        return post

    async def list_for_owner(self, owner_id: str) -> list[Post]:
        return await self._post_repo.list_by_owner(owner_id)

    async def update(self, owner_id: str, post_id: str, text: object) -> Post:
        """Replace a post's text. Raises PostNotFoundError unless the caller owns it."""
        post = await self._post_repo.update_owned(post_id, owner_id, _require_text(text))
        if post is None:
            raise PostNotFoundError("Post not found")
        return post

    async def delete(self, owner_id: str, post_id: str) -> Post:
        """Delete a post. Raises PostNotFoundError unless the caller owns it."""
        post = await self._post_repo.delete_owned(post_id, owner_id)
        if post is None:
            raise PostNotFoundError("Post not found")
        logger.info("post deleted", post_id=post_id, owner_id=owner_id)
        return post


def _require_text(text: object) -> str:
    if not text or not isinstance(text, str):
        raise InvalidPostError("Please provide valid post content")
    return text
