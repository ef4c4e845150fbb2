"""Abstract interface for owner-scoped post persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Post


class PostRepository(ABC):
    """Abstract interface for post persistence.

    Mutating operations match on both post id and owner id and return None
    when nothing matched, so callers cannot tell a missing post from one
    owned by someone else.
    """

    @abstractmethod
    async def create_post(self, post: Post) -> None: ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[Post]: ...

    @abstractmethod
    async def update_owned(self, post_id: str, owner_id: str, text: str) -> Post | None: ...

    @abstractmethod
    async def delete_owned(self, post_id: str, owner_id: str) -> Post | None: ...
