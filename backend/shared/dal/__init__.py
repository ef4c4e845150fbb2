"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.models import Post
from shared.dal.post_repository import PostRepository
from shared.dal.user_repository import UserRepository

__all__ = [
    "Post",
    "PostRepository",
    "UserRepository",
]
