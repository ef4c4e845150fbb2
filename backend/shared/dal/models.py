"""Persistence models for the data access layer."""

from pydantic import BaseModel, Field


class Post(BaseModel, frozen=True):
    """A short text post owned by a single user.

    Serialized for API responses with ``model_dump(by_alias=True)`` as
    ``{"id", "userId", "text"}``.
    """

    post_id: str = Field(serialization_alias="id")
    owner_id: str = Field(serialization_alias="userId")
    text: str
