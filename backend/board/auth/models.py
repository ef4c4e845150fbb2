"""User models for Starlette AuthenticationMiddleware integration."""

from __future__ import annotations

from starlette.authentication import BaseUser, UnauthenticatedUser


class AuthenticatedUser(BaseUser):
    """Identity decoded from the session credential, exposed as request.user."""

    def __init__(self, user_id: str, username: str) -> None:
        self._user_id = user_id
        self._username = username

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self._username

    @property
    def identity(self) -> str:
        return self._user_id

    @property
    def username(self) -> str:
        return self._username

    @property
    def user_id(self) -> str:
        return self._user_id


class AnonymousVisitor(UnauthenticatedUser):
    """Unauthenticated request.user that remembers why it was not authenticated."""

    def __init__(self, reason: str = "Unauthorized") -> None:
        self.reason = reason
