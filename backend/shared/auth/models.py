"""User account and session models for authentication."""

from dataclasses import dataclass

from pydantic import BaseModel


class User(BaseModel, frozen=True):
    """User account stored in the user repository."""

    user_id: str
    username: str
    email: str
    password_hash: str  # bcrypt hash; "simple$" prefixed SHA-256 in tests


@dataclass
class StoredSession:
    """Server-side session holding the signed credential of the last login."""

    session_id: str  # UUID, stored in cookie
    token: str
    created_at: float  # time.time()
    expires_at: float  # time.time() + TTL


@dataclass
class LoginResult:
    """Outcome of a successful registration or login."""

    user: User
    session: StoredSession
