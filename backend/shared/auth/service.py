"""Auth service coordinating registration, login, and session credentials."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import LoginResult, User
from shared.auth.token import CREDENTIAL_TTL_SECONDS, sign_credential, verify_credential

if TYPE_CHECKING:
    from shared.auth.password import PasswordHasher
    from shared.auth.session_store import AuthSessionStore
    from shared.auth.token import Credential
    from shared.dal.user_repository import UserRepository

logger = structlog.get_logger()


class AuthError(Exception):
    """Authentication or registration failure."""


class InvalidInputError(AuthError):
    """A required field is missing or malformed."""


class UserConflictError(AuthError):
    """A user with the same username or email already exists."""


class InvalidCredentialsError(AuthError):
    """No user matches the given username and password."""


class AuthService:
    """Coordinate user registration, login, and credential resolution."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_store: AuthSessionStore,
        *,
        password_hasher: PasswordHasher,
        secret_key: str,
        credential_ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
    ) -> None:
        self._user_repo = user_repo
        self._session_store = session_store
        self._hasher = password_hasher
        self._secret_key = secret_key
        self._credential_ttl = credential_ttl_seconds

    async def register(
        self,
        username: object,
        email: object,
        password: object,
        session_id: str | None = None,
    ) -> LoginResult:
        """Create a user and log them in on a freshly issued session.

        A session id the client already holds is destroyed, never reused.
        """
        username = _require_text("username", username)
        email = _require_text("email", email)
        password = _require_text("password", password)

        if await self._user_repo.find_by_username_or_email(username, email) is not None:
            raise UserConflictError("User already exists")

        user = User(
            user_id=str(uuid4()),
            username=username,
            email=email,
            password_hash=await self._hasher.hash(password),
        )
        try:
            await self._user_repo.create_user(user)
        except ValueError as e:
            raise UserConflictError("User already exists") from e

        logger.info("user registered", user_id=user.user_id, username=user.username)
        return self._issue(user, session_id)

    async def login(self, username: object, password: object, session_id: str | None = None) -> LoginResult:
        """Validate credentials and store a fresh credential on a new session."""
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidCredentialsError("Invalid credentials")
        user = await self._user_repo.get_by_username(username)
        if user is None:
            raise InvalidCredentialsError("Invalid credentials")
        if not await self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")
        return self._issue(user, session_id)

    def resolve_credential(self, session_id: str | None) -> Credential | None:
        """Return the verified credential stored for a session.

        Returns None when there is no session or it holds no token.
        Raises CredentialError when the stored token is tampered or expired.
        """
        if session_id is None:
            return None
        token = self._session_store.get_token(session_id)
        if token is None:
            return None
        return verify_credential(token, self._secret_key)

    def logout(self, session_id: str) -> None:
        """Destroy a session."""
        self._session_store.destroy(session_id)

    def _issue(self, user: User, previous_session_id: str | None) -> LoginResult:
        if previous_session_id is not None:
            self._session_store.destroy(previous_session_id)
        token = sign_credential(user.user_id, user.username, self._secret_key, ttl_seconds=self._credential_ttl)
        session = self._session_store.save(None, token, ttl_seconds=self._credential_ttl)
        return LoginResult(user=user, session=session)


def _require_text(field: str, value: object) -> str:
    """Return value if it is a non-empty string, otherwise raise InvalidInputError."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Please provide a valid {field}")
    return value
