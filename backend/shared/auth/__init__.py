"""Authentication: credentials, password hashing, sessions, and the auth service."""

from shared.auth.models import LoginResult, StoredSession, User
from shared.auth.password import BcryptHasher, PasswordHasher, SimpleHasher, get_hasher
from shared.auth.service import (
    AuthError,
    AuthService,
    InvalidCredentialsError,
    InvalidInputError,
    UserConflictError,
)
from shared.auth.session_store import AuthSessionStore
from shared.auth.settings import AuthSettings
from shared.auth.token import (
    CREDENTIAL_TTL_SECONDS,
    Credential,
    CredentialError,
    CredentialExpiredError,
    InvalidSignatureError,
    sign_credential,
    verify_credential,
)

__all__ = [
    "CREDENTIAL_TTL_SECONDS",
    "AuthError",
    "AuthService",
    "AuthSessionStore",
    "AuthSettings",
    "BcryptHasher",
    "Credential",
    "CredentialError",
    "CredentialExpiredError",
    "InvalidCredentialsError",
    "InvalidInputError",
    "InvalidSignatureError",
    "LoginResult",
    "PasswordHasher",
    "SimpleHasher",
    "StoredSession",
    "User",
    "UserConflictError",
    "get_hasher",
    "sign_credential",
    "verify_credential",
]
