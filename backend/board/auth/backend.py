"""Starlette AuthenticationBackend that resolves the session credential."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.authentication import AuthCredentials, AuthenticationBackend

from board.auth.models import AnonymousVisitor, AuthenticatedUser
from shared.auth.token import CredentialError, CredentialExpiredError

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from shared.auth.service import AuthService

SESSION_COOKIE_NAME = "session_id"

logger = structlog.get_logger()


class SessionCredentialBackend(AuthenticationBackend):
    """Authenticate requests from the credential stored behind the session cookie.

    Never rejects a request by itself: a missing or invalid credential yields an
    AnonymousVisitor, and route policies decide between 401 and redirect.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedUser | AnonymousVisitor]:
        session_id = conn.cookies.get(SESSION_COOKIE_NAME)
        try:
            credential = self._auth_service.resolve_credential(session_id)
        except CredentialExpiredError:
            logger.info("session credential expired")
            return AuthCredentials(), AnonymousVisitor("Invalid token")
        except CredentialError as exc:
            logger.warning("session credential rejected", reason=str(exc))
            return AuthCredentials(), AnonymousVisitor("Invalid token")

        if credential is None:
            return AuthCredentials(), AnonymousVisitor("Unauthorized")

        structlog.contextvars.bind_contextvars(user_id=credential.user_id)
        return AuthCredentials(["authenticated"]), AuthenticatedUser(
            user_id=credential.user_id,
            username=credential.username,
        )
