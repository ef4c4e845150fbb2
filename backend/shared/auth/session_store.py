"""In-memory session store mapping session ids to stored credentials."""

import asyncio
import contextlib
import time
from uuid import uuid4

import structlog

from shared.auth.models import StoredSession
from shared.auth.token import CREDENTIAL_TTL_SECONDS

CLEANUP_INTERVAL_SECONDS = 300  # 5 minutes
DEFAULT_SESSION_TTL_SECONDS = CREDENTIAL_TTL_SECONDS

logger = structlog.get_logger()


class AuthSessionStore:
    """Session id -> credential token, with expiry cleanup.

    The session id travels in a cookie; the signed credential itself never
    leaves the server. Sessions are ephemeral: a server restart means re-login.
    Call start_cleanup() on app startup and stop_cleanup() on shutdown.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, StoredSession] = {}
        self._cleanup_task: asyncio.Task[None] | None = None

    def save(
        self,
        session_id: str | None,
        token: str,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
    ) -> StoredSession:
        """Store a token under a live session id, or under a freshly generated one.

        An id the store does not currently hold is never adopted.
        """
        if session_id not in self._sessions:
            session_id = str(uuid4())
        now = time.time()
        session = StoredSession(
            session_id=session_id,
            token=token,
            created_at=now,
            expires_at=now + ttl_seconds,
        )
        self._sessions[session.session_id] = session
        return session

    def get_token(self, session_id: str) -> str | None:
        """Return the stored token of a live session, or None."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if time.time() > session.expires_at:
            del self._sessions[session_id]
            return None
        return session.token

    def destroy(self, session_id: str) -> None:
        """Remove a session (logout)."""
        self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove all expired sessions. Return count of removed sessions."""
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if now > s.expires_at]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("cleaned up expired sessions", count=len(expired))
        return len(expired)

    def start_cleanup(self) -> None:
        """Start the periodic cleanup background task."""
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup(self) -> None:
        """Stop the periodic cleanup background task."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._cleanup_task
            self._cleanup_task = None

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            self.cleanup_expired()
