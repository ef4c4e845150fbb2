"""Password hashing: protocol, bcrypt (production), and simple SHA-256 (tests).

bcrypt is CPU-bound (~100ms per call), so BcryptHasher runs it in a worker
thread via anyio.to_thread.run_sync() to keep the event loop responsive.

SimpleHasher stores "simple$" + SHA-256 hex and is only meant for tests,
where bcrypt's cost would dominate the suite.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Protocol, runtime_checkable

import bcrypt
from anyio import to_thread

BCRYPT_MAX_BYTES = 72


@runtime_checkable
class PasswordHasher(Protocol):
    """Hash and verify passwords."""

    async def hash(self, plain: str) -> str: ...

    async def verify(self, plain: str, hashed: str) -> bool: ...


class BcryptHasher:
    """Production hasher using bcrypt off the event loop."""

    async def hash(self, plain: str) -> str:
        encoded = _truncate(plain)
        return await to_thread.run_sync(lambda: bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8"))

    async def verify(self, plain: str, hashed: str) -> bool:
        """Return False for malformed hashes instead of raising ValueError."""
        encoded_plain = _truncate(plain)
        encoded_hash = hashed.encode("utf-8")
        try:
            return await to_thread.run_sync(lambda: bcrypt.checkpw(encoded_plain, encoded_hash))
        except ValueError:
            return False


def _truncate(plain: str) -> bytes:
    # bcrypt>=4.1 raises on inputs over 72 bytes instead of truncating.
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


_SIMPLE_PREFIX = "simple$"


class SimpleHasher:
    """Fast SHA-256 hasher for tests. Not suitable for production use."""

    async def hash(self, plain: str) -> str:
        return _SIMPLE_PREFIX + hashlib.sha256(plain.encode("utf-8")).hexdigest()

    async def verify(self, plain: str, hashed: str) -> bool:
        if not hashed.startswith(_SIMPLE_PREFIX):
            return False
        return hmac.compare_digest(hashed, await self.hash(plain))


def get_hasher(name: str = "bcrypt") -> PasswordHasher:
    """Return a PasswordHasher by name ("bcrypt" or "simple")."""
    if name == "bcrypt":
        return BcryptHasher()
    if name == "simple":
        return SimpleHasher()
    raise ValueError(f"Unknown password hasher: {name!r}")
