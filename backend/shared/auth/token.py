"""HMAC-SHA256 signed credentials carrying a user's identity.

A credential is issued on login or registration and kept server-side in the
session store. Every guarded request verifies it again, so an expired or
tampered credential is rejected even while its session entry is still alive.

Token format: base64url(json_payload_bytes).base64url(hmac_sha256_signature)
"""

import base64
import binascii
import hashlib
import hmac
import json
import math
import time
from dataclasses import asdict, dataclass

import structlog

logger = structlog.get_logger()

_TOKEN_PARTS = 2  # base64url(payload).base64url(signature)

CREDENTIAL_TTL_SECONDS = 3600  # 1 hour
CLOCK_SKEW_SECONDS = 60


class CredentialError(Exception):
    """A credential could not be accepted."""


class InvalidSignatureError(CredentialError):
    """The token is malformed or its signature does not match."""


class CredentialExpiredError(CredentialError):
    """The token was valid but its lifetime has passed."""


@dataclass
class Credential:
    """Payload carried inside a signed credential."""

    user_id: str
    username: str
    issued_at: float
    expires_at: float


def sign_credential(
    user_id: str,
    username: str,
    secret: str,
    ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
) -> str:
    """Issue a credential for the given user and return the signed token."""
    now = time.time()
    credential = Credential(
        user_id=user_id,
        username=username,
        issued_at=now,
        expires_at=now + ttl_seconds,
    )
    return encode_credential(credential, secret)


def encode_credential(credential: Credential, secret: str) -> str:
    """Serialize to JSON, compute HMAC-SHA256, return base64url(payload).base64url(sig)."""
    payload_bytes = json.dumps(asdict(credential), sort_keys=True).encode()
    sig = hmac.new(secret.encode(), payload_bytes, hashlib.sha256).digest()
    payload_b64 = base64.urlsafe_b64encode(payload_bytes).decode()
    sig_b64 = base64.urlsafe_b64encode(sig).decode()
    return f"{payload_b64}.{sig_b64}"


def verify_credential(token: str, secret: str) -> Credential:
    """Verify signature and expiry.

    Raises InvalidSignatureError for anything that was not produced by us with
    this secret, and CredentialExpiredError once the lifetime has passed.
    """
    parts = token.split(".")
    if len(parts) != _TOKEN_PARTS:
        raise InvalidSignatureError("Malformed token")

    try:
        payload_bytes = base64.urlsafe_b64decode(parts[0])
        provided_sig = base64.urlsafe_b64decode(parts[1])
    except (ValueError, binascii.Error) as exc:
        raise InvalidSignatureError("Malformed token") from exc

    expected_sig = hmac.new(secret.encode(), payload_bytes, hashlib.sha256).digest()
    if not hmac.compare_digest(provided_sig, expected_sig):
        logger.debug("credential signature mismatch")
        raise InvalidSignatureError("Signature mismatch")

    try:
        data = json.loads(payload_bytes)
        credential = Credential(**data)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.debug("credential malformed payload")
        raise InvalidSignatureError("Malformed payload") from exc

    _check_timestamps(credential)
    return credential


def _is_finite_number(value: object) -> bool:
    """Check that a value is a finite int or float (excluding bool)."""
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _check_timestamps(credential: Credential) -> None:
    """Validate temporal claims.

    A credential must carry finite timestamps, must not be issued in the
    future (beyond clock skew), and must expire after it was issued.
    Those failures mean the payload is not one we issue. Passing the
    expiry time is reported separately.
    """
    if not _is_finite_number(credential.issued_at) or not _is_finite_number(credential.expires_at):
        raise InvalidSignatureError("Non-finite timestamp")

    now = time.time()

    if credential.issued_at > now + CLOCK_SKEW_SECONDS:
        raise InvalidSignatureError("Issued in the future")

    if credential.expires_at <= credential.issued_at:
        raise InvalidSignatureError("Expiry precedes issue time")

    if now > credential.expires_at:
        raise CredentialExpiredError("Credential expired")
