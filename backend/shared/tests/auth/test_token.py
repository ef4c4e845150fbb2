"""Tests for HMAC-SHA256 credential signing and verification."""

import base64
import json
import time
from unittest.mock import patch

import pytest

from shared.auth.token import (
    CLOCK_SKEW_SECONDS,
    CREDENTIAL_TTL_SECONDS,
    Credential,
    CredentialExpiredError,
    InvalidSignatureError,
    encode_credential,
    sign_credential,
    verify_credential,
)

SECRET = "test-hmac-secret"


def _make_credential(
    user_id: str = "user-123",
    username: str = "alice",
    issued_at: float | None = None,
    expires_at: float | None = None,
) -> Credential:
    now = time.time()
    return Credential(
        user_id=user_id,
        username=username,
        issued_at=issued_at if issued_at is not None else now,
        expires_at=expires_at if expires_at is not None else now + CREDENTIAL_TTL_SECONDS,
    )


class TestSignAndVerify:
    def test_signed_credential_verifies(self):
        token = sign_credential("user-123", "alice", SECRET)
        credential = verify_credential(token, SECRET)
        assert credential.user_id == "user-123"
        assert credential.username == "alice"

    def test_lifetime_is_one_hour_by_default(self):
        token = sign_credential("user-123", "alice", SECRET)
        credential = verify_credential(token, SECRET)
        assert credential.expires_at - credential.issued_at == CREDENTIAL_TTL_SECONDS

    def test_tokens_differ_across_calls(self):
        with patch("shared.auth.token.time") as mock_time:
            mock_time.time.side_effect = [1000.0, 1001.0]
            first = sign_credential("user-123", "alice", SECRET)
            second = sign_credential("user-123", "alice", SECRET)
        assert first != second

    def test_same_payload_and_secret_give_same_token(self):
        credential = _make_credential()
        assert encode_credential(credential, SECRET) == encode_credential(credential, SECRET)


class TestExpiredCredential:
    def test_expired_credential_raises_expired(self):
        past = time.time() - CREDENTIAL_TTL_SECONDS - 1
        token = encode_credential(_make_credential(issued_at=past, expires_at=past + CREDENTIAL_TTL_SECONDS), SECRET)
        with pytest.raises(CredentialExpiredError):
            verify_credential(token, SECRET)

    def test_credential_older_than_an_hour_is_rejected(self):
        token = sign_credential("user-123", "alice", SECRET)
        with patch("shared.auth.token.time") as mock_time:
            mock_time.time.return_value = time.time() + CREDENTIAL_TTL_SECONDS + 1
            with pytest.raises(CredentialExpiredError):
                verify_credential(token, SECRET)


class TestTamperedCredential:
    def test_tampered_payload_rejected(self):
        token = sign_credential("user-123", "alice", SECRET)
        payload_b64, sig_b64 = token.split(".")
        payload = json.loads(base64.urlsafe_b64decode(payload_b64))
        payload["user_id"] = "someone-else"
        tampered_payload = base64.urlsafe_b64encode(json.dumps(payload, sort_keys=True).encode()).decode()
        with pytest.raises(InvalidSignatureError):
            verify_credential(f"{tampered_payload}.{sig_b64}", SECRET)

    def test_tampered_signature_rejected(self):
        token = sign_credential("user-123", "alice", SECRET)
        payload_b64, sig_b64 = token.split(".")
        sig_bytes = bytearray(base64.urlsafe_b64decode(sig_b64))
        sig_bytes[0] ^= 0xFF
        tampered_sig = base64.urlsafe_b64encode(bytes(sig_bytes)).decode()
        with pytest.raises(InvalidSignatureError):
            verify_credential(f"{payload_b64}.{tampered_sig}", SECRET)

    def test_wrong_secret_rejected(self):
        token = sign_credential("user-123", "alice", SECRET)
        with pytest.raises(InvalidSignatureError):
            verify_credential(token, "wrong-secret")

    @pytest.mark.parametrize("token", ["", "no-dot", "a.b.c", "!!!.???"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidSignatureError):
            verify_credential(token, SECRET)

    def test_signed_garbage_payload_rejected(self):
        import hashlib
        import hmac

        payload = b'{"unexpected": true}'
        sig = hmac.new(SECRET.encode(), payload, hashlib.sha256).digest()
        token = f"{base64.urlsafe_b64encode(payload).decode()}.{base64.urlsafe_b64encode(sig).decode()}"
        with pytest.raises(InvalidSignatureError, match="Malformed payload"):
            verify_credential(token, SECRET)


class TestTimestampValidation:
    def test_issued_in_the_future_rejected(self):
        future = time.time() + CLOCK_SKEW_SECONDS + 60
        token = encode_credential(_make_credential(issued_at=future, expires_at=future + 10), SECRET)
        with pytest.raises(InvalidSignatureError, match="future"):
            verify_credential(token, SECRET)

    def test_expiry_before_issue_rejected(self):
        now = time.time()
        token = encode_credential(_make_credential(issued_at=now, expires_at=now - 1), SECRET)
        with pytest.raises(InvalidSignatureError):
            verify_credential(token, SECRET)

    def test_non_finite_timestamp_rejected(self):
        token = encode_credential(_make_credential(expires_at=float("inf")), SECRET)
        with pytest.raises(InvalidSignatureError, match="Non-finite"):
            verify_credential(token, SECRET)
