"""Tests for AuthSettings configuration."""

import pytest
from pydantic import ValidationError

from shared.auth.settings import AuthSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("AUTH_SECRET_KEY", "SECRET_KEY", "AUTH_DATABASE_PATH", "DATABASE_PATH", "AUTH_PASSWORD_HASHER"):
        monkeypatch.delenv(name, raising=False)


class TestAuthSettings:
    def test_reads_secret_from_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET_KEY", "my-secret")
        assert AuthSettings().secret_key == "my-secret"

    def test_reads_secret_from_plain_env(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "plain-secret")
        assert AuthSettings().secret_key == "plain-secret"

    def test_missing_secret_raises(self):
        with pytest.raises(ValidationError):
            AuthSettings()

    def test_empty_secret_raises(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET_KEY", "")
        with pytest.raises(ValidationError):
            AuthSettings()

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET_KEY", "s")
        settings = AuthSettings()
        assert settings.database_path == "backend/storage.db"
        assert settings.credential_ttl_seconds == 3600
        assert settings.password_hasher == "bcrypt"
        assert settings.cookie_secure is False

    def test_database_path_from_env(self, monkeypatch):
        monkeypatch.setenv("AUTH_SECRET_KEY", "s")
        monkeypatch.setenv("DATABASE_PATH", "custom/path/storage.db")
        assert AuthSettings().database_path == "custom/path/storage.db"

    def test_init_by_field_name(self):
        settings = AuthSettings(secret_key="direct", database_path="x.db")
        assert settings.secret_key == "direct"
        assert settings.database_path == "x.db"
