"""Shared fixtures and helpers for board integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from starlette.testclient import TestClient

from board.server.app import create_app
from board.server.settings import BoardServerSettings
from shared.auth.settings import AuthSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx
    from starlette.applications import Starlette

TEST_SECRET = "test-secret"
TEST_PASSWORD = "pw"


@pytest.fixture
def app(tmp_path) -> Starlette:
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "app.css").write_text("body { color: black; }")
    return create_app(
        settings=BoardServerSettings(static_dir=str(static_dir)),
        auth_settings=AuthSettings(
            secret_key=TEST_SECRET,
            database_path=str(tmp_path / "test.db"),
            password_hasher="simple",
        ),
    )


@pytest.fixture
def make_client(app) -> Callable[[], TestClient]:
    """Return a factory for independent clients, one per simulated browser."""

    def factory() -> TestClient:
        return TestClient(app, follow_redirects=False)

    return factory


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


def _register(client: TestClient, username: str, email: str | None = None) -> httpx.Response:
    return client.post(
        "/register",
        data={"username": username, "email": email or f"{username}@example.com", "password": TEST_PASSWORD},
    )


def _login(client: TestClient, username: str, password: str = TEST_PASSWORD) -> httpx.Response:
    return client.post("/login", data={"username": username, "password": password})


@pytest.fixture
def register() -> Callable[..., httpx.Response]:
    """Register a user through the HTML form."""
    return _register


@pytest.fixture
def login() -> Callable[..., httpx.Response]:
    """Log a user in through the HTML form."""
    return _login
