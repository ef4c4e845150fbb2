"""Test-wide setup: .env.tests, structlog routed to caplog, clean request context."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from shared.logging import configure_structlog

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

configure_structlog(service="board-tests")


@pytest.fixture(autouse=True)
def _reset_request_context():
    """Bound request fields (user_id, path) must not carry over between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
