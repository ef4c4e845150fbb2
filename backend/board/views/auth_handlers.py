"""Auth endpoints: register, login, and logout."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

import structlog
from starlette.responses import JSONResponse, RedirectResponse, Response

from board.auth.backend import SESSION_COOKIE_NAME
from board.views.handlers import internal_error, read_body
from shared.auth.service import InvalidCredentialsError, InvalidInputError, UserConflictError

if TYPE_CHECKING:
    from starlette.requests import Request

    from shared.auth.models import LoginResult
    from shared.auth.service import AuthService
    from shared.auth.settings import AuthSettings

logger = structlog.get_logger()


def _redirect_with_session_cookie(result: LoginResult, auth_settings: AuthSettings) -> Response:
    """Redirect to the user's board page and set the session cookie."""
    query = urlencode({"username": result.user.username})
    response = RedirectResponse(f"/index?{query}", status_code=302)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=result.session.session_id,
        httponly=True,
        samesite="lax",
        secure=auth_settings.cookie_secure,
        max_age=auth_settings.credential_ttl_seconds,
        path="/",
    )
    return response


async def register(request: Request) -> Response:
    """POST /register - create account, log in on this session, redirect to /index."""
    auth_service: AuthService = request.app.state.auth_service
    body = await read_body(request)

    try:
        result = await auth_service.register(
            body.get("username"),
            body.get("email"),
            body.get("password"),
            session_id=request.cookies.get(SESSION_COOKIE_NAME),
        )
    except (InvalidInputError, UserConflictError) as e:
        logger.info("registration rejected", reason=str(e))
        return JSONResponse({"message": str(e)}, status_code=400)
    except Exception:
        logger.exception("registration failed")
        return internal_error()

    return _redirect_with_session_cookie(result, request.app.state.auth_settings)


async def login(request: Request) -> Response:
    """POST /login - validate credentials, store credential on session, redirect to /index."""
    auth_service: AuthService = request.app.state.auth_service
    body = await read_body(request)

    try:
        result = await auth_service.login(
            body.get("username"),
            body.get("password"),
            session_id=request.cookies.get(SESSION_COOKIE_NAME),
        )
    except InvalidCredentialsError as e:
        logger.info("login rejected", username=body.get("username"))
        return JSONResponse({"message": str(e)}, status_code=401)
    except Exception:
        logger.exception("login failed")
        return internal_error()

    return _redirect_with_session_cookie(result, request.app.state.auth_settings)


async def logout(request: Request) -> Response:
    """GET /logout - destroy the session, redirect to login.

    Failing to destroy the session is logged and never blocks the redirect.
    """
    auth_service: AuthService = request.app.state.auth_service
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if session_id:
        try:
            auth_service.logout(session_id)
        except Exception:
            logger.exception("session destroy failed")
    response = RedirectResponse("/login", status_code=302)
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")
    return response
