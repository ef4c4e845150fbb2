"""Route auth policy helpers for fail-closed authorization.

Each helper wraps a route endpoint and sets the ``AUTH_POLICY_ATTR`` marker
so that startup validation can verify every route has an explicit auth policy.
"""

from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING

from starlette.authentication import has_required_scope
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import Mount, Route

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from starlette.requests import Request
    from starlette.routing import BaseRoute

AUTH_POLICY_ATTR = "__auth_policy__"
LOGIN_PATH = "/login"


def _unauthorized(request: Request) -> JSONResponse:
    """401 JSON carrying the reason the auth backend recorded."""
    reason = getattr(request.user, "reason", "Unauthorized")
    return JSONResponse({"message": reason}, status_code=401)


def _login_redirect() -> RedirectResponse:
    # Relative URL: Starlette's requires(redirect=...) builds absolute URLs from the Host header.
    return RedirectResponse(url=LOGIN_PATH, status_code=302)


def _guard(
    endpoint: Callable[..., Any],
    policy: str,
    reject: Callable[[Request], Response] | None,
) -> Callable[..., Any]:
    """Wrap a sync or async endpoint, rejecting unauthenticated requests when ``reject`` is set."""
    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(request: Request, **kwargs: str) -> Response:
            if reject is not None and not has_required_scope(request, ["authenticated"]):
                return reject(request)
            return await endpoint(request, **kwargs)

        setattr(async_wrapper, AUTH_POLICY_ATTR, policy)
        return async_wrapper

    @functools.wraps(endpoint)
    def sync_wrapper(request: Request, **kwargs: str) -> Response:
        if reject is not None and not has_required_scope(request, ["authenticated"]):
            return reject(request)
        return endpoint(request, **kwargs)

    setattr(sync_wrapper, AUTH_POLICY_ATTR, policy)
    return sync_wrapper


def protected_html(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require authentication; redirect unauthenticated users to the login page."""
    return _guard(endpoint, "protected_html", lambda _request: _login_redirect())


def protected_api(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require authentication; answer 401 JSON for unauthenticated API requests."""
    return _guard(endpoint, "protected_api", _unauthorized)


def public_route(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Mark endpoint as explicitly public (no auth required).

    Returns a thin wrapper so the marker lives on the wrapper, not on the
    original callable. Reusing the same function on another route without
    wrapping it therefore leaves that route unclassified.
    """
    return _guard(endpoint, "public", None)


def validate_route_auth_policy(routes: list[BaseRoute]) -> None:
    """Verify every Route has an auth policy marker. Mount routes are exempt.

    Raises RuntimeError listing all unclassified routes if any are found.
    """
    unclassified: list[str] = []
    for route in routes:
        if isinstance(route, Mount):
            continue
        if isinstance(route, Route) and not hasattr(route.endpoint, AUTH_POLICY_ATTR):
            name = route.name or getattr(route.endpoint, "__name__", "unknown")
            unclassified.append(f"{route.path} ({name})")

    if unclassified:
        details = ", ".join(unclassified)
        msg = f"Unclassified routes missing auth policy: {details}"
        raise RuntimeError(msg)
