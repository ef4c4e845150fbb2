"""Board authentication: Starlette backend, user models, and route policy."""

from board.auth.backend import SESSION_COOKIE_NAME, SessionCredentialBackend
from board.auth.models import AnonymousVisitor, AuthenticatedUser
from board.auth.policy import protected_api, protected_html, public_route, validate_route_auth_policy

__all__ = [
    "SESSION_COOKIE_NAME",
    "AnonymousVisitor",
    "AuthenticatedUser",
    "SessionCredentialBackend",
    "protected_api",
    "protected_html",
    "public_route",
    "validate_route_auth_policy",
]
