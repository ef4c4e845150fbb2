from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from board.auth.backend import SessionCredentialBackend
from board.auth.policy import protected_api, protected_html, public_route, validate_route_auth_policy
from board.posts.service import PostService
from board.server.middleware import RequestContextMiddleware, SlashNormalizationMiddleware
from board.server.settings import BoardServerSettings
from board.views import (
    create_post,
    create_templates,
    delete_post,
    health,
    home_page,
    index_page,
    list_posts,
    login,
    login_page,
    logout,
    register,
    register_page,
    update_post,
)
from shared.auth import AuthService, AuthSessionStore, AuthSettings, get_hasher
from shared.db import Database, SqlitePostRepository, SqliteUserRepository
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


def create_app(
    settings: BoardServerSettings | None = None,
    auth_settings: AuthSettings | None = None,  # required in production (via get_app)
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = BoardServerSettings()
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()  # type: ignore[call-arg]

    static_dir = Path(settings.static_dir).resolve()

    routes = [
        # Protected HTML routes (redirect to login when unauthenticated)
        Route("/index", protected_html(index_page), methods=["GET"], name="index_page"),
        # Protected JSON routes (return 401 JSON when unauthenticated)
        Route("/post", protected_api(create_post), methods=["POST"], name="create_post"),
        Route("/posts", protected_api(list_posts), methods=["GET"], name="list_posts"),
        Route("/posts/{post_id}", protected_api(update_post), methods=["PUT"], name="update_post"),
        Route("/posts/{post_id}", protected_api(delete_post), methods=["DELETE"], name="delete_post"),
        # Public routes
        Route("/", public_route(home_page), methods=["GET"], name="home_page"),
        Route("/health", public_route(health), methods=["GET"], name="health"),
        Route("/login", public_route(login_page), methods=["GET"], name="login_page"),
        Route("/login", public_route(login), methods=["POST"], name="login"),
        Route("/register", public_route(register_page), methods=["GET"], name="register_page"),
        Route("/register", public_route(register), methods=["POST"], name="register"),
        Route("/logout", public_route(logout), methods=["GET"], name="logout"),
    ]

    if static_dir.is_dir():
        routes.append(Mount("/static", app=StaticFiles(directory=str(static_dir)), name="static"))
    else:
        logger.warning("static directory not found, /static/ will not be served", path=str(static_dir))

    validate_route_auth_policy(routes)

    # The one persistent-storage connection, opened at startup
    db = Database(auth_settings.database_path)
    db.connect()
    user_repo = SqliteUserRepository(db)
    post_repo = SqlitePostRepository(db)
    session_store = AuthSessionStore()
    auth_service = AuthService(
        user_repo,
        session_store,
        password_hasher=get_hasher(auth_settings.password_hasher),
        secret_key=auth_settings.secret_key,
        credential_ttl_seconds=auth_settings.credential_ttl_seconds,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:  # pragma: no cover
        session_store.start_cleanup()
        yield
        await session_store.stop_cleanup()
        db.close()

    app = Starlette(routes=routes, lifespan=lifespan)
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(AuthenticationMiddleware, backend=SessionCredentialBackend(auth_service))  # type: ignore[arg-type]
    app.add_middleware(RequestContextMiddleware)  # type: ignore[arg-type]

    app.state.db = db
    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.session_store = session_store
    app.state.auth_service = auth_service
    app.state.post_service = PostService(post_repo)
    app.state.templates = create_templates()

    logger.info("board server ready")
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory board.server.app:get_app."""
    s = BoardServerSettings()
    auth = AuthSettings()  # type: ignore[call-arg]
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)


def main() -> None:  # pragma: no cover
    """Console entry point: serve the board on the configured host and port."""
    s = BoardServerSettings()
    uvicorn.run("board.server.app:get_app", factory=True, host=s.host, port=s.port)
