"""Page handlers and request helpers shared by the board views."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse
from starlette.templating import Jinja2Templates

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def create_templates() -> Jinja2Templates:
    """Create Jinja2 template engine for the board HTML pages."""
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


async def read_body(request: Request) -> dict:
    """Return the request body as a dict, from JSON or an HTML form.

    Anything unreadable comes back as an empty dict, so missing fields are
    reported by the usual validation instead of a parse error.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    try:
        body = await request.json()
    except ValueError:
        return {}
    if not isinstance(body, dict):
        return {}
    return body


def internal_error() -> JSONResponse:
    return JSONResponse({"message": "Internal Server Error"}, status_code=500)


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def home_page(request: Request) -> Response:
    """GET / - render the board page without requiring a login."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, "index.html", {"username": None})


async def index_page(request: Request) -> Response:
    """GET /index - render the board page for the logged-in user."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, "index.html", {"username": request.user.username})


async def login_page(request: Request) -> Response:
    """GET /login - render login form."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, "login.html")


async def register_page(request: Request) -> Response:
    """GET /register - render registration form."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, "register.html")
