"""
Template Rendering

Server-side HTML rendering with Jinja2 through FastAPI's Jinja2Templates.

Every page receives a view model dict; the handlers only ever pass one of
these shapes:
- {title, genre_list}
- {title, genre, genre_books}
- {title, genre, errors}
- {title, genre}
"""

from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from catalog.config import get_settings

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = get_settings().app_name


def render(
    request: Request,
    view_name: str,
    view_model: dict[str, Any],
    status_code: int = 200,
) -> Response:
    """Render ``<view_name>.html`` with ``view_model``."""
    return templates.TemplateResponse(
        request,
        f"{view_name}.html",
        view_model,
        status_code=status_code,
    )


def render_error(
    request: Request,
    status_code: int,
    message: str,
    detail: Optional[str] = None,
) -> Response:
    """Render the shared error page."""
    return render(
        request,
        "error",
        {
            "title": "Error",
            "message": message,
            "status_code": status_code,
            "detail": detail,
        },
        status_code=status_code,
    )
