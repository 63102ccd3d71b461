"""TinyWiki FastAPI application."""

import logging
from urllib.parse import parse_qs

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from tinywiki.config import Settings
from tinywiki.core.errors import (
    PageNotFoundError,
    RenderError,
    RouteInvalidError,
    StorageWriteError,
)
from tinywiki.core.models import Page
from tinywiki.core.routing import page_title
from tinywiki.core.storage import FileStorage, Storage

logger = logging.getLogger(__name__)

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# ========== Dependencies ==========


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def render_template(
    request: Request,
    templates: Jinja2Templates,
    name: str,
    page: Page,
) -> HTMLResponse:
    """Render a page template.

    The edit form gets the raw body; every other template gets the body
    with link tokens rewritten.
    """
    context = {
        "app_title": request.app.state.settings.app_title,
        "page": page,
    }
    if name != "edit":
        context["html_body"] = page.rendered_body()
    try:
        return templates.TemplateResponse(request, f"{name}.html", context)
    except TemplateError as e:
        raise RenderError(str(e)) from e


def _query_value(raw: bytes, key: str) -> bytes | None:
    # latin-1 maps every byte to one code point, so values come back unchanged
    values = parse_qs(
        raw.decode("latin-1"), keep_blank_values=True, encoding="latin-1"
    )
    if key not in values:
        return None
    return values[key][0].encode("latin-1")


async def form_value(request: Request, key: str) -> bytes:
    """Return the raw bytes submitted for a form field.

    The request body is consulted first (URL-encoded or multipart), then
    the query string. A field missing from both yields empty bytes.
    """
    content_type = request.headers.get("content-type", "").lower()
    value: bytes | None = None
    if content_type.startswith("application/x-www-form-urlencoded"):
        value = _query_value(await request.body(), key)
    elif content_type.startswith("multipart/form-data"):
        form = await request.form()
        field = form.get(key)
        if isinstance(field, str):
            value = field.encode("utf-8")
        elif field is not None:
            value = await field.read()
    if value is None:
        value = _query_value(request.scope["query_string"], key)
    return value or b""


# ========== Handlers ==========


async def root(settings: Settings = Depends(app_settings)):
    """Send visitors to the front page."""
    return RedirectResponse(url=f"/view/{settings.front_page}", status_code=302)


async def view_page(
    request: Request,
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
    templates: Jinja2Templates = Depends(get_templates),
):
    """View a wiki page."""
    try:
        page = await storage.load(title)
    except PageNotFoundError:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)
    return render_template(request, templates, "view", page)


async def edit_page(
    request: Request,
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Edit page form."""
    try:
        page = await storage.load(title)
    except PageNotFoundError:
        page = Page(title=title)
    return render_template(request, templates, "edit", page)


async def save_page(
    request: Request,
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
):
    """Save page content from the ``body`` form field."""
    body = await form_value(request, "body")
    await storage.save(Page(title=title, body=body))
    logger.info("Saved page %s", title)
    return RedirectResponse(url=f"/view/{title}", status_code=302)


# ========== Error handlers ==========


async def route_invalid_handler(request: Request, exc: RouteInvalidError):
    logger.debug("404 %s", exc.path)
    return PlainTextResponse("404 page not found", status_code=404)


async def server_error_handler(request: Request, exc: Exception):
    logger.warning("500 %s: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


# ========== Application ==========


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the wiki application from settings.

    Storage, templates and settings are constructed here once and handed
    to the handlers through ``app.state``.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.storage = FileStorage(settings.data_dir)
    app.state.templates = Jinja2Templates(directory=str(settings.templates_dir))

    app.add_api_route("/", root, methods=ANY_METHOD)
    app.add_api_route(
        "/view/{name}", view_page, methods=ANY_METHOD, response_class=HTMLResponse
    )
    app.add_api_route(
        "/edit/{name}", edit_page, methods=ANY_METHOD, response_class=HTMLResponse
    )
    app.add_api_route("/save/{name}", save_page, methods=ANY_METHOD)

    app.add_exception_handler(RouteInvalidError, route_invalid_handler)
    app.add_exception_handler(StorageWriteError, server_error_handler)
    app.add_exception_handler(RenderError, server_error_handler)

    logger.info("Serving pages from %s", settings.data_dir)
    return app
