"""Exceptions raised by the wiki core."""


class WikiError(Exception):
    """Base class for wiki errors."""


class RouteInvalidError(WikiError):
    """Request path is not /<action>/<title> with an alphanumeric title."""

    def __init__(self, path: str):
        super().__init__(f"invalid page path: {path}")
        self.path = path


class PageNotFoundError(WikiError):
    """No readable file backs the requested page."""

    def __init__(self, title: str):
        super().__init__(f"page not found: {title}")
        self.title = title


class StorageWriteError(WikiError):
    """Persisting a page failed."""


class RenderError(WikiError):
    """Template lookup or execution failed."""
