"""Request path validation.

Page routes have the form ``/<action>/<title>``. The title doubles as the
storage key, so the alphanumeric restriction here is what keeps request
paths from escaping the data directory.
"""

import re

from fastapi import Request

from tinywiki.core.errors import RouteInvalidError
from tinywiki.core.models import TITLE_PATTERN

VALID_PATH = re.compile(rf"^/(edit|save|view)/({TITLE_PATTERN})$")


def match_title(path: str) -> str:
    """Return the page title from a request path.

    Raises:
        RouteInvalidError: path is not a valid page route.
    """
    m = VALID_PATH.fullmatch(path)
    if m is None:
        raise RouteInvalidError(path)
    return m.group(2)


def page_title(request: Request) -> str:
    """Dependency extracting the validated page title from the request."""
    return match_title(request.url.path)
