"""Wiki link rewriting.

Page bodies reference other pages with bracketed tokens such as
``[FrontPage]``. Rendering replaces each token with an anchor pointing at
the referenced page's view URL, whether or not that page exists yet.
"""

import re

from markupsafe import Markup, escape

# Pattern for link tokens: [PageName]
LINK_PATTERN = re.compile(r"\[([a-zA-Z0-9]+)\]")


def _link(m: re.Match) -> str:
    name = m.group(1)
    return f"<a href='/view/{name}'>{name}</a>"


def rewrite(body: str) -> str:
    """Replace every ``[Token]`` in body with a link to ``/view/Token``.

    Single left-to-right pass; tokens never overlap and text outside
    tokens is passed through unchanged.
    """
    return LINK_PATTERN.sub(_link, body)


def render_body(body: bytes) -> Markup:
    """Decode, escape and link-rewrite a raw page body for the view template."""
    text = body.decode("utf-8", errors="replace")
    return Markup(rewrite(str(escape(text))))
