"""Data models for TinyWiki."""

import re

from markupsafe import Markup
from pydantic import BaseModel, Field

from tinywiki.core.links import render_body

# Page titles double as file names, so only letters and digits
TITLE_PATTERN = r"[a-zA-Z0-9]+"
TITLE_RE = re.compile(TITLE_PATTERN)


class Page(BaseModel):
    """Represents a wiki page."""

    title: str = Field(pattern=rf"^{TITLE_PATTERN}$")
    body: bytes = b""

    @property
    def text(self) -> str:
        """Body decoded for display in the editor."""
        return self.body.decode("utf-8", errors="replace")

    def rendered_body(self) -> Markup:
        """Body with link tokens rewritten to anchors. Never persisted."""
        return render_body(self.body)
