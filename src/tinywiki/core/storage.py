"""Storage abstraction for wiki pages."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from tinywiki.core.errors import PageNotFoundError, StorageWriteError
from tinywiki.core.models import TITLE_RE, Page

logger = logging.getLogger(__name__)

FILE_MODE = 0o600


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page:
        """Load a page by title. Raises PageNotFoundError if missing."""
        ...

    @abstractmethod
    async def save(self, page: Page) -> None:
        """Save a page, replacing any previous content. Raises StorageWriteError."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is one file, ``<title>.txt``, holding the raw body bytes with
    no header or metadata. Nothing is cached; every load reads the file.
    Concurrent saves to the same title are last-writer-wins.
    """

    SUFFIX = ".txt"

    def __init__(self, base_path: Path):
        self.base_path = base_path

    def page_path(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / (title + self.SUFFIX)

    async def load(self, title: str) -> Page:
        """Load a page."""
        if not TITLE_RE.fullmatch(title):
            raise PageNotFoundError(title)
        path = self.page_path(title)
        try:
            body = path.read_bytes()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body)

    async def save(self, page: Page) -> None:
        """Save a page."""
        path = self.page_path(page.title)
        try:
            # No-op when the directory already exists
            self.base_path.mkdir(parents=True, exist_ok=True)
            # Owner-only on create; existing files keep their mode
            path.touch(mode=FILE_MODE, exist_ok=True)
            path.write_bytes(page.body)
        except OSError as e:
            logger.warning("Failed to save page %s: %s", page.title, e)
            raise StorageWriteError(str(e)) from e
        logger.debug("Saved page %s (%d bytes)", page.title, len(page.body))
