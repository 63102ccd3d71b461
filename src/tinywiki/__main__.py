"""Run the wiki server under uvicorn."""

import uvicorn

from tinywiki.config import get_settings
from tinywiki.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
