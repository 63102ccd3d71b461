"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

TEMPLATES_PATH = Path(__file__).parent / "templates"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    templates_dir: Path = TEMPLATES_PATH
    front_page: str = "FrontPage"
    app_title: str = "TinyWiki"
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="TINYWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
