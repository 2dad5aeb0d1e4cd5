"""
Element Alchemy - Application Settings

Loads configuration from environment variables using Pydantic Settings and
configures logging from them.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    storage_backend: Literal["memory", "local", "supabase"] = "local"
    save_key: str = "elementAlchemyState"
    save_dir: str = ".saves"

    # Supabase (only for the supabase backend)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Engine
    random_seed: int | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set the root log level and format from settings."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
