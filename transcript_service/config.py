"""
Configuration settings for the transcript cleaner service.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


APP_NAME = "YouTube Transcript Cleaner"
APP_VERSION = "1.0.0"

PRODUCTION_ORIGINS = ["https://your-domain.com"]
DEVELOPMENT_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]


class Settings(BaseModel):
    """Runtime settings, assembled once at startup and shared by reference."""

    port: int = 3001
    youtube_api_key: Optional[str] = None
    environment: str = "development"
    cors_origins: List[str] = Field(default_factory=lambda: list(DEVELOPMENT_ORIGINS))
    redis_url: Optional[str] = None
    log_level: str = "DEBUG"

    # Rate limiting
    rate_limit_window: float = 15 * 60
    rate_limit_max_requests: int = 10

    # Outbound calls
    captions_timeout: float = 10.0
    transcript_timeout: float = 10.0

    max_body_size: int = 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def expose_error_details(self) -> bool:
        """Whether underlying error messages may be echoed to clients."""
        return not self.is_production


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_settings() -> Settings:
    """
    Build the settings from the environment (and a .env file, if present).

    Returns:
        Settings instance
    """
    load_dotenv()

    env = os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development")).lower()
    production = env == "production"

    origins = os.getenv("CORS_ORIGINS")
    if origins:
        cors_origins = _split_origins(origins)
    else:
        cors_origins = list(PRODUCTION_ORIGINS if production else DEVELOPMENT_ORIGINS)

    return Settings(
        port=int(os.getenv("PORT", "3001")),
        youtube_api_key=os.getenv("YOUTUBE_API_KEY") or None,
        environment=env,
        cors_origins=cors_origins,
        redis_url=os.getenv("REDIS_URL") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO" if production else "DEBUG").upper(),
    )
