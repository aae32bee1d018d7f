"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        # Allow extra fields from .env that aren't defined here
        extra="ignore",
    )

    # ===== Database =====
    DATABASE_URL: str = "sqlite:///./sitecms.db"
    USE_DB_REPOS: bool = False

    # ===== Public Website / Revalidation =====
    WEBSITE_URL: str = "https://chronicles-europe.vercel.app"
    REVALIDATE_ENDPOINT_PATH: str = "/api/revalidate"
    REVALIDATION_ENABLED: bool = True

    # ===== Connection Pooling =====
    HTTP_MAX_CONNECTIONS: int = 20
    HTTP_MAX_KEEPALIVE: int = 10
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # ===== Slugs =====
    SLUG_PREFIX: str = "exhibition-stand-builder-"

    # ===== Logging & CORS =====
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    @property
    def revalidate_url(self) -> str:
        """Full URL of the website's revalidation endpoint."""
        return f"{self.WEBSITE_URL.rstrip('/')}{self.REVALIDATE_ENDPOINT_PATH}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
