"""
Centralized configuration for the CandleTime backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., GEMINI_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CandleTime API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: Optional[str] = None

    # Admin access
    admin_emails: str = ""  # comma-separated allow-list
    admin_check_timeout: float = 3.0  # seconds

    # Content
    default_language: str = "ru"
    articles_import_dir: str = "seo-articles"
    map_candles_limit: int = 1000

    # Gemini (article generation)
    gemini_api_key: str = ""
    gemini_models: list[str] = [
        "gemini-2.0-flash-exp",
        "gemini-2.0-flash",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
    ]
    gemini_max_retries: int = 3
    gemini_retry_base_delay: float = 1.0  # seconds, doubled on each retry


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
