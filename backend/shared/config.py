"""
Centralized configuration for the Orion backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., AUTH_*, STRIPE_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
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
    app_name: str = "Orion API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3001", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Auth tokens
    auth_jwt_secret: str = ""
    auth_token_issuer: str = "http://localhost:3001"
    auth_token_audience: str = "http://localhost:3002"
    auth_token_expires_days: int = 7
    auth_cookie_name: str = "auth"
    auth_bcrypt_rounds: int = 12

    # Storage
    storage_backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    database_url: str = ""  # Direct Postgres URL, used by run_migrations.py

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_price_id_pro: str = ""
    stripe_price_id_enterprise: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:3001"

    @property
    def is_production(self) -> bool:
        """Whether cookies and other settings should use production hardening."""
        return self.environment.lower() == "production"

    @property
    def auth_token_max_age(self) -> int:
        """Token and cookie lifetime in seconds."""
        return self.auth_token_expires_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
