"""
Centralized configuration for the Barida identity backend.

All settings are loaded from environment variables with sensible defaults.
Every variable is namespaced with the BARIDA_ prefix (e.g., BARIDA_SESSION_SECRET).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BARIDA_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Barida Identity API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Origins
    root_domain: str = "barida.xyz"
    identity_subdomain: str = "identity"
    central_subdomains: list[str] = ["www", "admin"]
    url_scheme: str = "https"

    # Session credentials
    session_secret: str = ""
    session_algorithm: str = "HS256"
    session_audience: str = "barida-session"
    session_issuer: str = "barida-identity"
    session_ttl_hours: int = 8

    # Verification handoff
    verification_token_ttl_seconds: int = 600
    verification_poll_interval_seconds: float = 3.0
    verification_poll_max_attempts: int = 200

    # Tenant rules
    sub_admin_user_quota: int = 4

    # Redirect bridge
    bootstrap_path: str = "/auth/callback"

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, used only by run_migrations.py


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
