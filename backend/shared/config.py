"""
Centralized configuration for the Axys auth backend.

All settings are loaded from environment variables with sensible defaults.
Component-specific settings are namespaced (e.g., SUPABASE_*, OTP_*, VAULT_*).
"""

from functools import lru_cache
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
    app_name: str = "Axys Auth"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (identity provider and OTP table)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, migrations only
    otp_table: str = "otp_verifications"

    # OTP
    otp_ttl_seconds: int = 300

    # Email delivery
    email_provider: str = "sendgrid"  # "sendgrid" or "resend"
    sendgrid_api_key: str = ""
    resend_api_key: str = ""
    email_from_address: str = "noreply@axys-banking.com"
    email_from_name: str = "Axys Banking"
    email_timeout_seconds: float = 10.0

    # Token vault
    vault_dir: str = "~/.axys/vault"
    vault_encryption_key: str = ""

    # Biometric device
    biometric_device: str = "simulated"
    biometric_simulated_types: list[int] = [2]  # facial recognition
    biometric_simulated_enrolled: bool = True

    # Session
    bootstrap_min_duration_seconds: float = 2.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
