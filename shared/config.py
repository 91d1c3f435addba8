"""
Centralized configuration for the FitConnect store.

All settings are loaded from environment variables with sensible defaults.
"""

import logging
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
    app_name: str = "FitConnect"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Store
    seed_demo_data: bool = True
    default_currency: str = "EGP"
    demo_client_id: str = "demo_client"

    # Attachments
    max_attachment_size_bytes: int = 5 * 1024 * 1024  # 5 MB

    # Checkout (placeholder OTP pages until a real gateway exists)
    wallet_payment_url: str = "https://example.com/wallet/otp"
    instapay_payment_url: str = "https://example.com/instapay/otp"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level for hosts without their own logging setup."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
