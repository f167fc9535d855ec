"""
Application configuration.

All configuration is loaded from environment variables.
A local .env file is read first so development setups
don't need to export anything by hand.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Volvy Ledger Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database (snapshots and client balances)
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./volvy_ledger.db"
    )

    # Ledger
    SNAPSHOT_KEY: str = os.getenv("SNAPSHOT_KEY", "volvy-bank-transactions")
    LOAD_DELAY_SECONDS: float = float(os.getenv("LOAD_DELAY_SECONDS", "0.6"))
    SEED_ON_EMPTY: bool = os.getenv("SEED_ON_EMPTY", "true").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused
    for all subsequent calls.
    """
    return Settings()
