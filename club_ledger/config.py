"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Club Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/club_ledger"
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "standard")

    # Ledger atomic unit: how many times a conflicting write is
    # retried before the caller gets StoreUnavailableError
    LEDGER_MAX_ATTEMPTS: int = int(os.getenv("LEDGER_MAX_ATTEMPTS", "5"))
    LEDGER_RETRY_BASE_DELAY: float = float(
        os.getenv("LEDGER_RETRY_BASE_DELAY", "0.01")
    )
    LEDGER_RETRY_MAX_DELAY: float = float(
        os.getenv("LEDGER_RETRY_MAX_DELAY", "0.25")
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for
    all subsequent calls.
    """
    return Settings()
