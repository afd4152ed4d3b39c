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
    APP_NAME: str = "Retail Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database holding the key-value entries
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./retail_ledger.db"
    )

    # Storage keys for the snapshot and the session flag
    STATE_KEY: str = os.getenv("STATE_KEY", "retail_ledger_state")
    SESSION_KEY: str = os.getenv("SESSION_KEY", "retail_ledger_is_logged_in")

    # Ledger policy
    ALLOW_NEGATIVE_STOCK: bool = (
        os.getenv("ALLOW_NEGATIVE_STOCK", "true").lower() == "true"
    )
    LOGIN_LOG_LIMIT: int = int(os.getenv("LOGIN_LOG_LIMIT", "50"))
    CREDIT_DAYS: int = int(os.getenv("CREDIT_DAYS", "30"))
    WALK_IN_PARTY_ID: str = os.getenv("WALK_IN_PARTY_ID", "c1")

    # Advisory (insights) service
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    ADVISORY_MODEL: str = os.getenv("ADVISORY_MODEL", "gemini-2.0-flash")
    ADVISORY_BASE_URL: str = os.getenv(
        "ADVISORY_BASE_URL",
        "https://generativelanguage.googleapis.com/v1beta"
    )
    ADVISORY_TIMEOUT: float = float(os.getenv("ADVISORY_TIMEOUT", "15"))

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
