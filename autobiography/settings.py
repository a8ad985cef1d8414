"""
Application Settings

This module provides a centralized settings class that loads environment
variables from the .env file and makes them available throughout the application.
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load the .env file from the project root
# The project root is one level up from the autobiography folder
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """
    Centralized settings class that provides access to all environment variables.
    Usage:
        from autobiography.settings import settings
        api_key = settings.GEMINI_API_KEY
    """

    # Google Gemini API Key (GOOGLE_API_KEY is accepted as an alias)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", "")

    # Story generation
    GENERATION_MODEL: str = os.getenv("GENERATION_MODEL", "gemini-2.5-flash")
    GENERATION_TEMPERATURE: float = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
    GENERATION_TIMEOUT_SECONDS: float = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "60"))

    # Database (empty = in-memory record store)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Comma separated e-mails allowed into the admin overview
    ADMIN_EMAILS: List[str] = _split_csv(os.getenv("ADMIN_EMAILS", ""))

    # Origin used when building shareable links
    PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:3000")

    # Frontend origins
    CORS_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))

    # Debug mode
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


    @classmethod
    def validate(cls) -> None:
        """Validate that all required environment variables are set."""
        errors = []

        if not cls.GEMINI_API_KEY:
            errors.append("GEMINI_API_KEY is not set in .env file")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


# Create a singleton instance for easy import
settings = Settings()
