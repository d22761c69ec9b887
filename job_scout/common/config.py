"""
Configuration loader for Job Match Scout.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import logging
import os

from dotenv import load_dotenv

from job_scout.common.error_handling import MissingCredentialError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES = ("ja", "en")
DEFAULT_LOCALE = "ja"


def _first_env(*names: str) -> str:
    """Return the first non-empty value among the given environment variables."""
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


class Config:
    """
    Centralized configuration for the scout services.

    All values loaded from environment variables - NO SECRETS IN CODE.
    Call ``Config.reload()`` after changing the environment (tests do this).
    """

    # ===== Gemini API =====
    GEMINI_API_KEY: str = _first_env("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TIMEOUT_SECONDS: int = int(os.getenv("GEMINI_TIMEOUT_SECONDS", "120"))

    # ===== Output =====
    # Language of prompts, model output and status summaries
    OUTPUT_LOCALE: str = os.getenv("SCOUT_OUTPUT_LOCALE", DEFAULT_LOCALE).lower()
    MAX_COMPANIES: int = int(os.getenv("SCOUT_MAX_COMPANIES", "10"))

    # ===== Parsing =====
    # Adds a json-repair pass after the strict extraction strategies
    JSON_REPAIR: bool = os.getenv("SCOUT_JSON_REPAIR", "false").lower() == "true"

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple").lower()
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"

    @classmethod
    def reload(cls) -> None:
        """Re-read every setting from the current environment."""
        cls.GEMINI_API_KEY = _first_env("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
        cls.GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        cls.GEMINI_TIMEOUT_SECONDS = int(os.getenv("GEMINI_TIMEOUT_SECONDS", "120"))
        cls.OUTPUT_LOCALE = os.getenv("SCOUT_OUTPUT_LOCALE", DEFAULT_LOCALE).lower()
        cls.MAX_COMPANIES = int(os.getenv("SCOUT_MAX_COMPANIES", "10"))
        cls.JSON_REPAIR = os.getenv("SCOUT_JSON_REPAIR", "false").lower() == "true"
        cls.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        cls.LOG_FORMAT = os.getenv("LOG_FORMAT", "simple").lower()
        cls.DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.

        Raises:
            MissingCredentialError: If no Gemini API key is configured.
        """
        if not cls.GEMINI_API_KEY:
            raise MissingCredentialError(
                "Missing required configuration: GEMINI_API_KEY. "
                "Please check your .env file."
            )

    @classmethod
    def get_output_locale(cls) -> str:
        """Get the configured output locale, falling back to Japanese."""
        locale = cls.OUTPUT_LOCALE
        if locale not in SUPPORTED_LOCALES:
            logger.warning(
                f"Unsupported SCOUT_OUTPUT_LOCALE '{locale}', using '{DEFAULT_LOCALE}'"
            )
            return DEFAULT_LOCALE
        return locale
