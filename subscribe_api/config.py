"""
App config from environment.
Uses pydantic-settings so every env var the service reads is declared in one model.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .rules import DEFAULT_SHEET_RANGE


class Settings(BaseSettings):
    """
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).

    Required values default to "" so the app can start without them; they are
    checked with require() at the point of use.
    """

    model_config = SettingsConfigDict(extra="ignore")

    # Service account
    google_client_email: str = ""
    google_private_key: str = ""

    # Target spreadsheet
    google_sheet_id: str = ""
    google_sheet_range: str = DEFAULT_SHEET_RANGE

    log_level: str = "INFO"

    def require(self, field: str) -> str:
        value = getattr(self, field)
        if not value:
            raise ConfigurationError(f"{field.upper()} is not defined")
        return value

    def env_check(self) -> Dict[str, Any]:
        # no key material here, this goes to the logs
        return {
            "has_client_email": bool(self.google_client_email),
            "has_private_key": bool(self.google_private_key),
            "has_sheet_id": bool(self.google_sheet_id),
            "client_email": self.google_client_email,
            "sheet_id": self.google_sheet_id,
        }


def get_settings() -> Settings:
    """Return validated settings from current environment."""
    return Settings()
