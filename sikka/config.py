"""Sikka API Client - Configuration"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.sikkasoft.com"


class Settings(BaseSettings):
    """Client settings loaded from the environment (``SIKKA_*``) or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="SIKKA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application credentials (issued to the integrator)
    app_id: str = Field(default="", description="Sikka application ID")
    app_key: SecretStr = Field(default=SecretStr(""), description="Sikka application key")

    # Office credentials (issued per authorized practice)
    office_id: str = Field(default="", description="Office ID of the practice")
    secret_key: SecretStr = Field(
        default=SecretStr(""), description="Secret key of the practice office"
    )

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Sikka API base URL")

    log_level: Optional[str] = Field(
        default=None,
        description="Enable console logging at this level (DEBUG, INFO, ...)",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths start with a slash, so the base URL must not end with one."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
