"""Runtime configuration shared by the Catalogue and Ordering contexts.

Every setting can be overridden through the environment or a `.env` file.
Store settings live in each context's `domain.toml`.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront cart service configuration."""

    # Service
    SERVICE_NAME: str = Field(default="storefront-cart")
    SERVICE_HOST: str = Field(default="0.0.0.0")
    SERVICE_PORT: int = Field(default=8000, ge=1, le=65535)
    ENVIRONMENT: Literal["development", "test", "staging", "production"] = Field(default="development")

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = Field(default=None)
    LOG_DIR: str | None = Field(default=None)

    # CORS
    CORS_ORIGINS: str = Field(default="*")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings()
