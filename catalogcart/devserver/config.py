"""Development server configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DevServerSettings(BaseSettings):
    """Development server configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOGCART_DEVSERVER_",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    host: str = Field(
        default="127.0.0.1",
        description="Host to bind the server to",
    )

    port: int = Field(
        default=3000,
        description="Port to bind the server to",
        ge=1,
        le=65535,
    )

    seed_file: str | None = Field(
        default=None,
        description="JSON file with the initial articles (array or json-server db)",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


def get_settings() -> DevServerSettings:
    """Get the development server settings instance."""
    return DevServerSettings()
