"""Configuration management using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """Remote catalog configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOGCART_GATEWAY_",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    endpoint: str = Field(
        default="http://localhost:3000/articles",
        description="URL of the catalog item collection",
    )

    timeout: int = Field(
        default=30,
        description="Request timeout in seconds",
        ge=1,
        le=300,
    )

    default_image: str = Field(
        default="https://example.com/default.jpg",
        description="Image sent for new items that have none",
    )

    # Logging configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format string",
    )


def get_settings() -> GatewaySettings:
    """Get the gateway settings instance."""
    return GatewaySettings()
