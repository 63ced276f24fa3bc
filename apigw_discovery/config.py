"""Configuration management for the API Gateway discovery collector.

This module handles loading and validating configuration from environment
variables with sensible defaults.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_DISCOVERY_ENDPOINT_URL = "https://autodiscovery.treblle.com/api/v1/aws"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only the SDK token and the region list are required. Everything else
    has a default matching the behaviour of the deployed function.
    """

    # Required
    treblle_sdk_token: Optional[str] = Field(
        default=None,
        description="Treblle SDK token sent as the x-api-key header",
        validation_alias="TREBLLE_SDK_TOKEN",
    )
    scan_regions: Optional[str] = Field(
        default=None,
        description="Comma-separated list of regions to scan",
        validation_alias="SCAN_REGIONS",
    )

    # Delivery Configuration
    discovery_endpoint_url: str = Field(
        default=DEFAULT_DISCOVERY_ENDPOINT_URL,
        description="Discovery endpoint receiving the inventory batches",
        validation_alias="DISCOVERY_ENDPOINT_URL",
    )
    batch_size: int = Field(
        default=50,
        ge=1,
        description="Number of APIs sent per request",
        validation_alias="BATCH_SIZE",
    )
    batch_delay_ms: int = Field(
        default=100,
        ge=0,
        description="Pause between two consecutive batches in milliseconds",
        validation_alias="BATCH_DELAY_MS",
    )

    # AWS Configuration
    page_size: int = Field(
        default=500,
        ge=1,
        le=500,
        description="Page size for GetRestApis / GetApis",
        validation_alias="PAGE_SIZE",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="Region used for the STS identity lookup",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION"),
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def batch_delay_seconds(self) -> float:
        return self.batch_delay_ms / 1000.0


def get_settings() -> Settings:
    """
    Load settings from environment variables and .env file.

    A fresh instance is built on every call so each invocation sees the
    environment it runs with.

    Returns:
        Settings instance with all configuration values
    """
    return Settings()


def validate_required_settings(settings: Settings) -> None:
    """
    Check the settings the collector cannot run without.

    The token is checked first so a missing token never lets the
    invocation reach AWS or the discovery endpoint.

    Raises:
        ConfigurationError: If TREBLLE_SDK_TOKEN or SCAN_REGIONS is missing
    """
    if not settings.treblle_sdk_token:
        raise ConfigurationError("TREBLLE_SDK_TOKEN environment variable is required")
    if not settings.scan_regions:
        raise ConfigurationError("SCAN_REGIONS environment variable is required")
