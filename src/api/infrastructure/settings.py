"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebhookSettings(BaseSettings):
    """Inbound webhook verification settings.

    Environment variables:
        INDENT_WEBHOOK_SECRET: Shared secret used to sign deliveries (required in production)
        INDENT_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS: Reject deliveries older than this (default: unset, no check)
    """

    model_config = SettingsConfigDict(
        env_prefix="INDENT_WEBHOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret: SecretStr = Field(
        default=SecretStr(""),
        description="Shared webhook signing secret",
    )
    timestamp_tolerance_seconds: int | None = Field(
        default=None,
        description="Maximum accepted age of a signed delivery, in seconds",
        ge=1,
    )


class GithubAppSettings(BaseSettings):
    """GitHub App credentials and target organization.

    Environment variables:
        GITHUB_APP_ID: GitHub App id
        GITHUB_APP_INSTALL_ID: Installation id of the app in the organization
        GITHUB_APP_PRIVATE_KEY: PEM encoded app private key (required in production)
        GITHUB_ORG: Organization login to manage
        GITHUB_API_URL: REST API base URL (default: https://api.github.com)
        GITHUB_TIMEOUT_SECONDS: Per-request timeout (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_id: str = Field(default="", description="GitHub App id")
    app_install_id: int = Field(
        default=0,
        description="GitHub App installation id",
        ge=0,
    )
    app_private_key: SecretStr = Field(
        default=SecretStr(""),
        description="PEM encoded GitHub App private key",
    )
    org: str = Field(default="", description="Organization login to manage")
    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout in seconds",
        gt=0,
    )

    @field_validator("app_private_key", mode="before")
    @classmethod
    def normalize_private_key(cls, value: object) -> object:
        """Expand literal ``\\n`` sequences so single-line env values work."""
        if isinstance(value, str):
            return value.replace("\\n", "\n")
        return value

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Store the base URL without a trailing slash."""
        return value.rstrip("/")


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="GitHub Organization Access Webhook", description="Application name"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def webhook(self) -> WebhookSettings:
        """Get webhook settings."""
        return get_webhook_settings()

    @property
    def github(self) -> GithubAppSettings:
        """Get GitHub App settings."""
        return get_github_app_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_webhook_settings() -> WebhookSettings:
    """Get cached webhook settings."""
    return WebhookSettings()


@lru_cache
def get_github_app_settings() -> GithubAppSettings:
    """Get cached GitHub App settings."""
    return GithubAppSettings()
