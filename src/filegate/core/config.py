"""Configuration management for filegate.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once and is
immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OneDriveChinaSettings(BaseModel):
    """Fallback OAuth application for OneDrive operated by 21Vianet.

    Used when a storage source does not carry its own client credentials.
    Set via FILEGATE_ONEDRIVE_CHINA__CLIENT_ID and friends.
    """

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    scope: str = "offline_access User.Read Files.ReadWrite.All Sites.Read.All"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FILEGATE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "filegate"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./fg_data/filegate.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Filter Rule Settings
    filter_cache_ttl_seconds: int = Field(
        default=300,
        description="Time-to-live for cached filter rule lists",
    )
    filter_case_sensitive: bool = Field(
        default=True,
        description="Whether filter expressions match file names case-sensitively",
    )

    # Storage Providers
    onedrive_china: OneDriveChinaSettings = Field(default_factory=OneDriveChinaSettings)

    @field_validator("filter_cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        """Reject negative TTLs; zero disables caching."""
        if v < 0:
            raise ValueError("filter_cache_ttl_seconds must be >= 0")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
