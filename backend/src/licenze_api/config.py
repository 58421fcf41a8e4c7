"""Application configuration."""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Licenze Renewal API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Automatic renewal
    renewal_enabled: bool = True
    renewal_timezone: str = "Europe/Rome"
    renewal_hour: int = Field(default=0, ge=0, le=23)
    renewal_minute: int = Field(default=0, ge=0, le=59)
    renewal_run_timeout_seconds: float | None = Field(default=None, gt=0)
    default_trial_days: int = Field(default=30, ge=1)

    # Ops endpoints (empty token disables them)
    ops_token: str = ""

    # Trusted proxies for rate limiting (comma-separated IP/CIDR ranges)
    trusted_proxies: str = ""

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings consistency."""
        if self.environment == "production" and self.debug:
            raise ValueError("DEBUG mode cannot be enabled in production environment.")

        url = str(self.database_url)
        if not url.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        try:
            ZoneInfo(self.renewal_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"RENEWAL_TIMEZONE must be an IANA timezone name, got '{self.renewal_timezone}'"
            )

        if self.environment == "production" and self.ops_token and len(self.ops_token) < 32:
            raise ValueError("OPS_TOKEN must be at least 32 characters in production")

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg."""
        url = str(self.database_url)
        url = url.replace("postgresql://", "postgresql+asyncpg://")
        url = url.replace("postgres://", "postgresql+asyncpg://")
        # asyncpg expects ssl= instead of sslmode=
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def renewal_tzinfo(self) -> ZoneInfo:
        """Get the renewal scheduler timezone."""
        return ZoneInfo(self.renewal_timezone)

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list."""
        if not self.trusted_proxies:
            return []
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
