"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_env: str = Field(
        default="development",
        description="Name of the deployment environment reported by the health check",
    )
    vercel: bool = Field(
        default=False,
        description="Whether the service runs on the serverless host instead of its own listener",
    )
    host: str = Field(default="0.0.0.0", description="Interface bound by the standalone server")
    port: int = Field(default=3000, gt=0, description="Port bound by the standalone server")
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC+HH:MM offset) used for stored timestamps",
    )
    log_level: str = Field(default="INFO", description="Level applied to the ``app`` loggers")
    firebase_service_account_key: str | None = Field(
        default=None,
        description="Firebase service account credential as a JSON document",
    )
    firebase_service_account_path: str = Field(
        default="firebase-service-account-key.json",
        description="Service account file used when the JSON document is not provided",
    )
    push_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout applied to every call made to the push provider",
    )
    push_max_workers: int = Field(
        default=4,
        ge=1,
        description="Maximum number of push deliveries running at once during a fan-out",
    )
    push_android_channel_id: str = Field(
        default="sippke_reports",
        description="Android notification channel used for report notifications",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def serves_standalone(self) -> bool:
        """Return ``True`` when the process must bind its own listening port."""

        return not self.is_production and not self.vercel


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
