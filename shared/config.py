"""
Shared configuration management for the Moodle access client.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MoodleSettings(BaseSettings):
    """Client settings, read from ``MOODLE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="MOODLE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="info")

    # Web service endpoint
    url: str = Field(default="http://localhost/moodle/")
    token: str = Field(default="")

    # HTTP fetch
    connect_timeout: float = Field(default=8.0)
    request_timeout: float = Field(default=16.0)
    retry_attempts: int = Field(default=3)
    retry_base_delay: float = Field(default=0.5)
    retry_max_delay: float = Field(default=5.0)
    breaker_failure_threshold: int = Field(default=5)
    breaker_recovery_timeout: float = Field(default=30.0)

    # Password reset mail
    smtp_host: Optional[str] = Field(default=None)
    smtp_port: int = Field(default=0)
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: Optional[str] = Field(default=None)
    smtp_from_name: Optional[str] = Field(default=None)
    smtp_from_email: Optional[str] = Field(default=None)


def get_settings(**overrides) -> MoodleSettings:
    """Get client settings, with optional explicit overrides."""
    return MoodleSettings(**overrides)
