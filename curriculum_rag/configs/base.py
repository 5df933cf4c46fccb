"""
Shared pydantic-settings base.

Every settings group reads the same optional ``.env`` file and ignores
unknown variables, so groups with different prefixes can share one file.

Dependencies: pydantic_settings
System role: Parent of every configuration group
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common settings and the env-file policy for all groups."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment name",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for scripts (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
