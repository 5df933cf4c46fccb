"""
Document storage configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Blob fetch configuration (S3 bucket, HTTP client)
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from curriculum_rag.configs.base import BaseSettings


class StorageSettings(BaseSettings):
    """Settings for fetching raw document bytes."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    s3_bucket: str = Field(
        default="curriculum-rag-documents",
        description="S3 bucket used when a locator is a bare object key",
    )
    s3_region: str = Field(default="eu-west-1", description="AWS region for the bucket")
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout for HTTP(S) document downloads",
    )
