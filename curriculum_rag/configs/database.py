"""
Database configuration settings.

PostgreSQL with pgvector in deployed environments; any SQLAlchemy async
URL (typically ``sqlite+aiosqlite``) can be supplied through POSTGRES_URL
for local runs.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Engine and pool configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from curriculum_rag.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool settings, read from POSTGRES_* variables."""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_")

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="curriculum_rag", description="Database name")
    sslmode: str = Field(
        default="prefer",
        description="'require' adds ssl=require for managed Postgres",
    )
    url: str | None = Field(
        default=None,
        description="Complete async URL; overrides every field above",
    )

    pool_size: int = Field(default=10, description="Persistent connections per process")
    max_overflow: int = Field(default=20, description="Connections allowed beyond pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a free connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    @property
    def async_database_url(self) -> str:
        """SQLAlchemy URL for the asyncpg driver, or the explicit override."""
        if self.url:
            return self.url
        query = {"ssl": "require"} if self.sslmode == "require" else {}
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query=query,
        ).render_as_string(hide_password=False)

    @property
    def is_postgres(self) -> bool:
        """True when the configured backend supports pgvector operators."""
        return self.async_database_url.startswith("postgresql")
