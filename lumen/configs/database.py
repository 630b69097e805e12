"""
PostgreSQL settings for the pgvector chunk store.

Dependencies: pydantic_settings, sqlalchemy
System role: Connection parameters for the async engine
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class DatabaseSettings(BaseSettings):
    """POSTGRES_* connection and pool settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="lumen", description="Database holding blog_embeddings")
    require_ssl: bool = Field(default=False, description="Require TLS (managed Postgres)")

    pool_size: int = Field(default=5)
    max_overflow: int = Field(default=10)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False)

    @property
    def async_url(self) -> str:
        """asyncpg DSN; asyncpg takes `ssl` rather than libpq's `sslmode`."""
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.require_ssl else {},
        )
        return url.render_as_string(hide_password=False)
