"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from lumen.configs.agent import AgentSettings
from lumen.configs.base import LumenBaseSettings
from lumen.configs.contentful import ContentfulSettings
from lumen.configs.database import DatabaseSettings
from lumen.configs.vector_store import VectorStoreSettings


class Settings(LumenBaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    vector_store: VectorStoreSettings = VectorStoreSettings()
    contentful: ContentfulSettings = ContentfulSettings()
    agent: AgentSettings = AgentSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from lumen.configs import get_settings
        settings = get_settings()
    """
    return Settings()
