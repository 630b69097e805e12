"""
Configuration settings for the article sync pipeline.

Provides environment-based configuration for chunking, locales and
reconciliation.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SyncPipelineSettings(BaseSettings):
    """Settings for the CMS to vector store sync pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SYNC_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=150,
        gt=0,
        description="Target chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=20,
        ge=0,
        description="Overlap between consecutive chunks",
    )
    separators: list[str] = Field(
        default=["\n\n", "\n", ". ", " ", ""],
        description="Split boundaries in priority order",
    )

    # Batch settings
    locales: list[str] = Field(
        default=["en-US", "de-DE"],
        description="Locales synced by the batch job",
    )
    reconciliation_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per orphan deletion during reconciliation",
    )


@lru_cache
def get_pipeline_settings() -> SyncPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        SyncPipelineSettings: Singleton settings loaded from environment
    """
    return SyncPipelineSettings()
