"""
Sync result models for the article pipeline.

Represents the outcome of syncing one article/locale and of a batch run.

Dependencies: pydantic
System role: Return types for ArticleSyncPipeline
"""

from enum import Enum

from pydantic import BaseModel, Field


class SyncOutcome(str, Enum):
    """What happened to one article during a sync."""

    SYNCED = "synced"
    SKIPPED = "skipped"
    FAILED = "failed"


class SyncResult(BaseModel):
    """Result of syncing one article in one locale."""

    outcome: SyncOutcome = Field(description="synced, skipped or failed")
    article_id: str | None = Field(default=None, description="CMS entry ID when known")
    slug: str | None = Field(default=None, description="Article slug when known")
    locale: str = Field(description="Locale that was synced")
    chunk_count: int = Field(default=0, description="Chunks written")
    message: str = Field(default="", description="Human-readable detail")

    @property
    def success(self) -> bool:
        return self.outcome == SyncOutcome.SYNCED


class BatchSyncResult(BaseModel):
    """Aggregate of a full-collection sync for one locale."""

    locale: str
    synced: int = 0
    skipped: int = 0
    failed: int = 0
    deleted: int = Field(default=0, description="Orphaned articles removed by reconciliation")
    errors: list[str] = Field(default_factory=list, description="One line per failed article")
    results: list[SyncResult] = Field(default_factory=list)
    reconciliation_failures: list[str] = Field(
        default_factory=list,
        description="Article ids whose orphan deletion kept failing",
    )

    def record(self, result: SyncResult) -> None:
        """Fold one article result into the counters."""
        self.results.append(result)
        if result.outcome == SyncOutcome.SYNCED:
            self.synced += 1
        elif result.outcome == SyncOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.errors.append(f"{result.slug or result.article_id}: {result.message}")
