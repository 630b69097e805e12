"""
Models for the article sync pipeline.

Exports: SyncOutcome, SyncResult, BatchSyncResult
"""

from .sync_result import BatchSyncResult, SyncOutcome, SyncResult

__all__ = [
    "BatchSyncResult",
    "SyncOutcome",
    "SyncResult",
]
