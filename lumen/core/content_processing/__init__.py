"""
Article sync pipeline.

Turns CMS articles into locale-scoped, embedded chunk sets in the vector store.

Dependencies: langchain_text_splitters, langchain_google_genai, pydantic, tenacity
System role: Content ingestion pipeline entrypoint
"""

from .configs import SyncPipelineSettings, get_pipeline_settings
from .entrypoint import ArticleSyncPipeline
from .models import BatchSyncResult, SyncOutcome, SyncResult

__all__ = [
    "ArticleSyncPipeline",
    "SyncPipelineSettings",
    "get_pipeline_settings",
    "BatchSyncResult",
    "SyncOutcome",
    "SyncResult",
]
