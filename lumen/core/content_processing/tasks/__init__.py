"""
Task modules for the article sync pipeline.

Exports: TextSegmenter, ContextCompositor, ArticleContext, ComposedChunks, EmbeddingClient
"""

from .chunking_task import TextSegmenter
from .context_task import ArticleContext, ComposedChunks, ContextCompositor
from .embedding_task import EmbeddingClient

__all__ = [
    "TextSegmenter",
    "ContextCompositor",
    "ArticleContext",
    "ComposedChunks",
    "EmbeddingClient",
]
