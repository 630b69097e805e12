"""ORM models."""

from lumen.boundary.db.models.article_chunk_model import EMBEDDING_DIMENSION, ArticleChunkModel

__all__ = ["ArticleChunkModel", "EMBEDDING_DIMENSION"]
