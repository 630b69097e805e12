"""
Article chunk ORM model.

One row per embedded chunk of one article in one locale. Article metadata is
denormalized onto every row so retrieval never needs a join.

Dependencies: sqlalchemy, pgvector, lumen.boundary.db.base
System role: Persistence for the vector store
"""

from datetime import datetime

from pgvector.sqlalchemy import Vector
from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lumen.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow

EMBEDDING_DIMENSION = 1536


class ArticleChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Embedded article chunk.

    Attributes:
        id: UUID primary key (auto-generated)
        article_id: CMS entry ID, stable across locales and versions
        slug: Human-facing article slug
        locale: Locale tag partitioning content and vectors
        title: Article title (same on every chunk of the article/locale)
        short_description: Optional article summary
        author_name: Optional author display name
        published_date: Optional publish timestamp
        chunk_content: Raw chunk text without the embedding context header
        chunk_index: 0-based position of the chunk
        total_chunks: Number of chunks stored for this article/locale
        embedding: Fixed-dimension embedding vector
        tags: Optional CMS tags
        last_synced_at: When this chunk set was written

    Constraints:
        (article_id, locale, chunk_index) is unique
    """

    __tablename__ = "blog_embeddings"

    article_id: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), nullable=False, default="en-US")

    title: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    published_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    chunk_content: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    total_chunks: Mapped[int] = mapped_column(Integer, nullable=False)

    embedding: Mapped[list[float]] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)

    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    last_synced_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("article_id", "locale", "chunk_index", name="uq_article_locale_chunk"),
        Index(
            "embedding_idx",
            "embedding",
            postgresql_using="hnsw",
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
        Index("slug_idx", "slug"),
        Index("article_id_idx", "article_id"),
        Index("locale_idx", "locale"),
        Index("chunk_idx", "article_id", "chunk_index"),
    )
