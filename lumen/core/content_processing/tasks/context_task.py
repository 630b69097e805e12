"""
Context composition task.

Prepends an article header (title, author, summary) to every chunk before
embedding so vectors carry article-level context, while the raw chunks are
kept untouched for storage and display.

Dependencies: pydantic
System role: Second stage of the article sync pipeline
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field


class ArticleContext(BaseModel):
    """Article metadata injected into every embedded chunk."""

    title: str
    author_name: str | None = None
    short_description: str | None = None


class ComposedChunks(BaseModel):
    """Parallel lists of stored chunks and their embedding inputs."""

    stored: list[str] = Field(description="Raw chunks, persisted as-is")
    embedding_ready: list[str] = Field(description="Header + blank line + chunk, sent to the embedder")


class ContextCompositor:
    """Build embedding inputs from raw chunks and article metadata."""

    @staticmethod
    def build_header(context: ArticleContext) -> str:
        lines = [f"Article: {context.title}"]
        if context.author_name:
            lines.append(f"By {context.author_name}")
        if context.short_description:
            lines.append(f"Summary: {context.short_description}")
        return "\n".join(lines)

    def compose(self, context: ArticleContext, chunks: Sequence[str]) -> ComposedChunks:
        """
        Pair each raw chunk with its header-prefixed embedding input.

        Args:
            context: Article metadata
            chunks: Raw chunks from the segmenter

        Returns:
            ComposedChunks: stored[i] is chunks[i]; embedding_ready[i] ends with it
        """
        header = self.build_header(context)
        return ComposedChunks(
            stored=list(chunks),
            embedding_ready=[f"{header}\n\n{chunk}" for chunk in chunks],
        )
