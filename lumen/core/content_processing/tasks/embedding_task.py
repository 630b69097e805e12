"""
Embedding generation task.

Turns text into fixed-dimension vectors through a LangChain Embeddings
provider. Provider calls are synchronous, so they run in the threadpool and
are bounded by a timeout. Any provider failure or malformed output surfaces
as EmbeddingProviderError; a batch either returns every vector or none.

Dependencies: langchain_core, fastapi.concurrency, lumen.core.exceptions
System role: Third stage of the article sync pipeline, query embedding for tools
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings

from lumen.core.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Async facade over a LangChain embeddings provider."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int = 1536,
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings provider
            dimension: Expected vector length
            timeout_seconds: Upper bound for one provider call

        Raises:
            ValueError: When dimension or timeout is not positive
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._embeddings = embeddings
        self.dimension = dimension
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls) -> "EmbeddingClient":
        """Build a client backed by Gemini embeddings from VECTOR_STORE_* settings."""
        from lumen.configs import get_settings
        from lumen.core.content_processing.embeddings_wrapper import FixedDimensionEmbeddings

        config = get_settings().vector_store
        return cls(
            embeddings=FixedDimensionEmbeddings(
                model=config.embedding_model,
                output_dimensionality=config.embedding_dimension,
            ),
            dimension=config.embedding_dimension,
            timeout_seconds=config.embedding_timeout_seconds,
        )

    async def _call_provider(self, func: Callable[..., Any], payload: Any, operation: str) -> Any:
        try:
            return await asyncio.wait_for(
                run_in_threadpool(func, payload),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingProviderError(
                f"Embedding provider timed out after {self._timeout_seconds}s",
                details={"operation": operation},
            ) from e
        except Exception as e:
            raise EmbeddingProviderError(
                f"Embedding provider failed: {type(e).__name__}: {e}",
                details={"operation": operation},
            ) from e

    def _validate_vector(self, vector: Any, position: int) -> list[float]:
        if vector is None or len(vector) == 0:
            raise EmbeddingProviderError(
                "Embedding provider returned an empty vector",
                details={"position": position},
            )
        if len(vector) != self.dimension:
            raise EmbeddingProviderError(
                f"Expected {self.dimension}-dim vector, got {len(vector)}",
                details={"position": position},
            )
        return [float(value) for value in vector]

    async def embed(self, text: str) -> list[float]:
        """
        Embed one text (queries and single documents).

        Args:
            text: Non-empty text

        Returns:
            list[float]: Vector of length `dimension`

        Raises:
            ValueError: When text is blank
            EmbeddingProviderError: When the provider fails or returns malformed output
        """
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        vector = await self._call_provider(self._embeddings.embed_query, text, "embed")
        return self._validate_vector(vector, 0)

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed many texts, preserving order one-to-one.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input text ([] for no input)

        Raises:
            EmbeddingProviderError: When the provider fails or any vector is malformed
        """
        if not texts:
            return []

        vectors = await self._call_provider(
            self._embeddings.embed_documents, list(texts), "embed_batch"
        )
        if vectors is None or len(vectors) != len(texts):
            raise EmbeddingProviderError(
                "Embedding provider returned the wrong number of vectors",
                details={"expected": len(texts), "received": len(vectors or [])},
            )

        validated = [self._validate_vector(vector, i) for i, vector in enumerate(vectors)]
        logger.info(
            f"{__name__}:embed_batch - Embedded {len(validated)} texts",
            extra={"dimension": self.dimension},
        )
        return validated
