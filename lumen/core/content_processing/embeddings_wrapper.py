"""
Gemini embeddings pinned to the chunk table's vector size.

gemini-embedding-001 returns 3072 dimensions unless asked for fewer, and the
blog_embeddings column holds exactly one size. Documents and queries are
also tagged with the retrieval task types Gemini tunes for.

Dependencies: langchain_google_genai, python-dotenv
System role: Embedding provider used by EmbeddingClient
"""

import logging

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

# GOOGLE_API_KEY is read from the environment by the provider
load_dotenv()
logger = logging.getLogger(__name__)

DOCUMENT_TASK_TYPE = "RETRIEVAL_DOCUMENT"
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Embeddings that request the same output dimension on every call."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(f"{__name__}:__init__ - {model} at {output_dimensionality} dims")

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type or DOCUMENT_TASK_TYPE,
            titles=titles,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        return super().embed_query(
            text,
            task_type=task_type or QUERY_TASK_TYPE,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )
