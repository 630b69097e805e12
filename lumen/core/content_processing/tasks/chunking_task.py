"""
Text segmentation task using RecursiveCharacterTextSplitter.

Splits article plain text into overlapping chunks. Separators are tried in
priority order (paragraph, line, sentence, word, character) and adjacent
pieces are merged greedily up to the target size. The split is pure and
deterministic, so chunk indices are reproducible across resyncs.

Dependencies: langchain_text_splitters
System role: First stage of the article sync pipeline
"""

from collections.abc import Sequence

from langchain_text_splitters import RecursiveCharacterTextSplitter

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


class TextSegmenter:
    """Split text into overlapping chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 150,
        chunk_overlap: int = 20,
        separators: Sequence[str] | None = None,
    ) -> None:
        """
        Initialize segmenter with splitter configuration.

        Args:
            chunk_size: Target chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            separators: Split boundaries in priority order

        Raises:
            ValueError: When sizes are non-positive or overlap is not below chunk_size
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separators = list(separators) if separators is not None else list(DEFAULT_SEPARATORS)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=self.separators,
            keep_separator="end",
            strip_whitespace=True,
            length_function=len,
        )

    def split(self, text: str) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Plain article text

        Returns:
            list[str]: Non-empty chunks in document order ([] for blank input)
        """
        if not text or not text.strip():
            return []

        chunks = (chunk.strip() for chunk in self._splitter.split_text(text.strip()))
        return [chunk for chunk in chunks if chunk]
