"""Tests for TextSegmenter and ContextCompositor.

Dependencies: pytest, langchain_text_splitters
System role: Segmentation and context composition behavior
"""

import itertools
import random

import pytest

from lumen.core.content_processing.tasks import (
    ArticleContext,
    ContextCompositor,
    TextSegmenter,
)


# ============================================================================
# TextSegmenter
# ============================================================================


class TestTextSegmenter:
    """Test chunking behavior of TextSegmenter."""

    def test_words_split_with_overlap(self) -> None:
        """Should split 38 words into 3 chunks, each following chunk repeating the prior tail."""
        text = " ".join(f"token{i:03d}" for i in range(38))
        chunks = TextSegmenter(chunk_size=150, chunk_overlap=20).split(text)

        assert len(chunks) == 3
        assert all(len(chunk) <= 150 for chunk in chunks)
        assert chunks[0].startswith("token000")
        assert chunks[0].endswith("token014 token015")
        assert chunks[1].startswith("token014 token015")
        assert chunks[2].endswith("token037")

    def test_short_text_single_chunk(self) -> None:
        """Should return the stripped text as a single chunk when it fits."""
        chunks = TextSegmenter().split("  A quiet morning.  ")

        assert chunks == ["A quiet morning."]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_blank_text_yields_nothing(self, text: str) -> None:
        """Should return an empty list for blank input."""
        assert TextSegmenter().split(text) == []

    def test_paragraph_boundaries_preferred(self) -> None:
        """Should split on paragraph breaks before sentences or words."""
        first = "a" * 100
        second = "b" * 100
        chunks = TextSegmenter(chunk_size=150, chunk_overlap=20).split(f"{first}\n\n{second}")

        assert chunks == [first, second]

    def test_split_is_deterministic(self) -> None:
        """Should produce identical chunks for identical input."""
        text = " ".join(f"word{i}" for i in range(200))
        segmenter = TextSegmenter()

        assert segmenter.split(text) == segmenter.split(text)

    def test_no_chunk_is_empty(self) -> None:
        """Should never emit empty chunks."""
        text = "One.\n\n\n\nTwo.\n\n   \n\nThree."
        chunks = TextSegmenter(chunk_size=10, chunk_overlap=2).split(text)

        assert chunks
        assert all(chunk.strip() for chunk in chunks)

    @pytest.mark.parametrize(
        "chunk_size,chunk_overlap",
        [(0, 0), (-5, 0), (100, -1), (100, 100), (50, 80)],
    )
    def test_invalid_configuration_rejected(self, chunk_size: int, chunk_overlap: int) -> None:
        """Should reject non-positive sizes and overlaps not below chunk_size."""
        with pytest.raises(ValueError):
            TextSegmenter(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

    def test_custom_separators_kept(self) -> None:
        """Should expose the configured separators."""
        segmenter = TextSegmenter(separators=["\n", " "])

        assert segmenter.separators == ["\n", " "]

    def test_sentence_and_word_separators(self) -> None:
        """Should cut a 340-character text into 3 chunks that overlap by about 20 characters."""
        text = " ".join(f"w{i:03d}abcde" for i in range(34)) + "."
        assert len(text) == 340

        chunks = TextSegmenter(chunk_size=150, chunk_overlap=20, separators=[". ", " "]).split(text)

        assert len(chunks) == 3
        assert all(len(chunk) <= 150 for chunk in chunks)
        assert chunks[0].endswith("w013abcde w014abcde")
        assert chunks[1].startswith("w013abcde w014abcde")
        assert chunks[2].endswith("w033abcde.")
        first_end = len(chunks[0])
        second_start = text.index(chunks[1])
        assert first_end - second_start == 19

    def test_oversized_token_kept_whole(self) -> None:
        """Should emit a token longer than chunk_size as its own chunk when no separator splits it."""
        long_token = "x" * 60
        text = f"short words here {long_token} tail"

        chunks = TextSegmenter(chunk_size=30, chunk_overlap=5, separators=[". ", " "]).split(text)

        assert long_token in chunks
        assert all(len(chunk) <= 30 for chunk in chunks if chunk != long_token)


# ============================================================================
# Segmentation properties over generated articles
# ============================================================================


def _article(seed: int) -> str:
    """Paragraphs of sentences built from uniquely numbered words."""
    rng = random.Random(seed)
    counter = itertools.count()
    paragraphs = []
    for _ in range(rng.randint(2, 4)):
        sentences = []
        for _ in range(rng.randint(2, 5)):
            words = [f"t{next(counter):04d}" + "x" * rng.randint(0, 6) for _ in range(rng.randint(3, 14))]
            sentences.append(" ".join(words) + ".")
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)


def _spans(text: str, chunks: list[str]) -> list[tuple[int, int]]:
    spans = []
    for chunk in chunks:
        start = text.find(chunk)
        assert start != -1, f"chunk is not a substring of the text: {chunk!r}"
        spans.append((start, start + len(chunk)))
    return spans


class TestSegmentationProperties:
    """Coverage, size and overlap bounds over generated articles."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    @pytest.mark.parametrize("chunk_size,chunk_overlap", [(150, 20), (60, 10), (40, 0), (200, 50)])
    @pytest.mark.parametrize("separators", [None, [". ", " "]])
    def test_chunks_cover_text_within_bounds(
        self,
        seed: int,
        chunk_size: int,
        chunk_overlap: int,
        separators: list[str] | None,
    ) -> None:
        """Should cover the text without gaps, respect chunk_size and bound every overlap."""
        text = _article(seed)
        chunks = TextSegmenter(chunk_size, chunk_overlap, separators).split(text)

        assert chunks
        assert all(len(chunk) <= chunk_size for chunk in chunks)

        spans = _spans(text, chunks)
        assert spans[0][0] == 0
        assert spans[-1][1] == len(text)
        for (prev_start, prev_end), (start, end) in zip(spans, spans[1:]):
            assert start > prev_start
            assert end > prev_end
            if start >= prev_end:
                assert text[prev_end:start].strip() == ""
            else:
                assert prev_end - start <= chunk_overlap


# ============================================================================
# ContextCompositor
# ============================================================================


class TestContextCompositor:
    """Test header composition for embedding inputs."""

    def test_full_header(self) -> None:
        """Should include title, author and summary lines in order."""
        header = ContextCompositor.build_header(
            ArticleContext(title="Slow Living", author_name="Mara", short_description="Unhurried days")
        )

        assert header == "Article: Slow Living\nBy Mara\nSummary: Unhurried days"

    def test_title_only_header(self) -> None:
        """Should omit author and summary lines when absent."""
        header = ContextCompositor.build_header(ArticleContext(title="Slow Living"))

        assert header == "Article: Slow Living"

    def test_compose_keeps_raw_chunks(self) -> None:
        """Should store chunks untouched and prefix embedding inputs with the header."""
        composed = ContextCompositor().compose(
            ArticleContext(title="Slow Living", author_name="Mara"),
            ["first chunk", "second chunk"],
        )

        assert composed.stored == ["first chunk", "second chunk"]
        assert composed.embedding_ready == [
            "Article: Slow Living\nBy Mara\n\nfirst chunk",
            "Article: Slow Living\nBy Mara\n\nsecond chunk",
        ]
        for stored, ready in zip(composed.stored, composed.embedding_ready):
            assert ready.endswith(stored)

    def test_compose_empty(self) -> None:
        """Should return empty parallel lists for no chunks."""
        composed = ContextCompositor().compose(ArticleContext(title="x"), [])

        assert composed.stored == []
        assert composed.embedding_ready == []
