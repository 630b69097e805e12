"""Tests for rich text extraction and token truncation.

Dependencies: pytest
System role: Plain-text extraction behavior
"""

from lumen.boundary.contentful import extract_plain_text, truncate_to_token_limit
from tests.factories import rich_text


class TestExtractPlainText:
    """Test rich text flattening."""

    def test_paragraphs_joined(self) -> None:
        """Should join paragraphs and collapse whitespace to single spaces."""
        document = rich_text("Slow mornings.", "Tea at   dusk.")

        assert extract_plain_text(document) == "Slow mornings. Tea at dusk."

    def test_nested_marks_and_links(self) -> None:
        """Should include text nested inside hyperlinks and list items."""
        document = {
            "nodeType": "document",
            "content": [
                {
                    "nodeType": "paragraph",
                    "content": [
                        {"nodeType": "text", "value": "Read"},
                        {
                            "nodeType": "hyperlink",
                            "data": {"uri": "https://example.com"},
                            "content": [{"nodeType": "text", "value": "this essay"}],
                        },
                    ],
                },
                {
                    "nodeType": "unordered-list",
                    "content": [
                        {
                            "nodeType": "list-item",
                            "content": [
                                {"nodeType": "paragraph", "content": [{"nodeType": "text", "value": "linen"}]}
                            ],
                        }
                    ],
                },
            ],
        }

        assert extract_plain_text(document) == "Read this essay linen"

    def test_embedded_entries_without_text(self) -> None:
        """Should ignore nodes that carry no text."""
        document = {
            "nodeType": "document",
            "content": [
                {"nodeType": "embedded-entry-block", "data": {"target": {}}, "content": []},
                {"nodeType": "paragraph", "content": [{"nodeType": "text", "value": "Only this."}]},
            ],
        }

        assert extract_plain_text(document) == "Only this."

    def test_missing_document(self) -> None:
        """Should return empty text for None or content-less documents."""
        assert extract_plain_text(None) == ""
        assert extract_plain_text({}) == ""
        assert extract_plain_text({"nodeType": "document", "content": None}) == ""

    def test_whitespace_only(self) -> None:
        """Should return empty text when every leaf is blank."""
        assert extract_plain_text(rich_text("   ", "\n")) == ""


class TestTruncateToTokenLimit:
    """Test the approximate token cap."""

    def test_within_budget_untouched(self) -> None:
        """Should return short text unchanged."""
        assert truncate_to_token_limit("short text", max_tokens=10) == "short text"

    def test_cut_at_word_boundary(self) -> None:
        """Should cut at the last space inside the budget and add an ellipsis."""
        text = "alpha beta gamma delta"

        assert truncate_to_token_limit(text, max_tokens=3) == "alpha beta..."

    def test_no_space_hard_cut(self) -> None:
        """Should hard-cut text without spaces."""
        assert truncate_to_token_limit("x" * 20, max_tokens=2) == "x" * 8 + "..."
