"""
Rich text to plain text conversion.

Walks a Contentful rich text document: text leaves yield their value,
container nodes join their children with a space, top-level blocks join
with a newline, then all whitespace runs collapse to single spaces.

Dependencies: none
System role: Plain-text extraction before segmentation
"""

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def _node_text(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    if node.get("nodeType") == "text":
        return node.get("value") or ""

    children = node.get("content")
    if isinstance(children, list):
        return " ".join(_node_text(child) for child in children)
    return ""


def extract_plain_text(document: dict[str, Any] | None) -> str:
    """
    Flatten a rich text document to plain text.

    Args:
        document: Rich text JSON (may be None or lack content)

    Returns:
        str: Collapsed plain text ("" when there is nothing to extract)
    """
    if not document or not isinstance(document.get("content"), list):
        return ""

    text = "\n".join(_node_text(block) for block in document["content"])
    return _WHITESPACE.sub(" ", text).strip()


def truncate_to_token_limit(text: str, max_tokens: int = 6000) -> str:
    """
    Cap text at an approximate token budget (about 4 characters per token).

    Cuts at the last word boundary inside the budget and appends "...".

    Args:
        text: Text to cap
        max_tokens: Token budget

    Returns:
        str: Original text when within budget, else the truncated text
    """
    max_chars = max_tokens * 4
    if len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."
