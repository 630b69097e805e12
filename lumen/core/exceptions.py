"""
Exception hierarchy for the Lumen content service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LumenError(Exception):
    """Base exception for all Lumen application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ContentSourceError(LumenError):
    """Raised when the CMS cannot be reached or answers with an error."""

    pass


class SourceNotFoundError(LumenError):
    """Raised when an article slug or id does not exist in the CMS."""

    def __init__(
        self,
        identifier: str,
        locale: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize source not found error.

        Args:
            identifier: Slug or entry ID that could not be resolved
            locale: Locale the lookup ran against
            details: Additional context
        """
        details = details or {}
        details["identifier"] = identifier
        if locale:
            details["locale"] = locale
        self.identifier = identifier
        super().__init__(f"Blog post not found: {identifier}", details)


class EmptyContentError(LumenError):
    """Raised when an article exists but yields no extractable text."""

    def __init__(self, slug: str, locale: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details.update({"slug": slug, "locale": locale})
        super().__init__(f"No content found for blog post: {slug}", details)


class EmbeddingProviderError(LumenError):
    """Raised when the embedding provider fails or returns malformed vectors."""

    pass


class VectorStoreError(LumenError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, delete, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class ChunkValidationError(VectorStoreError):
    """Raised when a chunk set would break the per-article storage invariants."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, operation="validate", details=details)


class SignatureVerificationError(LumenError):
    """Raised when a webhook signature is missing, stale, or wrong."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        self.reason = reason
        super().__init__(f"Webhook signature rejected: {reason}", details)
