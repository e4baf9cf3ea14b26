"""
Exception hierarchy for the document chat service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and the
API layer maps each kind to an HTTP status.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatException(Exception):
    """Base exception for all document chat errors."""

    status_code: int = 500

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

    @property
    def detail(self) -> str | None:
        """Upstream detail exposed to clients, if any."""
        return None


class InvalidInputError(RagChatException):
    """Raised when a required request field is missing or blank."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class IngestionFailedError(RagChatException):
    """Raised when any storage or indexer step of an upload fails."""

    def __init__(
        self,
        message: str,
        step: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            step: Pipeline step that failed (ensure_container, upload, run_indexer)
            cause: Underlying exception
            details: Additional context
        """
        details = details or {}
        details["step"] = step
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        self.step = step
        self.cause = cause
        super().__init__(message, details)

    @property
    def detail(self) -> str | None:
        return str(self.cause) if self.cause is not None else None


class UpstreamLLMError(RagChatException):
    """Raised when the completion call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize completion error.

        Args:
            message: Error message
            status_code: Upstream HTTP status, when the service returned one
            detail: Upstream error body or transport message
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["upstream_status"] = status_code
        self.upstream_status = status_code
        self.upstream_detail = detail
        super().__init__(message, details)

    @property
    def detail(self) -> str | None:
        return self.upstream_detail


class RetrievalError(RagChatException):
    """
    Raised by a search step that failed.

    Never reaches the API: the retrieval service records it on the
    RetrievalResult and the conversation continues with empty context.
    """

    def __init__(
        self,
        message: str,
        mode: str | None = None,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            mode: Search mode that failed (semantic, lexical)
            cause: Underlying exception
            details: Additional context
        """
        details = details or {}
        if mode:
            details["mode"] = mode
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        self.mode = mode
        self.cause = cause
        super().__init__(message, details)
