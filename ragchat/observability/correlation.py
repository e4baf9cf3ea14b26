"""
Correlation ID context manager.

Manages correlation ID propagation across async boundaries using contextvars.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar, Token

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> tuple[str, Token]:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        tuple[str, Token]: The correlation ID that was set and the reset token
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    token = correlation_id_ctx.set(correlation_id)
    return correlation_id, token


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID ("" outside a request)
    """
    return correlation_id_ctx.get()


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    correlation_id_ctx.reset(token)
