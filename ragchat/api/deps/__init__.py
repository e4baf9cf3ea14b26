"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_conversation_orchestrator,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_conversation_orchestrator",
    "get_service_cache",
]
