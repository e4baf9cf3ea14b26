"""Logging, correlation IDs and request middleware."""

from ragchat.observability.logger import configure_logging

__all__ = ["configure_logging"]
