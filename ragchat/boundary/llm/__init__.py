"""Language model adapters."""

from ragchat.boundary.llm.completion_client import CompletionClient, build_chat_model

__all__ = ["CompletionClient", "build_chat_model"]
