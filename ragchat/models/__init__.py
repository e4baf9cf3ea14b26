"""Domain models and API schemas."""

from ragchat.models.chat import ChatRequest, ChatResponse, ErrorResponse
from ragchat.models.document import UploadedDocument
from ragchat.models.session import Session, Turn

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "Session",
    "Turn",
    "UploadedDocument",
]
