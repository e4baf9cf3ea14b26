"""Application services: ingestion, retrieval and conversation orchestration."""

from ragchat.application.conversation_orchestrator import ChatTurnResult, ConversationOrchestrator
from ragchat.application.ingestion_service import IngestionService
from ragchat.application.retrieval_service import RetrievalMode, RetrievalResult, RetrievalService

__all__ = [
    "ChatTurnResult",
    "ConversationOrchestrator",
    "IngestionService",
    "RetrievalMode",
    "RetrievalResult",
    "RetrievalService",
]
