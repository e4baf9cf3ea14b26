"""
Dependency injection container.

Factory functions for FastAPI dependencies. Services are built lazily on
first use and shared for the life of the process. Network clients defer
connecting until their first call, so a missing setting fails the request
that needs it instead of every request.

Dependencies: ragchat.configs, ragchat.application, ragchat.boundary, ragchat.core
System role: DI container for service injection
"""

from functools import partial

from ragchat.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._session_store = None
        self._search_client = None
        self._blob_client = None
        self._completion_client = None
        self._orchestrator = None

    @property
    def settings(self) -> Settings:
        """Settings used to build services."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def session_store(self):
        """Get cached session store."""
        if self._session_store is None:
            from ragchat.core.session_store import InMemorySessionStore

            self._session_store = InMemorySessionStore(
                max_sessions=self.settings.chat.max_sessions,
            )
        return self._session_store

    @property
    def search_client(self):
        """Get cached search service client."""
        if self._search_client is None:
            from ragchat.boundary.azure.search_client import SearchServiceClient

            self._search_client = SearchServiceClient(self.settings.search)
        return self._search_client

    @property
    def blob_client(self):
        """Get cached blob document client."""
        if self._blob_client is None:
            from ragchat.boundary.azure.blob_client import BlobDocumentClient

            self._blob_client = BlobDocumentClient(self.settings.blob_storage)
        return self._blob_client

    @property
    def completion_client(self):
        """Get cached completion client."""
        if self._completion_client is None:
            from ragchat.boundary.llm.completion_client import CompletionClient, build_chat_model

            self._completion_client = CompletionClient(
                model_factory=partial(build_chat_model, self.settings.azure_openai),
            )
        return self._completion_client

    @property
    def orchestrator(self):
        """Get cached conversation orchestrator."""
        if self._orchestrator is None:
            from ragchat.application import (
                ConversationOrchestrator,
                IngestionService,
                RetrievalService,
            )

            self._orchestrator = ConversationOrchestrator(
                session_store=self.session_store,
                retrieval_service=RetrievalService(self.search_client),
                completion_client=self.completion_client,
                ingestion_service=IngestionService(
                    blob_client=self.blob_client,
                    search_client=self.search_client,
                    indexer_name=self.settings.search.indexer,
                ),
                max_context_chars=self.settings.chat.max_context_chars,
                default_upload_question=self.settings.chat.default_upload_question,
            )
        return self._orchestrator

    async def aclose(self) -> None:
        """Close network clients and clear all cached instances."""
        if self._search_client is not None:
            await self._search_client.aclose()
        if self._blob_client is not None:
            await self._blob_client.close()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._session_store = None
        self._search_client = None
        self._blob_client = None
        self._completion_client = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_conversation_orchestrator():
    """
    Get conversation orchestrator.

    Returns:
        ConversationOrchestrator: Orchestrator wired to Azure collaborators
    """
    return get_service_cache().orchestrator
