"""
Shared test fixtures and configuration for entire test suite.

Provides: settings builders, collaborator mocks, wired orchestrator
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ragchat.application.conversation_orchestrator import ConversationOrchestrator
from ragchat.application.ingestion_service import IngestionService
from ragchat.application.retrieval_service import RetrievalService
from ragchat.boundary.azure.search_client import SearchServiceClient
from ragchat.configs.search import SearchSettings
from ragchat.core.session_store import InMemorySessionStore
from ragchat.models.document import UploadedDocument


def build_search_settings(**overrides) -> SearchSettings:
    """Build search settings isolated from the environment."""
    values = {
        "service": "test-search",
        "api_key": "test-key",
        "index": "docs-index",
        "semantic_configuration": None,
        "retry_attempts": 1,
    }
    values.update(overrides)
    return SearchSettings(_env_file=None, **values)


@pytest.fixture
def make_search_settings():
    """Factory for search settings with overrides."""
    return build_search_settings


@pytest.fixture
def search_settings() -> SearchSettings:
    """Search settings without semantic configuration."""
    return build_search_settings()


@pytest.fixture
def mock_search_client(search_settings: SearchSettings) -> AsyncMock:
    """
    Create mock SearchServiceClient.

    Returns:
        AsyncMock: Search client returning one lexical passage
    """
    client = AsyncMock(spec=SearchServiceClient)
    client.settings = search_settings
    client.semantic_search = AsyncMock(return_value=[])
    client.lexical_search = AsyncMock(return_value=["Passage about the role."])
    client.run_indexer = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_blob_client() -> AsyncMock:
    """
    Create mock BlobDocumentClient.

    Returns:
        AsyncMock: Blob client whose uploads succeed
    """
    client = AsyncMock()
    client.ensure_container = AsyncMock(return_value=False)
    client.upload = AsyncMock(
        side_effect=lambda name, data, content_type=None: f"https://acct.blob.core.windows.net/container-rag/{name}"
    )
    return client


@pytest.fixture
def mock_completion_client() -> MagicMock:
    """
    Create mock CompletionClient.

    Returns:
        MagicMock: Completion client with async complete()
    """
    client = MagicMock()
    client.complete = AsyncMock(return_value="Generated answer.")
    return client


@pytest.fixture
def session_store() -> InMemorySessionStore:
    """Fresh unbounded session store."""
    return InMemorySessionStore()


@pytest.fixture
def orchestrator(
    session_store: InMemorySessionStore,
    mock_search_client: AsyncMock,
    mock_blob_client: AsyncMock,
    mock_completion_client: MagicMock,
) -> ConversationOrchestrator:
    """Orchestrator with real services over mocked boundaries."""
    return ConversationOrchestrator(
        session_store=session_store,
        retrieval_service=RetrievalService(mock_search_client),
        completion_client=mock_completion_client,
        ingestion_service=IngestionService(
            blob_client=mock_blob_client,
            search_client=mock_search_client,
            indexer_name="rag-indexer",
        ),
    )


@pytest.fixture
def resume_pdf() -> UploadedDocument:
    """Small PDF-like upload."""
    return UploadedDocument(
        filename="resume.pdf",
        content=b"%PDF-1.4\n1 0 obj\n<< >>\nendobj\n",
        content_type="application/pdf",
    )
