"""
Azure AI Search configuration.

Settings for the search index queried for context and the indexer
triggered after each upload.

Dependencies: pydantic_settings
System role: Search and indexing configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    """Settings for search queries and indexer runs."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    service: str = Field(
        default="",
        description="Search service name (<service>.search.windows.net)",
    )
    api_key: str = Field(default="", description="Search service admin/query key")
    index: str = Field(default="", description="Index queried for document passages")
    indexer: str = Field(
        default="rag-indexer",
        description="Indexer run after every upload",
    )
    semantic_configuration: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SEARCH_SEMANTIC_CONFIGURATION",
            "SEMANTIC_CONFIGURATION",
        ),
        description="Semantic ranker configuration; lexical search only when unset",
    )
    api_version: str = Field(default="2025-09-01", description="Search REST API version")
    top: int = Field(default=5, description="Maximum passages returned per query")
    content_field: str = Field(
        default="content",
        description="Index field holding passage text",
    )
    filename_field: str = Field(
        default="metadata_storage_name",
        description="Filterable index field holding the source blob name",
    )
    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds for search and indexer calls",
    )
    retry_attempts: int = Field(
        default=3,
        description="Attempts per search query on transient failures",
    )

    @property
    def base_url(self) -> str:
        """Service root URL."""
        return f"https://{self.service}.search.windows.net"
