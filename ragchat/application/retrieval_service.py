"""
Retrieval service for document context.

Two-tier search: a semantic query when a semantic configuration is set,
then a lexical query when the semantic step is unavailable, empty or
failed. Search failures never propagate. They are captured on the
returned RetrievalResult, and the caller decides to continue with empty
context.

Dependencies: ragchat.boundary.azure.search_client
System role: Retrieval orchestration layer
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import httpx

from ragchat.boundary.azure.search_client import SearchServiceClient
from ragchat.core.exceptions import RetrievalError

logger = logging.getLogger(__name__)

PASSAGE_SEPARATOR = "\n\n"


class RetrievalMode(str, Enum):
    """Which search step produced the context."""

    SEMANTIC = "semantic"
    LEXICAL = "lexical"
    NONE = "none"


@dataclass(frozen=True)
class RetrievalResult:
    """Outcome of one retrieval; context is always a string."""

    context: str = ""
    mode: RetrievalMode = RetrievalMode.NONE
    errors: tuple[RetrievalError, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> bool:
        """True when no context was found and at least one step errored."""
        return not self.context and bool(self.errors)


def join_passages(passages: list[str]) -> str:
    """Concatenate non-empty passages with a blank line between them."""
    return PASSAGE_SEPARATOR.join(p for p in passages if p)


class RetrievalService:
    """Finds passages relevant to a question, optionally within one document."""

    def __init__(self, search_client: SearchServiceClient) -> None:
        """
        Initialize retrieval service.

        Args:
            search_client: Search service boundary
        """
        self.search_client = search_client

    async def search(self, query: str, scope_filename: str | None = None) -> RetrievalResult:
        """
        Retrieve context for a query.

        Args:
            query: User question
            scope_filename: Restrict results to this uploaded document

        Returns:
            RetrievalResult: Joined passages (possibly empty) and any captured errors
        """
        errors: list[RetrievalError] = []
        semantic_configuration = self.search_client.settings.semantic_configuration

        if semantic_configuration:
            try:
                passages = await self.search_client.semantic_search(
                    query,
                    semantic_configuration=semantic_configuration,
                    scope_filename=scope_filename,
                )
                context = join_passages(passages)
                if context:
                    logger.info(
                        f"{__name__}:search - Semantic context length: {len(context)}",
                        extra={"scope": scope_filename, "passages": len(passages)},
                    )
                    return RetrievalResult(context=context, mode=RetrievalMode.SEMANTIC)
                logger.info(f"{__name__}:search - Semantic search returned nothing, falling back")
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                logger.warning(f"{__name__}:search - Semantic search failed: {type(e).__name__}: {e}")
                errors.append(RetrievalError("Semantic search failed", mode="semantic", cause=e))

        try:
            passages = await self.search_client.lexical_search(query, scope_filename=scope_filename)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"{__name__}:search - Full-text search failed: {type(e).__name__}: {e}")
            errors.append(RetrievalError("Full-text search failed", mode="lexical", cause=e))
            return RetrievalResult(errors=tuple(errors))

        context = join_passages(passages)
        logger.info(
            f"{__name__}:search - Full-text context length: {len(context)}",
            extra={"scope": scope_filename, "passages": len(passages)},
        )
        mode = RetrievalMode.LEXICAL if context else RetrievalMode.NONE
        return RetrievalResult(context=context, mode=mode, errors=tuple(errors))
