"""
Azure AI Search REST client.

Issues semantic and lexical document queries against the configured index
and triggers indexer runs. Queries are idempotent and retried on transient
failures; indexer triggers are sent once.

Dependencies: httpx, tenacity
System role: Search service boundary (retrieval and indexing)
"""

import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragchat.configs.search import SearchSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def is_transient_error(exc: BaseException) -> bool:
    """Transport failures, throttling and server errors are worth retrying."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def build_filename_filter(field: str, filename: str | None) -> str | None:
    """
    Build an OData exact-match filter on the stored filename field.

    Args:
        field: Filterable index field
        filename: Filename to match; None means no filter

    Returns:
        str | None: Filter expression with quotes escaped
    """
    if not filename:
        return None
    escaped = filename.replace("'", "''")
    return f"{field} eq '{escaped}'"


class SearchServiceClient:
    """Async client for document search and indexer runs."""

    def __init__(
        self,
        settings: SearchSettings,
        http_client: httpx.AsyncClient | None = None,
        retry_initial_wait: float = 0.5,
        retry_max_wait: float = 5.0,
    ) -> None:
        """
        Initialize search client.

        Args:
            settings: Search service settings
            http_client: Optional preconfigured client (tests inject a MockTransport)
            retry_initial_wait: First backoff delay in seconds
            retry_max_wait: Backoff ceiling in seconds
        """
        self._settings = settings
        self._client = http_client
        self._retry_initial_wait = retry_initial_wait
        self._retry_max_wait = retry_max_wait

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    @property
    def http(self) -> httpx.AsyncClient:
        """
        HTTP client for the service, built on first use.

        Raises:
            ValueError: Search service name is not configured
        """
        if self._client is None:
            if not self._settings.service.strip():
                raise ValueError("Search service is not configured")
            self._client = httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Release pooled connections."""
        if self._client is not None:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "api-key": self._settings.api_key}

    def _params(self) -> dict[str, str]:
        return {"api-version": self._settings.api_version}

    async def _post_search(self, body: dict[str, Any], operation: str) -> list[str]:
        """POST a query to the index and return non-empty passage contents."""
        path = f"/indexes/{self._settings.index}/docs/search"
        client = self.http

        async for attempt in AsyncRetrying(
            retry=retry_if_exception(is_transient_error),
            stop=stop_after_attempt(max(1, self._settings.retry_attempts)),
            wait=wait_exponential_jitter(
                initial=self._retry_initial_wait,
                max=self._retry_max_wait,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:{operation} - Retry {retry_state.attempt_number}/"
                f"{self._settings.retry_attempts} after transient failure"
            ),
            reraise=True,
        ):
            with attempt:
                response = await client.post(
                    path,
                    params=self._params(),
                    headers=self._headers(),
                    json=body,
                )
                response.raise_for_status()

        payload = response.json()
        values = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(values, list):
            return []

        field = self._settings.content_field
        return [
            item[field]
            for item in values
            if isinstance(item, dict) and isinstance(item.get(field), str) and item[field]
        ]

    async def semantic_search(
        self,
        text: str,
        semantic_configuration: str,
        top: int | None = None,
        scope_filename: str | None = None,
    ) -> list[str]:
        """
        Run a semantic-ranked query.

        Args:
            text: Query text
            semantic_configuration: Semantic configuration name on the index
            top: Result cap (defaults to configured top)
            scope_filename: Restrict results to this stored filename

        Returns:
            list[str]: Passage contents in rank order

        Raises:
            httpx.HTTPError: On transport or service failure after retries
            ValueError: Search service is not configured
        """
        body: dict[str, Any] = {
            "search": text,
            "top": top or self._settings.top,
            "queryType": "semantic",
            "semanticConfiguration": semantic_configuration,
            "select": f"id,{self._settings.content_field}",
        }
        search_filter = build_filename_filter(self._settings.filename_field, scope_filename)
        if search_filter:
            body["filter"] = search_filter
        return await self._post_search(body, "semantic_search")

    async def lexical_search(
        self,
        text: str,
        top: int | None = None,
        scope_filename: str | None = None,
    ) -> list[str]:
        """
        Run a keyword query over the content field.

        Args:
            text: Query text
            top: Result cap (defaults to configured top)
            scope_filename: Restrict results to this stored filename

        Returns:
            list[str]: Passage contents in rank order

        Raises:
            httpx.HTTPError: On transport or service failure after retries
            ValueError: Search service is not configured
        """
        body: dict[str, Any] = {
            "search": text,
            "top": top or self._settings.top,
            "queryType": "simple",
            "searchFields": self._settings.content_field,
            "select": f"id,{self._settings.content_field}",
        }
        search_filter = build_filename_filter(self._settings.filename_field, scope_filename)
        if search_filter:
            body["filter"] = search_filter
        return await self._post_search(body, "lexical_search")

    async def run_indexer(self, indexer_name: str | None = None) -> None:
        """
        Ask the service to start an indexer run.

        Only confirms the run was accepted; indexing continues in the
        background on the service side.

        Args:
            indexer_name: Indexer to run (defaults to configured indexer)

        Raises:
            httpx.HTTPError: When the trigger is rejected or the call fails
            ValueError: Search service is not configured
        """
        name = indexer_name or self._settings.indexer
        response = await self.http.post(
            f"/indexers/{name}/run",
            params=self._params(),
            headers={"api-key": self._settings.api_key},
        )
        if response.is_error:
            logger.error(
                f"{__name__}:run_indexer - Indexer run rejected",
                extra={"indexer": name, "status_code": response.status_code, "body": response.text[:500]},
            )
        response.raise_for_status()
        logger.info(f"{__name__}:run_indexer - Indexer triggered", extra={"indexer": name})
