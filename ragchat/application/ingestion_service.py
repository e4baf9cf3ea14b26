"""
Document ingestion service.

Stores an uploaded document in blob storage and asks the search service
to index it. Steps run in order and each may fail on its own; a failure
stops the pipeline and nothing already done is rolled back (an uploaded
blob stays when the indexer trigger fails).

Dependencies: ragchat.boundary.azure
System role: Ingestion orchestration layer
"""

import logging

from ragchat.boundary.azure.blob_client import BlobDocumentClient
from ragchat.boundary.azure.search_client import SearchServiceClient
from ragchat.core.exceptions import IngestionFailedError, InvalidInputError
from ragchat.models.document import UploadedDocument

logger = logging.getLogger(__name__)


class IngestionService:
    """Container ensure -> upload -> indexer trigger."""

    def __init__(
        self,
        blob_client: BlobDocumentClient,
        search_client: SearchServiceClient,
        indexer_name: str | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            blob_client: Document storage boundary
            search_client: Search boundary used to trigger indexing
            indexer_name: Indexer to run; the search client's default when None
        """
        self.blob_client = blob_client
        self.search_client = search_client
        self.indexer_name = indexer_name

    @staticmethod
    def validate(document: UploadedDocument | None) -> UploadedDocument:
        """
        Check ingestion preconditions.

        Raises:
            InvalidInputError: Missing document, empty bytes or blank filename
        """
        if document is None or not document.content:
            raise InvalidInputError("File is required.", field="file")
        if not document.filename or not document.filename.strip():
            raise InvalidInputError("File name is required.", field="file")
        return document

    async def ingest(self, document: UploadedDocument | None) -> str:
        """
        Persist a document and trigger indexing.

        Args:
            document: Uploaded document with bytes and filename

        Returns:
            str: URL of the stored blob

        Raises:
            InvalidInputError: Missing bytes or filename
            IngestionFailedError: Any storage or indexer step failed
        """
        self.validate(document)

        logger.info(
            f"{__name__}:ingest - START",
            extra={"document_name": document.filename, "size": document.size},
        )

        try:
            await self.blob_client.ensure_container()
        except Exception as e:
            raise self._failure("ensure_container", e) from e

        try:
            blob_url = await self.blob_client.upload(
                document.filename,
                document.content,
                content_type=document.content_type,
            )
        except Exception as e:
            raise self._failure("upload", e) from e

        try:
            await self.search_client.run_indexer(self.indexer_name)
        except Exception as e:
            raise self._failure("run_indexer", e) from e

        logger.info(f"{__name__}:ingest - END", extra={"blob_url": blob_url})
        return blob_url

    @staticmethod
    def _failure(step: str, cause: Exception) -> IngestionFailedError:
        logger.error(f"{__name__}:ingest - Step '{step}' failed: {type(cause).__name__}: {cause}")
        return IngestionFailedError(f"Ingestion failed at {step}", step=step, cause=cause)
