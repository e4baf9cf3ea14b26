"""
Azure Blob Storage client for uploaded documents.

Creates the documents container on demand and uploads document bytes
under their original filename. Blob names are not content-addressed: a
second upload with the same filename overwrites the first.

Dependencies: azure-storage-blob (aio), tenacity
System role: Document storage boundary
"""

import logging

from azure.core.exceptions import ResourceExistsError, ServiceRequestError, ServiceResponseError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragchat.configs.blob_storage import BlobStorageSettings

logger = logging.getLogger(__name__)


class BlobDocumentClient:
    """Async client for the documents container."""

    def __init__(
        self,
        settings: BlobStorageSettings,
        service_client: BlobServiceClient | None = None,
        retry_initial_wait: float = 0.5,
        retry_max_wait: float = 5.0,
    ) -> None:
        """
        Initialize blob client.

        Args:
            settings: Blob storage settings
            service_client: Optional preconfigured service client
            retry_initial_wait: First backoff delay in seconds for container ensure
            retry_max_wait: Backoff ceiling in seconds
        """
        self._settings = settings
        self._service = service_client
        self._container: ContainerClient | None = None
        self._retry_initial_wait = retry_initial_wait
        self._retry_max_wait = retry_max_wait

    @property
    def container_name(self) -> str:
        return self._settings.container

    @property
    def container(self) -> ContainerClient:
        """
        Container client, built on first use.

        Raises:
            ValueError: Connection string is blank or malformed
        """
        if self._container is None:
            if self._service is None:
                # SDK-level retries are disabled; container ensure is retried explicitly below
                self._service = BlobServiceClient.from_connection_string(
                    self._settings.connection_string,
                    connection_timeout=self._settings.timeout,
                    read_timeout=self._settings.timeout,
                    retry_total=0,
                )
            self._container = self._service.get_container_client(self._settings.container)
        return self._container

    async def close(self) -> None:
        """Close the underlying transport, if one was opened."""
        if self._service is not None:
            await self._service.close()

    async def ensure_container(self) -> bool:
        """
        Create the documents container if it does not exist.

        Returns:
            bool: True if the container was created, False if it already existed

        Raises:
            ValueError: Connection string is blank or malformed
            AzureError: If the service keeps failing after retries
        """
        container = self.container

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((ServiceRequestError, ServiceResponseError)),
            stop=stop_after_attempt(max(1, self._settings.retry_attempts)),
            wait=wait_exponential_jitter(
                initial=self._retry_initial_wait,
                max=self._retry_max_wait,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:ensure_container - Retry {retry_state.attempt_number}/"
                f"{self._settings.retry_attempts} after transient failure"
            ),
            reraise=True,
        ):
            with attempt:
                try:
                    await container.create_container()
                except ResourceExistsError:
                    logger.info(
                        f"{__name__}:ensure_container - Blob container exists",
                        extra={"container": self.container_name},
                    )
                    return False

        logger.info(
            f"{__name__}:ensure_container - Blob container created (private access)",
            extra={"container": self.container_name},
        )
        return True

    async def upload(self, blob_name: str, data: bytes, content_type: str | None = None) -> str:
        """
        Upload document bytes, replacing any blob with the same name.

        Args:
            blob_name: Blob name (the document's original filename)
            data: Document bytes
            content_type: MIME type; falls back to the configured default

        Returns:
            str: Blob URL (private; not publicly readable)

        Raises:
            AzureError: If the upload fails
        """
        blob = self.container.get_blob_client(blob_name)
        await blob.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(
                content_type=content_type or self._settings.default_content_type,
            ),
        )
        logger.info(
            f"{__name__}:upload - Uploaded blob",
            extra={"blob_url": blob.url, "size": len(data)},
        )
        return blob.url

