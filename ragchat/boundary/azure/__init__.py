"""Azure storage and search adapters."""

from ragchat.boundary.azure.blob_client import BlobDocumentClient
from ragchat.boundary.azure.search_client import SearchServiceClient

__all__ = ["BlobDocumentClient", "SearchServiceClient"]
