"""
Azure Blob Storage configuration.

Settings for the container that receives uploaded documents.

Dependencies: pydantic_settings
System role: Document storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStorageSettings(BaseSettings):
    """Settings for blob container operations."""

    model_config = SettingsConfigDict(
        env_prefix="AZURE_BLOB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    connection_string: str = Field(
        default="",
        description="Storage account connection string",
    )
    container: str = Field(
        default="container-rag",
        description="Container that holds uploaded documents",
    )
    default_content_type: str = Field(
        default="application/pdf",
        description="Content type used when the upload does not declare one",
    )
    timeout: int = Field(
        default=60,
        description="Connection/read timeout in seconds for storage calls",
    )
    retry_attempts: int = Field(
        default=3,
        description="Attempts for idempotent storage calls (container ensure)",
    )
