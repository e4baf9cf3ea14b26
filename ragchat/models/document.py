"""
Uploaded document model.

Dependencies: dataclasses
System role: Ingestion input contract
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedDocument:
    """Document bytes received from a client upload."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)
