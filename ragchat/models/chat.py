"""
Chat domain models and schemas.

Request/response schemas for chat operations. Field names on the wire use
camelCase (``sessionId``) for compatibility with existing clients.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(
        default=None,
        alias="sessionId",
        description="Session to continue; a new one is issued when absent",
    )
    message: str | None = Field(default=None, description="User question or message")

    @field_validator("session_id", mode="before")
    @classmethod
    def _ignore_non_string_session_id(cls, value: Any) -> str | None:
        # Non-string ids are treated as absent and a fresh id is issued
        return value if isinstance(value, str) else None

    @field_validator("message", mode="before")
    @classmethod
    def _ignore_non_string_message(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    reply: str
    session_id: str = Field(alias="sessionId")


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str
    detail: str | None = None
