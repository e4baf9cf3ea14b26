"""
Conversation configuration.

Prompt budget, upload defaults and session store bounds.

Dependencies: pydantic_settings
System role: Conversation orchestration configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatSettings(BaseSettings):
    """Settings for conversation handling."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_context_chars: int = Field(
        default=12000,
        description="Retrieved context is cut to this many characters before prompting",
    )
    default_upload_question: str = Field(
        default="Please summarize the uploaded PDF.",
        description="Question asked when an upload carries no message",
    )
    max_sessions: int | None = Field(
        default=None,
        description="Evict least recently used sessions beyond this count (unbounded when unset)",
    )
