"""
Session domain models.

Conversation turns and the per-session state kept by the session store.

Dependencies: pydantic, langchain_core
System role: Session state contracts
"""

import time
from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, ConfigDict, Field


class Turn(BaseModel):
    """A single message of the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")

    def to_message(self) -> BaseMessage:
        """Convert to the langchain message type for this role."""
        if self.role == "user":
            return HumanMessage(content=self.content)
        return AIMessage(content=self.content)


class Session(BaseModel):
    """Server-side conversation state keyed by an opaque session id."""

    session_id: str
    current_file: str | None = Field(
        default=None,
        description="Filename of the most recent upload; scopes retrieval when set",
    )
    history: list[Turn] = Field(default_factory=list)
    last_accessed: float = Field(default_factory=time.monotonic)

    def touch(self) -> None:
        """Record an access for LRU bookkeeping."""
        self.last_accessed = time.monotonic()
