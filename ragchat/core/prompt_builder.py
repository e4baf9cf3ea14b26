"""
Prompt assembly for document Q&A.

Builds the ordered message list sent to the chat model: instructions
first, then the full conversation history in chronological order, then
the new question with the retrieved document context. The ordering is what
gives the model its conversational memory.

Dependencies: langchain_core.prompts, ragchat.models.session
System role: Prompt template for document chat
"""

from collections.abc import Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from ragchat.models.session import Turn

MAX_CONTEXT_CHARS = 12000

SYSTEM_PROMPT = """You are a professional assistant. Answer clearly and concisely.

- Use the PDF content if relevant.
- Output structured markdown.
- When listing advantages, features, or items:
  - Start with a bold title (e.g., "**Advantages of Docker:**") on its own line.
  - REQUIRED: Put every single bullet point on a BRAND NEW LINE.
  - Use this exact format for bullets: "- **Keyword:** Description".
  - Do not bunch list items into a paragraph."""

CONTEXT_BLOCK = "PDF content:\n```\n{context}\n```\n\n"

DOCUMENT_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{context_block}Question: {question}"),
])


def truncate_context(context: str | None, max_chars: int = MAX_CONTEXT_CHARS) -> str:
    """Cut retrieved context to the prompt budget."""
    return (context or "")[:max_chars]


def build_messages(
    history: Sequence[Turn],
    context: str | None,
    question: str,
    max_context_chars: int = MAX_CONTEXT_CHARS,
) -> list[BaseMessage]:
    """
    Assemble the message list for one conversation turn.

    Pure function: the same inputs always produce the same messages.

    Args:
        history: Prior turns of the session, oldest first
        context: Retrieved passages (may be empty)
        question: The user's new question, embedded verbatim
        max_context_chars: Context budget in characters

    Returns:
        list[BaseMessage]: System message, history, then the new user message
    """
    trimmed = truncate_context(context, max_context_chars)
    context_block = CONTEXT_BLOCK.format(context=trimmed) if trimmed else ""

    return DOCUMENT_CHAT_PROMPT.format_messages(
        history=[turn.to_message() for turn in history],
        context_block=context_block,
        question=question,
    )
