"""
Conversation orchestrator.

Runs one chat request end to end:

    (upload only) ingest document -> scope session to it
    retrieve context -> build prompt -> complete -> append exchange

Two entry points share the same tail. Each request runs under its
session's lock, so two requests on one session id never interleave their
history reads and appends. History is appended only after the completion
succeeds; a failed request leaves it untouched.

Uploading a new document keeps the existing history and only changes the
file that scopes retrieval.

Dependencies: ragchat.core, ragchat.application, ragchat.boundary.llm
System role: Chat request orchestration layer
"""

import logging
from dataclasses import dataclass

from ragchat.application.ingestion_service import IngestionService
from ragchat.application.retrieval_service import RetrievalService
from ragchat.boundary.llm.completion_client import CompletionClient
from ragchat.core.exceptions import InvalidInputError
from ragchat.core.prompt_builder import MAX_CONTEXT_CHARS, build_messages
from ragchat.core.session_store import SessionStore
from ragchat.models.document import UploadedDocument
from ragchat.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_QUESTION = "Please summarize the uploaded PDF."


@dataclass(frozen=True)
class ChatTurnResult:
    """Reply for one request and the session it was recorded under."""

    reply: str
    session_id: str


class ConversationOrchestrator:
    """
    Request-level control flow for document chat.

    Coordinates the session store, ingestion, retrieval, prompt assembly
    and completion for multi-turn conversations.
    """

    def __init__(
        self,
        session_store: SessionStore,
        retrieval_service: RetrievalService,
        completion_client: CompletionClient,
        ingestion_service: IngestionService,
        max_context_chars: int = MAX_CONTEXT_CHARS,
        default_upload_question: str = DEFAULT_UPLOAD_QUESTION,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            session_store: Conversation state
            retrieval_service: Context retrieval
            completion_client: Reply generation
            ingestion_service: Upload pipeline
            max_context_chars: Prompt budget for retrieved context
            default_upload_question: Question used when an upload has no message
        """
        self.session_store = session_store
        self.retrieval_service = retrieval_service
        self.completion_client = completion_client
        self.ingestion_service = ingestion_service
        self.max_context_chars = max_context_chars
        self.default_upload_question = default_upload_question

    async def continue_conversation(
        self,
        session_id: str | None,
        message: str | None,
    ) -> ChatTurnResult:
        """
        Answer a message-only request.

        Retrieval is scoped to the session's current file when it has one.

        Args:
            session_id: Client-supplied session id, if any
            message: User question

        Returns:
            ChatTurnResult: Reply and effective session id

        Raises:
            InvalidInputError: Message missing or blank (no session is created)
            UpstreamLLMError: Completion failed (history unchanged)
        """
        if not message or not message.strip():
            raise InvalidInputError("message is required", field="message")

        session_id, _ = self.session_store.get_or_create(session_id)
        async with self.session_store.lock(session_id):
            scope_file = self.session_store.get_scope_file(session_id)
            reply = await self._answer(session_id, message, scope_file)

        return ChatTurnResult(reply=reply, session_id=session_id)

    async def start_document_conversation(
        self,
        session_id: str | None,
        document: UploadedDocument | None,
        message: str | None = None,
    ) -> ChatTurnResult:
        """
        Ingest a document and answer a question about it.

        Args:
            session_id: Client-supplied session id, if any
            document: Uploaded file
            message: Optional question; the default upload question when blank

        Returns:
            ChatTurnResult: Reply and effective session id

        Raises:
            InvalidInputError: File missing or empty (no collaborator is called)
            IngestionFailedError: Storage or indexer step failed (history unchanged)
            UpstreamLLMError: Completion failed (history unchanged)
        """
        IngestionService.validate(document)

        question = message.strip() if message and message.strip() else self.default_upload_question

        session_id, _ = self.session_store.get_or_create(session_id)
        async with self.session_store.lock(session_id):
            await self.ingestion_service.ingest(document)
            self.session_store.set_scope_file(session_id, document.filename)
            logger.info(
                f"{__name__}:start_document_conversation - Session scoped to upload",
                extra={"session_id": session_id, "document_name": document.filename},
            )
            reply = await self._answer(session_id, question, document.filename)

        return ChatTurnResult(reply=reply, session_id=session_id)

    async def _answer(self, session_id: str, question: str, scope_file: str | None) -> str:
        """Retrieve -> prompt -> complete -> append. Caller holds the session lock."""
        result = await self.retrieval_service.search(question, scope_filename=scope_file)
        if result.failed:
            logger.warning(
                f"{__name__}:_answer - Retrieval failed, answering from history only",
                extra={"session_id": session_id, "errors": [str(e) for e in result.errors]},
            )
        context = "" if result.failed else result.context

        _, session = self.session_store.get_or_create(session_id)
        messages = build_messages(
            session.history,
            context,
            question,
            max_context_chars=self.max_context_chars,
        )
        logger.info(
            f"{__name__}:_answer - Prompt assembled",
            extra={
                "session_id": session_id,
                "history_turns": len(session.history),
                "context_chars": len(context),
                "question": safe_log_value(question, max_length=200),
            },
        )

        reply = await self.completion_client.complete(messages)

        self.session_store.append_exchange(session_id, question, reply)
        return reply
