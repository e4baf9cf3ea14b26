"""Chat API endpoints.

Routes:
- POST /chat - Continue a conversation with a text message
- POST /chat/upload - Upload a document and ask about it (multipart form)

Dependencies: ragchat.application.conversation_orchestrator
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from ragchat.api.deps import get_conversation_orchestrator
from ragchat.application.conversation_orchestrator import ConversationOrchestrator
from ragchat.core.exceptions import RagChatException
from ragchat.models.chat import ChatRequest, ChatResponse, ErrorResponse
from ragchat.models.document import UploadedDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _error_response(exc: Exception, fallback_message: str) -> JSONResponse:
    """Map an exception to the JSON error body and status code."""
    if isinstance(exc, RagChatException):
        body = ErrorResponse(error=exc.message, detail=exc.detail)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))

    logger.exception(f"{__name__}:_error_response - Unhandled error: {type(exc).__name__}")
    body = ErrorResponse(error=fallback_message, detail=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest,
    orchestrator: ConversationOrchestrator = Depends(get_conversation_orchestrator),
):
    """Send a message to a session with conversational memory.

    Flow:
    1. Resolve or create the session (unknown ids are kept as given)
    2. Retrieve context scoped to the session's current document
    3. Generate a reply and append the exchange to history

    Args:
        request: ChatRequest with message and optional sessionId
        orchestrator: Injected ConversationOrchestrator

    Returns:
        ChatResponse: Reply and effective sessionId

    Errors:
        400: message missing or blank
        500: completion failed
    """
    try:
        result = await orchestrator.continue_conversation(
            session_id=request.session_id,
            message=request.message,
        )
    except Exception as e:
        return _error_response(e, "Chat failed.")

    return ChatResponse(reply=result.reply, session_id=result.session_id)


@router.post(
    "/upload",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_upload(
    file: UploadFile | None = File(default=None),
    session_id: str | None = Form(default=None, alias="sessionId"),
    message: str | None = Form(default=None),
    orchestrator: ConversationOrchestrator = Depends(get_conversation_orchestrator),
):
    """Upload a document, index it and answer a question about it.

    The session's retrieval scope moves to the uploaded file; earlier
    history is kept. Without a message the default summary question is
    asked.

    Args:
        file: Uploaded document (multipart form)
        session_id: Optional session to continue
        message: Optional question
        orchestrator: Injected ConversationOrchestrator

    Returns:
        ChatResponse: Reply and effective sessionId

    Errors:
        400: file missing or empty
        500: storage, indexer or completion failure
    """
    document = None
    if file is not None:
        document = UploadedDocument(
            filename=file.filename or "",
            content=await file.read(),
            content_type=file.content_type,
        )
        logger.info(
            f"{__name__}:chat_upload - Document upload request received",
            extra={"document_name": document.filename, "size": document.size},
        )

    try:
        result = await orchestrator.start_document_conversation(
            session_id=session_id,
            document=document,
            message=message,
        )
    except Exception as e:
        return _error_response(e, "Upload chat failed.")

    return ChatResponse(reply=result.reply, session_id=result.session_id)
