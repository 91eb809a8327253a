"""POST /api/chat - Answer a message, grounded in the session document if any."""

import logging

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import get_or_create_session, set_session_cookie
from dependencies import get_chat_responder, get_request_id, get_session_store
from llm import LLMError, LLMRateLimitError
from responses import ResponseCode, error_response, success_response
from services import (
    ChatGenerationError,
    ChatResponder,
    MissingInputError,
    SessionContextStore,
)

logger = logging.getLogger(__name__)


# --- Request/Response Schemas (API-specific) ---


class ChatRequest(BaseModel):
    """Request body for chat endpoint."""

    message: str | None = Field(
        None,
        max_length=4000,
        description="User's message or question",
    )


class ChatResponse(BaseModel):
    """Successful chat reply."""

    response: str


# --- Error mapping ---

CHAT_ERROR_MAP = {
    MissingInputError: ResponseCode.MISSING_INPUT,
    ChatGenerationError: ResponseCode.LLM_BLOCKED,
    LLMRateLimitError: ResponseCode.LLM_RATE_LIMIT,
}


# --- Handler ---


async def send_message(
    request: ChatRequest,
    session_id: str = Depends(get_or_create_session),
    store: SessionContextStore = Depends(get_session_store),
    responder: ChatResponder = Depends(get_chat_responder),
    request_id: str = Depends(get_request_id),
) -> JSONResponse:
    """Send a message and get a single, non-streamed response."""
    if not request.message or not request.message.strip():
        return error_response(ResponseCode.MISSING_INPUT, "Message is required", request_id)

    context = store.for_session(session_id)
    async with context.lock():
        document = context.get()

    logger.info(
        "[%s] Chat request (%s): %s",
        request_id,
        f"grounded in {document.filename}" if document else "general",
        request.message[:100],
    )

    try:
        answer = await responder.respond(request.message, document)

    except tuple(CHAT_ERROR_MAP.keys()) as e:
        code = CHAT_ERROR_MAP[type(e)]
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)

    except LLMError as e:
        logger.exception("[%s] AI request failed during chat", request_id)
        return error_response(ResponseCode.LLM_UNAVAILABLE, str(e), request_id)

    resp = success_response(ResponseCode.SUCCESS, ChatResponse(response=answer).model_dump())
    return set_session_cookie(resp, session_id)
