"""DELETE /api/session/document - Forget the session's document context."""

import logging

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.sessions.helpers import get_or_create_session, set_session_cookie
from dependencies import get_request_id, get_session_store
from responses import ResponseCode, success_response
from services import SessionContextStore

logger = logging.getLogger(__name__)


async def clear_document(
    session_id: str = Depends(get_or_create_session),
    store: SessionContextStore = Depends(get_session_store),
    request_id: str = Depends(get_request_id),
) -> JSONResponse:
    """Clear the stored document so chat falls back to general answers."""
    context = store.for_session(session_id)
    async with context.lock():
        context.clear()

    logger.info("[%s] Cleared document context", request_id)
    resp = success_response(ResponseCode.SUCCESS, {"message": "Document context cleared"})
    return set_session_cookie(resp, session_id)
