"""GET /api/session - Describe the session's document context."""

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import get_or_create_session, set_session_cookie
from dependencies import get_session_store
from responses import ResponseCode, success_response
from services import SessionContextStore

# --- Response Schemas ---


class SessionDocument(BaseModel):
    """Document currently grounding the session's chat."""

    filename: str
    characters: int = Field(..., description="Length of the stored text")
    stored_at: str = Field(..., description="ISO timestamp when it was stored")


class SessionResponse(BaseModel):
    """Response for the session endpoint."""

    session_id: str
    document: SessionDocument | None = None


# --- Handler ---


async def get_session(
    session_id: str = Depends(get_or_create_session),
    store: SessionContextStore = Depends(get_session_store),
) -> JSONResponse:
    """Return the session id and the stored document, if any."""
    context = store.for_session(session_id)
    async with context.lock():
        document = context.get()

    body = SessionResponse(
        session_id=session_id,
        document=SessionDocument(
            filename=document.filename,
            characters=len(document.text),
            stored_at=document.stored_at.isoformat(),
        )
        if document
        else None,
    )
    resp = success_response(ResponseCode.SUCCESS, body.model_dump())
    return set_session_cookie(resp, session_id)
