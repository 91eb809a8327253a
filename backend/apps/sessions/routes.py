"""Session routes - registers all session endpoints."""

from fastapi import APIRouter

from apps.sessions.handlers import clear_document, get_session

router = APIRouter(prefix="/session", tags=["Session"])

# GET /session - Current session and its document context
router.get("")(get_session)

# DELETE /session/document - Clear document context
router.delete("/document")(clear_document)
