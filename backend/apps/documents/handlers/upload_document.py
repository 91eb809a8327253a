"""POST /upload - Save an uploaded document for later analysis."""

import logging
import uuid

from fastapi import Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.documents.helpers import upload_root
from apps.sessions.helpers import get_or_create_session, set_session_cookie
from config import get_settings
from dependencies import get_request_id, get_session_store
from responses import ResponseCode, error_response, get_message, success_response
from services import SessionContextStore
from utils import format_file_size, sanitize_filename

logger = logging.getLogger(__name__)


# --- Response Schema ---


class UploadResponse(BaseModel):
    """Response for a successful upload."""

    message: str = Field(..., description="Human-readable status")
    file_path: str = Field(..., description="Server path to pass to /analyze")
    filename: str = Field(..., description="Sanitized original filename")


# --- Handler ---


async def upload_document(
    file: UploadFile | None = File(None),
    session_id: str = Depends(get_or_create_session),
    store: SessionContextStore = Depends(get_session_store),
    request_id: str = Depends(get_request_id),
) -> JSONResponse:
    """Upload a document (PDF, DOCX, XLSX or image).

    Flow:
    1. Clear the session's document context
    2. Validate the file part (present, named, within size limit)
    3. Save under a unique name in the upload directory
    """
    settings = get_settings()
    context = store.for_session(session_id)

    async with context.lock():
        context.clear()
    store.purge_expired()

    if file is None or not file.filename:
        return error_response(ResponseCode.MISSING_INPUT, "No file provided", request_id)

    content = await file.read()
    logger.info(
        "[%s] Upload: %s (%s)", request_id, file.filename, format_file_size(len(content))
    )

    if len(content) > settings.max_file_size_bytes:
        return error_response(
            ResponseCode.FILE_TOO_LARGE,
            f"File size {format_file_size(len(content))} exceeds limit of "
            f"{settings.max_file_size_mb}MB",
            request_id,
        )

    filename = sanitize_filename(file.filename)
    saved_path = upload_root() / f"{uuid.uuid4().hex}_{filename}"

    try:
        saved_path.write_bytes(content)
    except OSError as e:
        logger.exception("[%s] Failed to save upload", request_id)
        return error_response(ResponseCode.INTERNAL_ERROR, f"Failed to save file: {e}", request_id)

    body = UploadResponse(
        message=get_message(ResponseCode.FILE_UPLOADED),
        file_path=str(saved_path),
        filename=filename,
    )
    resp = success_response(ResponseCode.FILE_UPLOADED, body.model_dump())
    return set_session_cookie(resp, session_id)
