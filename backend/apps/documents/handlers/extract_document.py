"""POST /extract - Preview the text extracted from an uploaded document."""

import asyncio
import logging

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.documents.helpers import DocumentRequest, resolve_uploaded_document
from dependencies import get_request_id, get_text_extractor
from responses import ResponseCode, error_response, success_response
from services import TextExtractor

logger = logging.getLogger(__name__)


class ExtractResponse(BaseModel):
    """Extracted text for an uploaded document."""

    filename: str
    text: str = Field(..., description="Extracted text (may be empty)")
    characters: int


async def extract_document(
    request: DocumentRequest,
    extractor: TextExtractor = Depends(get_text_extractor),
    request_id: str = Depends(get_request_id),
) -> JSONResponse:
    """Run text extraction (including OCR for images) without analysis.

    Does not read or modify the session document context.
    """
    document = resolve_uploaded_document(request)
    if document is None:
        return error_response(
            ResponseCode.FILE_NOT_FOUND, "File not found or invalid file path", request_id
        )

    text = await asyncio.to_thread(
        extractor.extract, document.file_path, document.file_extension
    )
    logger.info(
        "[%s] Extracted %d characters from %s",
        request_id,
        len(text),
        document.original_filename,
    )

    body = ExtractResponse(
        filename=document.original_filename, text=text, characters=len(text)
    )
    return success_response(ResponseCode.SUCCESS, body.model_dump())
