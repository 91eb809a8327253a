"""POST /analyze - Extract and analyze an uploaded document."""

import asyncio
import logging
from pathlib import Path

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.documents.helpers import DocumentRequest, resolve_uploaded_document
from apps.sessions.helpers import get_or_create_session, set_session_cookie
from dependencies import (
    get_request_id,
    get_session_store,
    get_structured_analyzer,
    get_text_extractor,
)
from responses import ResponseCode, error_response, success_response
from services import (
    FailureKind,
    SessionContextStore,
    StructuredAnalyzer,
    TextExtractor,
    is_failure,
)

logger = logging.getLogger(__name__)


# --- Error mapping ---

FAILURE_CODE_MAP = {
    FailureKind.INVALID_INPUT: ResponseCode.INVALID_IMAGE,
    FailureKind.AI_BLOCKED: ResponseCode.LLM_BLOCKED,
    FailureKind.AI_MALFORMED: ResponseCode.LLM_MALFORMED,
    FailureKind.AI_UNAVAILABLE: ResponseCode.LLM_UNAVAILABLE,
    FailureKind.AI_RATE_LIMITED: ResponseCode.LLM_RATE_LIMIT,
}


# --- Handler ---


async def analyze_document(
    request: DocumentRequest,
    session_id: str = Depends(get_or_create_session),
    store: SessionContextStore = Depends(get_session_store),
    extractor: TextExtractor = Depends(get_text_extractor),
    analyzer: StructuredAnalyzer = Depends(get_structured_analyzer),
    request_id: str = Depends(get_request_id),
) -> JSONResponse:
    """Analyze a previously uploaded document.

    Flow:
    1. Clear the session's document context
    2. Images: send to image analysis (context stays empty)
    3. Others: extract text, store it as the session context, analyze it
    """
    context = store.for_session(session_id)

    async with context.lock():
        context.clear()

        document = resolve_uploaded_document(request)
        if document is None:
            logger.warning("[%s] Analyze: file not found: %s", request_id, request.file_path)
            return error_response(
                ResponseCode.FILE_NOT_FOUND, "File not found or invalid file path", request_id
            )

        logger.info(
            "[%s] Analyze: %s (%s)",
            request_id,
            document.original_filename,
            document.file_extension,
        )

        if not document.is_image:
            text = await asyncio.to_thread(
                extractor.extract, document.file_path, document.file_extension
            )
            if not text.strip():
                logger.warning(
                    "[%s] No readable text in %s", request_id, document.original_filename
                )
                return error_response(
                    ResponseCode.EMPTY_DOCUMENT,
                    "No readable text found in document",
                    request_id,
                )
            context.set(text, document.original_filename)

    if document.is_image:
        image_bytes = await asyncio.to_thread(Path(document.file_path).read_bytes)
        result = await analyzer.analyze_image(image_bytes)
    else:
        result = await analyzer.analyze_text(text)

    if is_failure(result):
        details = dict(result)
        message = details.pop("error")
        code = FAILURE_CODE_MAP.get(FailureKind(details["kind"]), ResponseCode.INTERNAL_ERROR)
        log_fn = logger.warning if code.value.startswith("1") else logger.error
        log_fn("[%s] Analysis failed (%s): %s", request_id, details["kind"], message)
        resp = error_response(code, message, request_id, error_details=details)
        return set_session_cookie(resp, session_id)

    logger.info("[%s] Analysis complete: %s", request_id, document.original_filename)
    resp = success_response(ResponseCode.ANALYSIS_COMPLETE, result)
    return set_session_cookie(resp, session_id)
