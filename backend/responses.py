"""Standardized response infrastructure for API endpoints.

Success bodies are the endpoint's own payload. Error bodies always carry an
"error" message plus a structured code:

    {"error": "...", "code": "1003", "request_id": "ab12cd34", "timestamp": "..."}
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Response codes for API responses.

    Ranges: 0xxx=Success, 1xxx=Client Error, 2xxx=Server Error, 3xxx=External Service
    """

    # Success codes
    SUCCESS = "0000"
    FILE_UPLOADED = "0001"
    ANALYSIS_COMPLETE = "0002"

    # Client errors
    VALIDATION_ERROR = "1000"
    MISSING_INPUT = "1001"
    FILE_TOO_LARGE = "1002"
    FILE_NOT_FOUND = "1003"
    EMPTY_DOCUMENT = "1004"
    INVALID_IMAGE = "1005"
    ROUTE_NOT_FOUND = "1006"

    # Server errors
    INTERNAL_ERROR = "2000"

    # External service errors
    LLM_RATE_LIMIT = "3001"
    LLM_BLOCKED = "3002"
    LLM_MALFORMED = "3003"
    LLM_UNAVAILABLE = "3004"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.SUCCESS: "Operation completed successfully",
    ResponseCode.FILE_UPLOADED: "File uploaded successfully",
    ResponseCode.ANALYSIS_COMPLETE: "Analysis completed successfully",
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.MISSING_INPUT: "Required input is missing",
    ResponseCode.FILE_TOO_LARGE: "File exceeds maximum allowed size",
    ResponseCode.FILE_NOT_FOUND: "File not found",
    ResponseCode.EMPTY_DOCUMENT: "No readable text found in document",
    ResponseCode.INVALID_IMAGE: "Image could not be processed",
    ResponseCode.ROUTE_NOT_FOUND: "Resource not found",
    ResponseCode.INTERNAL_ERROR: "An internal error occurred",
    ResponseCode.LLM_RATE_LIMIT: "Rate limit exceeded. Please wait and retry",
    ResponseCode.LLM_BLOCKED: "AI response was blocked",
    ResponseCode.LLM_MALFORMED: "AI response could not be parsed",
    ResponseCode.LLM_UNAVAILABLE: "AI service is unavailable",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.SUCCESS: 200,
    ResponseCode.FILE_UPLOADED: 200,
    ResponseCode.ANALYSIS_COMPLETE: 200,
    ResponseCode.VALIDATION_ERROR: 400,
    ResponseCode.MISSING_INPUT: 400,
    ResponseCode.FILE_TOO_LARGE: 413,
    ResponseCode.FILE_NOT_FOUND: 400,
    ResponseCode.EMPTY_DOCUMENT: 400,
    ResponseCode.INVALID_IMAGE: 400,
    ResponseCode.ROUTE_NOT_FOUND: 404,
    ResponseCode.INTERNAL_ERROR: 500,
    ResponseCode.LLM_RATE_LIMIT: 429,
    ResponseCode.LLM_BLOCKED: 500,
    ResponseCode.LLM_MALFORMED: 500,
    ResponseCode.LLM_UNAVAILABLE: 500,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def error_dict(
    code: ResponseCode,
    custom_message: str | None = None,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error response dictionary.

    error_details keys are merged into the top level (e.g. raw_text).
    """
    body: dict[str, Any] = {
        "error": custom_message or get_message(code),
        "code": code.value,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    for key, value in (error_details or {}).items():
        body.setdefault(key, value)
    return body


# --- JSONResponse helpers ---


def success_response(
    code: ResponseCode,
    data: dict[str, Any],
) -> JSONResponse:
    """Create a JSONResponse whose body is the payload itself."""
    return JSONResponse(content=data, status_code=get_http_status(code))


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
    error_details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format."""
    return JSONResponse(
        content=error_dict(code, custom_message, error_details, request_id),
        status_code=get_http_status(code),
    )
