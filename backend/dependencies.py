"""FastAPI dependency injection for services.

External-capability clients (LLM, OCR) and the session store are created
once per process with @lru_cache() and are read-only afterwards. Override
them in tests via app.dependency_overrides.
"""

import uuid
from functools import lru_cache

from fastapi import Depends, Request

from config import get_settings
from llm import BaseLLMService, LLMService
from services import (
    ChatResponder,
    OcrEngine,
    SessionContextStore,
    StructuredAnalyzer,
    TextExtractor,
)

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (expensive - has API client)."""
    return LLMService(get_settings())


@lru_cache
def get_ocr_engine() -> OcrEngine:
    """Get cached OCR engine (tesseract path is configured once)."""
    return OcrEngine(tesseract_cmd=get_settings().tesseract_cmd)


@lru_cache
def get_session_store() -> SessionContextStore:
    """Get the process-wide session document context store."""
    return SessionContextStore(ttl_hours=get_settings().session_ttl_hours)


# --- Composed Services ---
# Use Depends() for proper FastAPI DI chaining


def get_text_extractor(
    ocr: OcrEngine = Depends(get_ocr_engine),
) -> TextExtractor:
    """Get text extractor (stateless, cheap to create)."""
    return TextExtractor(ocr=ocr, pdf_min_text_chars=get_settings().pdf_min_text_chars)


def get_structured_analyzer(
    llm: BaseLLMService = Depends(get_llm_service),
) -> StructuredAnalyzer:
    """Get structured analyzer with injected LLM client."""
    return StructuredAnalyzer(llm=llm, max_chars=get_settings().analysis_max_chars)


def get_chat_responder(
    llm: BaseLLMService = Depends(get_llm_service),
) -> ChatResponder:
    """Get chat responder with injected LLM client."""
    return ChatResponder(llm=llm, context_max_chars=get_settings().chat_context_max_chars)


def get_request_id(request: Request) -> str:
    """Request ID assigned by the request-id middleware."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or str(uuid.uuid4())[:8]
