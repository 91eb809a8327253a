"""Services module for the document analysis pipeline.

Contains the domain services used by the API handlers:
- Text extraction (PDF, DOCX, XLSX, OCR for images)
- Structured analysis via the LLM
- Session document context
- Document-grounded chat

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.types import (
    IMAGE_EXTENSIONS,
    Completion,
    DocumentContext,
    FailureKind,
    ImageInput,
    UploadedDocument,
    failure,
    is_failure,
)
from services.analysis_schema import ImageAnalysis, TextAnalysis, normalize_analysis
from services.analyzer import StructuredAnalyzer, parse_completion
from services.chat import ChatGenerationError, ChatResponder, MissingInputError
from services.extractor import TextExtractor
from services.json_recovery import recover_json
from services.ocr import OcrEngine
from services.session_store import SessionContext, SessionContextStore

__all__ = [
    # Core services
    "ChatResponder",
    "OcrEngine",
    "SessionContext",
    "SessionContextStore",
    "StructuredAnalyzer",
    "TextExtractor",
    # Errors
    "ChatGenerationError",
    "MissingInputError",
    # Helpers
    "failure",
    "is_failure",
    "normalize_analysis",
    "parse_completion",
    "recover_json",
    # Types
    "Completion",
    "DocumentContext",
    "FailureKind",
    "ImageAnalysis",
    "TextAnalysis",
    "ImageInput",
    "UploadedDocument",
    "IMAGE_EXTENSIONS",
]
