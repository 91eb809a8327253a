"""Document handlers."""

from apps.documents.handlers.analyze_document import analyze_document
from apps.documents.handlers.extract_document import extract_document
from apps.documents.handlers.upload_document import upload_document

__all__ = [
    "analyze_document",
    "extract_document",
    "upload_document",
]
