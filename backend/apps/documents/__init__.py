"""Documents module - upload, extraction and analysis."""

from apps.documents.routes import router

__all__ = ["router"]
