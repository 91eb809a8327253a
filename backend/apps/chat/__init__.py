"""Chat module - document-grounded question answering."""

from apps.chat.routes import router

__all__ = ["router"]
