"""Session handlers."""

from apps.sessions.handlers.clear_document import clear_document
from apps.sessions.handlers.get_session import get_session

__all__ = [
    "clear_document",
    "get_session",
]
