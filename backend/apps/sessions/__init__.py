"""Sessions module - cookie sessions and document context."""

from apps.sessions.routes import router

__all__ = ["router"]
