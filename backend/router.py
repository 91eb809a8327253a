"""API routers that register all sub-routers.

- `router` aggregates the /api routes (health, chat, session) and is mounted
  with the /api prefix in main.py.
- `documents_router` holds /upload, /analyze and /extract, mounted at the root.
"""

from fastapi import APIRouter

from apps.chat import router as chat_router
from apps.documents import router as documents_router
from apps.health import router as health_router
from apps.sessions import router as sessions_router

# Create main API router
router = APIRouter()

# Register all domain routers
router.include_router(health_router)
router.include_router(chat_router)
router.include_router(sessions_router)

__all__ = ["router", "documents_router"]
