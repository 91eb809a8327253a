"""Session cookie handling.

A session is just an opaque id in the `session_id` cookie. It keys the
document context store and the rate limiter; nothing else is stored client-side.
"""

import uuid

from fastapi import Cookie
from fastapi.responses import JSONResponse

from config import get_settings

SESSION_COOKIE = "session_id"


def new_session_id() -> str:
    return uuid.uuid4().hex


def get_or_create_session(session_id: str | None = Cookie(default=None)) -> str:
    """Session id from the cookie, or a fresh one if the cookie is absent."""
    return session_id or new_session_id()


def set_session_cookie(response: JSONResponse, session_id: str) -> JSONResponse:
    """Attach (or refresh) the session cookie; its lifetime matches the context TTL."""
    settings = get_settings()
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    return response
