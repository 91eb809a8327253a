"""Per-session document context.

Each session holds at most one DocumentContext: the text and filename of the
most recently analyzed non-image document. Chat reads it to ground answers.

The store is process-wide and in-memory. Callers that must see a consistent
clear -> extract -> set sequence hold the session lock around it. A session's
lock lives only while some request holds or awaits it.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

from services.types import DocumentContext

logger = logging.getLogger(__name__)


class SessionContextStore:
    """Single-slot document context per session id, with TTL expiry."""

    def __init__(self, ttl_hours: int = 24) -> None:
        self._ttl = timedelta(hours=ttl_hours)
        self._contexts: dict[str, DocumentContext] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def clear(self, session_id: str) -> None:
        """Drop the session's document context, if any."""
        self._contexts.pop(session_id, None)

    def set(self, session_id: str, text: str, filename: str) -> None:
        """Replace the session's document context.

        Raises:
            ValueError: If text is empty.
        """
        if not text or not text.strip():
            raise ValueError("Document context text cannot be empty")
        self._contexts[session_id] = DocumentContext(text=text, filename=filename)
        logger.debug("Stored context for session %s: %s", session_id, filename)

    def get(self, session_id: str) -> DocumentContext | None:
        """Return the session's document context, or None if absent/expired."""
        context = self._contexts.get(session_id)
        if context is None:
            return None
        if datetime.now(UTC) - context.stored_at > self._ttl:
            self._contexts.pop(session_id, None)
            return None
        return context

    def purge_expired(self) -> int:
        """Remove expired contexts. Returns how many were removed."""
        now = datetime.now(UTC)
        expired = [
            sid for sid, ctx in self._contexts.items() if now - ctx.stored_at > self._ttl
        ]
        for sid in expired:
            del self._contexts[sid]
        return len(expired)

    def lock_for(self, session_id: str) -> asyncio.Lock:
        """Get (or create) the lock guarding a session's context."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        """Acquire the session lock, dropping it once no request holds or awaits it."""
        lock = self.lock_for(session_id)
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_id] -= 1
            if not self._lock_users[session_id]:
                del self._lock_users[session_id]
                self._locks.pop(session_id, None)

    def for_session(self, session_id: str) -> "SessionContext":
        return SessionContext(self, session_id)

    def __len__(self) -> int:
        return len(self._contexts)


class SessionContext:
    """A SessionContextStore bound to one session id (per-request object)."""

    def __init__(self, store: SessionContextStore, session_id: str) -> None:
        self.store = store
        self.session_id = session_id

    def clear(self) -> None:
        self.store.clear(self.session_id)

    def set(self, text: str, filename: str) -> None:
        self.store.set(self.session_id, text, filename)

    def get(self) -> DocumentContext | None:
        return self.store.get(self.session_id)

    @asynccontextmanager
    async def lock(self) -> AsyncIterator["SessionContext"]:
        """Hold the session lock for a read or a clear/set sequence."""
        async with self.store.hold(self.session_id):
            yield self
