"""Per-client request throttling for the upload and LLM-backed endpoints.

Each client (session cookie, else forwarded/remote IP) gets three sliding
windows: a 10 second burst window, a per-minute and a per-hour budget.
State is in-memory and per-process.
"""

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from apps.sessions.helpers import SESSION_COOKIE
from config import Settings
from responses import ResponseCode, error_dict

logger = logging.getLogger(__name__)

LONGEST_WINDOW_SECONDS = 3600


@dataclass
class RateLimitConfig:
    """Request budgets per client."""

    requests_per_minute: int = 20
    requests_per_hour: int = 200
    burst_limit: int = 5  # Max requests in 10 seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimitConfig":
        return cls(
            requests_per_minute=settings.rate_limit_per_minute,
            requests_per_hour=settings.rate_limit_per_hour,
            burst_limit=settings.rate_limit_burst,
        )


class Window(NamedTuple):
    seconds: int
    limit: int
    message: str


class RateDecision(NamedTuple):
    allowed: bool
    message: str | None
    headers: dict[str, str]


class RateLimiter:
    """Sliding-window counter keyed by client id."""

    def __init__(self, config: RateLimitConfig | None = None) -> None:
        self.config = config or RateLimitConfig()
        self.windows = (
            Window(10, self.config.burst_limit, "Too many requests. Please slow down."),
            Window(60, self.config.requests_per_minute, "Rate limit exceeded. Please wait a moment."),
            Window(LONGEST_WINDOW_SECONDS, self.config.requests_per_hour, "Hourly rate limit exceeded."),
        )
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    def get_client_id(self, request: Request) -> str:
        """Session cookie if present, else the first forwarded or remote IP."""
        session_id = request.cookies.get(SESSION_COOKIE)
        if session_id:
            return f"session:{session_id}"

        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"

        if request.client:
            return f"ip:{request.client.host}"
        return "unknown"

    def check_rate_limit(self, request: Request) -> RateDecision:
        """Record the request if every window has room, else reject it."""
        hits = self._hits[self.get_client_id(request)]
        now = time.monotonic()

        while hits and hits[0] <= now - LONGEST_WINDOW_SECONDS:
            hits.popleft()

        for window in self.windows:
            used = sum(1 for ts in hits if ts > now - window.seconds)
            if used >= window.limit:
                return RateDecision(
                    False,
                    window.message,
                    {
                        "X-RateLimit-Limit": str(window.limit),
                        "X-RateLimit-Remaining": "0",
                        "Retry-After": str(window.seconds),
                    },
                )

        minute_used = sum(1 for ts in hits if ts > now - 60)
        hits.append(now)
        return RateDecision(
            True,
            None,
            {
                "X-RateLimit-Limit": str(self.config.requests_per_minute),
                "X-RateLimit-Remaining": str(self.config.requests_per_minute - minute_used - 1),
            },
        )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply RateLimiter to RATE_LIMITED_PATHS only."""

    RATE_LIMITED_PATHS = frozenset({"/upload", "/analyze", "/api/chat"})

    def __init__(self, app, config: RateLimitConfig | None = None) -> None:
        super().__init__(app)
        self.limiter = RateLimiter(config)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path not in self.RATE_LIMITED_PATHS:
            return await call_next(request)

        decision = self.limiter.check_rate_limit(request)

        if decision.allowed:
            response = await call_next(request)
        else:
            logger.warning(
                "Rate limit exceeded for %s on %s",
                self.limiter.get_client_id(request),
                request.url.path,
            )
            response = JSONResponse(
                status_code=429,
                content=error_dict(
                    ResponseCode.LLM_RATE_LIMIT,
                    decision.message,
                    request_id=getattr(request.state, "request_id", None),
                ),
            )

        response.headers.update(decision.headers)
        return response
