"""HTTP middleware: per-client rate limiting for upload and LLM endpoints."""

from middleware.rate_limit import RateLimitConfig, RateLimiter, RateLimitMiddleware

__all__ = ["RateLimitConfig", "RateLimiter", "RateLimitMiddleware"]
