"""Tests for the rate limiting middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from middleware import RateLimitConfig, RateLimitMiddleware


def build_app(burst_limit: int = 2) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        config=RateLimitConfig(
            requests_per_minute=100, requests_per_hour=1000, burst_limit=burst_limit
        ),
    )

    @app.post("/api/chat")
    async def chat():
        return {"response": "ok"}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    def test_burst_limit(self):
        """Test requests beyond the burst limit get a 429."""
        client = TestClient(build_app(burst_limit=2))

        assert client.post("/api/chat").status_code == 200
        assert client.post("/api/chat").status_code == 200
        response = client.post("/api/chat")

        assert response.status_code == 429
        assert response.json()["code"] == "3001"
        assert response.headers["Retry-After"] == "10"

    def test_unlisted_paths_not_limited(self):
        """Test paths outside the limited set pass through."""
        client = TestClient(build_app(burst_limit=1))

        for _ in range(5):
            assert client.get("/api/health").status_code == 200

    def test_limits_are_per_session(self):
        """Test each session cookie has its own budget."""
        app = build_app(burst_limit=1)
        alice = TestClient(app, cookies={"session_id": "a"})
        bob = TestClient(app, cookies={"session_id": "b"})

        assert alice.post("/api/chat").status_code == 200
        assert bob.post("/api/chat").status_code == 200
        assert alice.post("/api/chat").status_code == 429

    def test_rate_limit_headers(self):
        """Test allowed responses carry limit headers."""
        client = TestClient(build_app())

        response = client.post("/api/chat")

        assert response.headers["X-RateLimit-Limit"] == "100"
        assert response.headers["X-RateLimit-Remaining"] == "99"

    def test_config_from_settings(self, mock_settings):
        """Test limits are read from settings."""
        mock_settings.rate_limit_per_minute = 7
        mock_settings.rate_limit_per_hour = 70
        mock_settings.rate_limit_burst = 3

        config = RateLimitConfig.from_settings(mock_settings)

        assert (config.requests_per_minute, config.requests_per_hour, config.burst_limit) == (7, 70, 3)
