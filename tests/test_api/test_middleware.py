"""
Middleware Tests

Correlation ids, request logging helpers and the fixed-window limiter.
"""

import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import QueryParams

from creatorshare.api.middleware import FixedWindowRateLimiter, sanitize_query_params


class TestCorrelationId:
    def test_generated_when_absent(self, client: TestClient):
        response = client.get("/health")
        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_echoed_when_supplied(self, client: TestClient):
        response = client.get("/health", headers={"X-Correlation-ID": "req-123"})
        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_present_on_errors(self, client: TestClient):
        response = client.get(
            "/api/content/content_missing", headers={"X-Correlation-ID": "req-9"}
        )
        assert response.status_code == 404
        assert response.headers["X-Correlation-ID"] == "req-9"


class TestRequestLogging:
    def test_response_time_header(self, client: TestClient):
        response = client.get("/api/content")
        assert response.headers["X-Response-Time"].endswith("ms")

    def test_health_not_timed(self, client: TestClient):
        assert "X-Response-Time" not in client.get("/health").headers

    def test_sanitize_query_params(self):
        params = QueryParams({"q": "sunset", "api_key": "hunter2", "long": "x" * 150})
        sanitized = sanitize_query_params(params)

        assert "hunter2" not in sanitized
        assert "[REDACTED]" in sanitized
        assert "...[truncated]" in sanitized
        assert "sunset" in sanitized

    def test_sanitize_empty(self):
        assert sanitize_query_params(QueryParams({})) is None


# =============================================================================
# Fixed Window Rate Limiter
# =============================================================================


class ManualClock:
    def __init__(self, now: float = 1_000_020.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestFixedWindowRateLimiter:
    @pytest.fixture
    def clock(self):
        return ManualClock()

    @pytest.fixture
    def limiter(self, clock):
        return FixedWindowRateLimiter(clock=clock)

    def test_allows_up_to_limit(self, limiter):
        assert [limiter.hit("user_a", 3, 60) for _ in range(4)] == [True, True, True, False]

    def test_identifiers_independent(self, limiter):
        limiter.hit("user_a", 1, 60)
        assert limiter.hit("user_b", 1, 60) is True
        assert limiter.hit("user_a", 1, 60) is False

    def test_new_window_resets(self, limiter, clock):
        limiter.hit("user_a", 1, 60)
        clock.now += 60
        assert limiter.hit("user_a", 1, 60) is True

    def test_window_boundary_is_fixed(self, limiter, clock):
        """Counters belong to floor(now / window), not to the first request."""
        clock.now = 1_000_019.0
        limiter.hit("user_a", 1, 60)
        clock.now = 1_000_020.0
        assert limiter.hit("user_a", 1, 60) is True

    def test_retry_after(self, limiter, clock):
        clock.now = 1_000_020.0 + 15
        assert limiter.retry_after(60) == 45

    def test_reset(self, limiter):
        limiter.hit("user_a", 1, 60)
        limiter.reset()
        assert limiter.hit("user_a", 1, 60) is True

    def test_expired_windows_pruned(self, limiter, clock):
        limiter.hit("user_a", 1, 60)
        clock.now += FixedWindowRateLimiter.CLEANUP_INTERVAL_SECONDS
        limiter.hit("user_b", 1, 60)

        assert len(limiter._entries) == 1
