"""Rate limiting and health check tests."""

import time
from unittest.mock import AsyncMock, patch

import pytest
import redis.asyncio as redis
from httpx import AsyncClient

from fastcfs.config import settings


def _fake_redis(count: int) -> AsyncMock:
    client = AsyncMock()
    client.zcard.return_value = count
    client.zrange.return_value = [("entry", time.time())]
    return client


@pytest.mark.api
@pytest.mark.asyncio
class TestRateLimit:

    @pytest.fixture(autouse=True)
    def _enable(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_enabled", True)

    async def test_under_limit_adds_headers(self, client: AsyncClient):
        fake = _fake_redis(count=0)
        with patch("fastcfs.middleware.rate_limit.get_redis", AsyncMock(return_value=fake)):
            response = await client.get("/api/faqs")

        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == str(settings.rate_limit_per_minute)
        fake.zadd.assert_awaited_once()

    async def test_over_limit_returns_429_envelope(self, client: AsyncClient):
        fake = _fake_redis(count=10_000)
        with patch("fastcfs.middleware.rate_limit.get_redis", AsyncMock(return_value=fake)):
            response = await client.get("/api/faqs")

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMITED"
        assert "Retry-After" in response.headers

    async def test_tracking_has_its_own_bucket(self, client: AsyncClient):
        fake = _fake_redis(count=0)
        with patch("fastcfs.middleware.rate_limit.get_redis", AsyncMock(return_value=fake)):
            response = await client.get("/api/cargo/track/00000000000000")

        assert response.status_code == 404
        assert response.headers["X-RateLimit-Limit"] == str(
            settings.tracking_rate_limit_per_minute
        )
        assert fake.zcard.await_args.args[0].startswith("ratelimit:track:")

    async def test_fails_open_when_redis_is_down(self, client: AsyncClient):
        fake = AsyncMock()
        fake.zremrangebyscore.side_effect = redis.ConnectionError("down")
        with patch("fastcfs.middleware.rate_limit.get_redis", AsyncMock(return_value=fake)):
            response = await client.get("/api/faqs")

        assert response.status_code == 200

    async def test_health_is_exempt(self, client: AsyncClient):
        fake = _fake_redis(count=10_000)
        with patch("fastcfs.middleware.rate_limit.get_redis", AsyncMock(return_value=fake)):
            response = await client.get("/health")

        assert response.status_code == 200
        fake.zcard.assert_not_awaited()


@pytest.mark.api
@pytest.mark.asyncio
class TestHealth:

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_ready_when_dependencies_answer(self, client: AsyncClient):
        with patch("fastcfs.routers.health.ping_redis", AsyncMock(return_value=True)):
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {
            "service": "ok", "database": "ok", "redis": "ok",
        }

    async def test_not_ready_without_redis(self, client: AsyncClient):
        with patch(
            "fastcfs.routers.health.ping_redis",
            AsyncMock(side_effect=redis.ConnectionError("refused")),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["redis"].startswith("error")
