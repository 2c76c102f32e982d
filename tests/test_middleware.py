"""Tests for app-level endpoints, middleware headers and the rate limiter."""

import pytest
import redis.asyncio as redis
from starlette.requests import Request

from vehicle_rental.config import settings
from vehicle_rental.core import middleware
from vehicle_rental.core.exceptions import RateLimitExceeded
from vehicle_rental.core.middleware import RateLimiter


async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_security_and_request_headers(client):
    resp = await client.get("/health", headers={"X-Request-ID": "req-42"})

    assert resp.headers["X-Request-ID"] == "req-42"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Response-Time"].endswith("s")


async def test_error_body_carries_code(client, customer_headers):
    resp = await client.get(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000", headers=customer_headers
    )

    assert resp.status_code == 404
    assert "code" not in resp.json()
    assert resp.json()["detail"]


def make_request() -> Request:
    return Request({"type": "http", "method": "POST", "path": "/", "headers": [], "client": ("10.0.0.1", 1234)})


@pytest.fixture
def limiter(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    limiter = RateLimiter(requests_per_minute=2, key_prefix="test")

    async def fake_redis():
        return object()

    monkeypatch.setattr(limiter, "get_redis", fake_redis)
    return limiter


async def test_limiter_allows_under_limit(limiter, monkeypatch):
    async def hits(redis_client, key, now):
        assert key == "rate:test:10.0.0.1"
        return 1

    monkeypatch.setattr(middleware, "_hit_window", hits)

    await limiter(make_request())


async def test_limiter_blocks_over_limit(limiter, monkeypatch):
    async def hits(redis_client, key, now):
        return 2

    monkeypatch.setattr(middleware, "_hit_window", hits)

    with pytest.raises(RateLimitExceeded):
        await limiter(make_request())


async def test_limiter_fails_open_without_redis(limiter, monkeypatch):
    async def broken(redis_client, key, now):
        raise redis.ConnectionError("redis down")

    monkeypatch.setattr(middleware, "_hit_window", broken)

    await limiter(make_request())


async def test_limiter_disabled_by_setting(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", False)

    async def fail(*args):
        raise AssertionError("redis should not be touched")

    monkeypatch.setattr(middleware, "_hit_window", fail)

    await RateLimiter()(make_request())
