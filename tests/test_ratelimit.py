"""Tests for the sliding-window rate limiter."""

from types import SimpleNamespace

from pcbuild_mcp.ratelimit import RateLimitMiddleware, SlidingWindowLimiter, client_key


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _request(headers=None, host="10.0.0.1"):
    return SimpleNamespace(headers=headers or {}, client=SimpleNamespace(host=host) if host else None)


class TestSlidingWindowLimiter:
    """Tests for SlidingWindowLimiter."""

    def test_limit_per_client(self):
        limiter = SlidingWindowLimiter(limit=2, clock=FakeClock())
        assert limiter.allow("1.2.3.4")
        assert limiter.allow("1.2.3.4")
        assert not limiter.allow("1.2.3.4")
        assert limiter.allow("5.6.7.8")

    def test_window_expires(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=1, window=60, clock=clock)
        assert limiter.allow("a")
        assert not limiter.allow("a")
        clock.now += 61
        assert limiter.allow("a")

    def test_sweep_drops_idle_clients(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=5, window=60, clock=clock)
        limiter.allow("old")
        clock.now += 30
        limiter.allow("fresh")
        clock.now += 40
        assert limiter.sweep() == 1
        assert len(limiter) == 1

    def test_client_cap(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=5, max_clients=2, clock=clock)
        assert limiter.allow("a")
        assert limiter.allow("b")
        assert not limiter.allow("c")
        # Known clients keep working at the cap
        assert limiter.allow("a")

    def test_client_cap_frees_after_expiry(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=5, max_clients=1, window=60, clock=clock)
        assert limiter.allow("a")
        clock.now += 61
        assert limiter.allow("b")
        assert len(limiter) == 1


class TestClientKey:
    """Tests for client_key function."""

    def test_direct_client(self):
        assert client_key(_request()) == "10.0.0.1"

    def test_last_forwarded_hop(self):
        request = _request({"x-forwarded-for": "1.1.1.1, 2.2.2.2"})
        assert client_key(request) == "2.2.2.2"

    def test_unknown(self):
        assert client_key(_request(host=None)) == "unknown"
        assert client_key(_request({"x-forwarded-for": " , "}, host=None)) == "unknown"


def test_middleware_uses_configured_limit():
    middleware = RateLimitMiddleware(app=None, requests_per_minute=3)
    assert middleware.limiter.limit == 3
