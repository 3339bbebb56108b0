"""Per-client sliding-window rate limiting for the HTTP transport."""

import time
from collections import deque
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .config import RATE_LIMIT_REQUESTS

WINDOW_SECONDS = 60
MAX_TRACKED_CLIENTS = 10_000

# Never counted against a client
EXEMPT_PATHS = frozenset({"/health"})


class SlidingWindowLimiter:
    """Counts requests per client key over the last `window` seconds.

    The number of tracked clients is capped so spoofed addresses can't grow
    memory without bound. When the cap is hit and a sweep frees nothing,
    new clients are refused until old ones expire.
    """

    def __init__(
        self,
        limit: int,
        window: float = WINDOW_SECONDS,
        max_clients: int = MAX_TRACKED_CLIENTS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self.max_clients = max_clients
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def sweep(self, now: float | None = None) -> int:
        """Forget clients with no request inside the window. Returns how many were dropped."""
        now = self._clock() if now is None else now
        cutoff = now - self.window
        expired = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in expired:
            del self._hits[key]
        self._last_sweep = now
        return len(expired)

    def allow(self, key: str) -> bool:
        """Record a request for `key`. False if it is over the limit."""
        now = self._clock()
        if now - self._last_sweep > self.window:
            self.sweep(now)

        hits = self._hits.get(key)
        if hits is None:
            if len(self._hits) >= self.max_clients and not self.sweep(now):
                return False
            self._hits[key] = deque([now])
            return True

        cutoff = now - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        return True


def client_key(request) -> str:
    """Client address, using the last X-Forwarded-For hop when behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    if hops:
        return hops[-1]
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Answer 429 once a client exceeds `requests_per_minute`."""

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests_per_minute)

    async def dispatch(self, request, call_next):
        if request.url.path in EXEMPT_PATHS or self.limiter.allow(client_key(request)):
            return await call_next(request)
        return JSONResponse(
            {"error": "Rate limit exceeded", "retry_after": WINDOW_SECONDS},
            status_code=429,
            headers={"Retry-After": str(WINDOW_SECONDS)},
        )
