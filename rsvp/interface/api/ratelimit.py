"""Per-client rate limiting for the public API."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from rsvp.util.logging import get_logger

logger = get_logger(__name__)

TOO_MANY_REQUESTS = "too many requests, please try again later"


@dataclass
class TokenBucket:
    """Token bucket refilled continuously at ``rate`` tokens per second."""

    tokens: float
    updated_at: float

    def take(self, now: float, rate: float, capacity: int) -> bool:
        """Spend one token if available."""
        elapsed = max(0.0, now - self.updated_at)
        self.tokens = min(float(capacity), self.tokens + elapsed * rate)
        self.updated_at = now
        if self.tokens < 1.0:
            return False
        self.tokens -= 1.0
        return True


class RateLimitMiddleware:
    """ASGI middleware applying one token bucket per client IP.

    Requests over the limit get a 429. Buckets idle for ``idle_ttl`` seconds
    are dropped by a sweep that runs at most every ``sweep_interval`` seconds.
    All bucket state is touched without awaiting, so the event loop
    serializes access.
    """

    def __init__(
        self,
        app: ASGIApp,
        rps: float,
        burst: int,
        idle_ttl: float = 180.0,
        sweep_interval: float = 60.0,
        trust_forwarded_for: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.app = app
        self.rps = rps
        self.burst = burst
        self.idle_ttl = idle_ttl
        self.sweep_interval = sweep_interval
        self.trust_forwarded_for = trust_forwarded_for
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        self._last_sweep = clock()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        now = self._clock()
        self._sweep(now)

        client_ip = self.client_ip(scope)
        if not self._allow(client_ip, now):
            logger.warning(f"Rate limit exceeded for {client_ip}")
            response = JSONResponse(
                status_code=429, content={"message": TOO_MANY_REQUESTS}
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)

    def client_ip(self, scope: Scope) -> str:
        """Resolve the client address used as the bucket key."""
        if self.trust_forwarded_for:
            forwarded = Headers(scope=scope).get("x-forwarded-for")
            if forwarded:
                first = forwarded.split(",")[0].strip()
                if first:
                    return first

        client = scope.get("client")
        return client[0] if client else "unknown"

    @property
    def tracked_clients(self) -> int:
        return len(self._buckets)

    def _allow(self, client_ip: str, now: float) -> bool:
        bucket = self._buckets.get(client_ip)
        if bucket is None:
            bucket = TokenBucket(tokens=float(self.burst), updated_at=now)
            self._buckets[client_ip] = bucket
        return bucket.take(now, self.rps, self.burst)

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.sweep_interval:
            return
        self._last_sweep = now
        stale = [
            ip
            for ip, bucket in self._buckets.items()
            if now - bucket.updated_at > self.idle_ttl
        ]
        for ip in stale:
            del self._buckets[ip]
