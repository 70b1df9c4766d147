"""Client-wide request spacing."""

import asyncio
import time
from typing import Optional

from ..logger import Logger
from .request import Handler, HTTPResponse, PreparedRequest


class RateLimiter:
    """Keeps at least ``60 / requests_per_minute`` seconds between requests

    One instance is shared by every endpoint of a client, so all calls are
    throttled as a single pool. Waiters are released in arrival order.
    """

    def __init__(
        self,
        requests_per_minute: int,
        *,
        logger: Optional[Logger] = None,
        clock=time.monotonic,
        sleep=asyncio.sleep,
    ):
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be greater than 0")
        self.interval = 60.0 / requests_per_minute
        self.logger = logger or Logger()
        self.last_request_time: Optional[float] = None
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            if self.last_request_time is not None:
                elapsed = self._clock() - self.last_request_time
                if elapsed < self.interval:
                    wait = self.interval - elapsed
                    self.logger.log_rate_limit(wait * 1000, {"interval_ms": round(self.interval * 1000)})
                    await self._sleep(wait)
            self.last_request_time = self._clock()

    async def __call__(self, request: PreparedRequest, call_next: Handler) -> HTTPResponse:
        await self.acquire()
        return await call_next(request)


__all__ = [
    "RateLimiter",
]
