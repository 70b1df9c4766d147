"""Transparent re-issue of requests that failed with a transient HTTP status."""

import asyncio
import math
import random
from typing import Mapping, Optional

from ..exceptions import ConstructionWireAPIError
from ..logger import Logger
from .request import Handler, HTTPResponse, PreparedRequest

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})

BASE_DELAY = 1.0
MAX_JITTER = 0.5
# Upper bound on a server-supplied Retry-After, in seconds
MAX_RETRY_AFTER = 300.0


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def compute_delay(retry_count: int, headers: Mapping[str, str], jitter=random.uniform) -> float:
    """Seconds to wait before retry number ``retry_count`` (1-based)

    A ``Retry-After`` header wins, capped at :data:`MAX_RETRY_AFTER`; an
    unparseable, negative or non-finite one means one second.
    Otherwise the delay doubles with each retry plus up to half a second of
    jitter.
    """
    retry_after = _header(headers, "Retry-After")
    if retry_after is not None:
        try:
            seconds = float(retry_after)
        except ValueError:
            return BASE_DELAY
        if not math.isfinite(seconds) or seconds < 0:
            return BASE_DELAY
        return min(seconds, MAX_RETRY_AFTER)
    return BASE_DELAY * 2 ** (retry_count - 1) + jitter(0, MAX_JITTER)


class RetryMiddleware:
    """Retries a request on 429/500/502/503/504 up to ``max_retries`` times

    Only responses with a status code are considered; connection errors and
    timeouts propagate on the first failure.
    """

    def __init__(
        self,
        max_retries: int = 3,
        *,
        logger: Optional[Logger] = None,
        sleep=asyncio.sleep,
        jitter=random.uniform,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")
        self.max_retries = max_retries
        self.logger = logger or Logger()
        self._sleep = sleep
        self._jitter = jitter

    async def __call__(self, request: PreparedRequest, call_next: Handler) -> HTTPResponse:
        while True:
            try:
                return await call_next(request)
            except ConstructionWireAPIError as exc:
                if exc.status not in RETRYABLE_STATUSES or request.retry_count >= self.max_retries:
                    raise
                request.retry_count += 1
                delay = compute_delay(request.retry_count, exc.headers, self._jitter)
                self.logger.log_retry(request.retry_count, delay * 1000, exc.status, {
                    "url": request.url,
                    "max_retries": self.max_retries,
                })
                await self._sleep(delay)


__all__ = [
    "RETRYABLE_STATUSES",
    "RetryMiddleware",
    "compute_delay",
]
