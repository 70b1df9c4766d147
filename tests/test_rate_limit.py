import asyncio
import unittest

from constructionwire_mcp.transport.rate_limit import RateLimiter
from constructionwire_mcp.transport.request import HTTPResponse, PreparedRequest


class VirtualTime:
    """Clock whose sleep advances time instantly"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def clock(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


class TestRateLimiter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.time = VirtualTime()
        self.limiter = RateLimiter(60, clock=self.time.clock, sleep=self.time.sleep)

    def test_interval_from_requests_per_minute(self):
        self.assertEqual(self.limiter.interval, 1.0)
        self.assertEqual(RateLimiter(600).interval, 0.1)

    def test_rejects_non_positive_rate(self):
        with self.assertRaises(ValueError):
            RateLimiter(0)

    async def test_first_request_is_not_delayed(self):
        await self.limiter.acquire()
        self.assertEqual(self.time.sleeps, [])
        self.assertEqual(self.limiter.last_request_time, 0.0)

    async def test_waits_out_the_remaining_interval(self):
        await self.limiter.acquire()
        self.time.now += 0.25
        await self.limiter.acquire()
        self.assertEqual(self.time.sleeps, [0.75])
        self.assertEqual(self.limiter.last_request_time, 1.0)

    async def test_no_wait_once_interval_has_passed(self):
        await self.limiter.acquire()
        self.time.now += 5
        await self.limiter.acquire()
        self.assertEqual(self.time.sleeps, [])

    async def test_concurrent_callers_are_spaced_in_arrival_order(self):
        order = []

        async def call(i):
            await self.limiter.acquire()
            order.append((i, self.time.now))

        await asyncio.gather(*(call(i) for i in range(4)))
        self.assertEqual([i for i, _ in order], [0, 1, 2, 3])
        starts = [t for _, t in order]
        gaps = [b - a for a, b in zip(starts, starts[1:])]
        for gap in gaps:
            self.assertGreaterEqual(gap, 1.0)

    async def test_middleware_acquires_before_calling_next(self):
        seen = []

        async def call_next(request):
            seen.append(self.time.now)
            return HTTPResponse(status=200, headers={}, data=None)

        request = PreparedRequest(method="GET", url="http://example.test/x")
        await self.limiter(request, call_next)
        await self.limiter(request, call_next)
        self.assertEqual(seen, [0.0, 1.0])


if __name__ == "__main__":
    unittest.main()
