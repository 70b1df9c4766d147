"""The single call path shared by every ConstructionWire endpoint.

:class:`RequestExecutor` owns the ``aiohttp`` session and runs each request
through an explicit middleware chain (outermost first)::

    retry -> rate limit -> auth -> send

so every attempt, including retries, is spaced by the rate limiter and
carries freshly applied credentials.
"""

import asyncio
import json
import time
from functools import partial
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import aiohttp

from .. import __version__
from ..exceptions import ConstructionWireAPIError, RequestCancelledError
from ..logger import Logger
from .auth import AuthStrategy
from .rate_limit import RateLimiter
from .request import Handler, HTTPResponse, PreparedRequest
from .retry import RetryMiddleware

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"constructionwire-mcp/{__version__}"


def encode_query(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Render query values the way the vendor expects them

    ``None`` is dropped, booleans become ``true``/``false`` and lists that
    were not already comma-joined are sent as repeated keys.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                item = "true" if item else "false"
            pairs.append((key, str(item)))
    return pairs


def decode_body(raw: bytes) -> Any:
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class AuthMiddleware:
    def __init__(self, strategy: AuthStrategy):
        self.strategy = strategy

    async def __call__(self, request: PreparedRequest, call_next: Handler) -> HTTPResponse:
        await self.strategy.apply_auth(request.headers)
        return await call_next(request)


class RequestExecutor:
    """Executes authenticated, throttled, retried requests against the API

    Args:
        base_url: API root every endpoint path is appended to
        auth: Credential strategy applied to each attempt
        max_retries: Retry ceiling for transient HTTP failures
        rate_limit: Optional requests-per-minute cap shared by all endpoints
        timeout: Total timeout in seconds for a single attempt
        logger: Structured logger for request events
        session: Optional pre-built session; otherwise one is created lazily
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthStrategy,
        *,
        max_retries: int = 3,
        rate_limit: Optional[int] = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[Logger] = None,
        session: Optional[aiohttp.ClientSession] = None,
        rate_limiter: Optional[RateLimiter] = None,
        retry: Optional[RetryMiddleware] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.timeout = timeout
        self.logger = logger or Logger()
        self._session = session
        self._owns_session = session is None

        if rate_limiter is None and rate_limit:
            rate_limiter = RateLimiter(rate_limit, logger=self.logger)
        self.rate_limiter = rate_limiter
        self.retry = retry or RetryMiddleware(max_retries, logger=self.logger)

        middlewares: List[Any] = [self.retry]
        if self.rate_limiter is not None:
            middlewares.append(self.rate_limiter)
        middlewares.append(AuthMiddleware(auth))
        self.middlewares: Sequence[Any] = tuple(middlewares)
        self._handler = self._build_chain()

    def _build_chain(self) -> Handler:
        handler: Handler = self._send
        for middleware in reversed(self.middlewares):
            handler = partial(middleware, call_next=handler)
        return handler

    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def build_url(self, path: str) -> str:
        if path == "/":
            path = ""
        if path and not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    async def _send(self, request: PreparedRequest) -> HTTPResponse:
        session = await self._get_session()
        async with session.request(
            request.method,
            request.url,
            params=encode_query(request.params) or None,
            json=request.json,
            headers=request.headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as response:
            raw = await response.read()
            data = decode_body(raw)
            headers = dict(response.headers)
            if response.status >= 400:
                raise ConstructionWireAPIError(
                    f"Request failed with status code {response.status}",
                    status=response.status,
                    headers=headers,
                    body=data,
                )
            return HTTPResponse(status=response.status, headers=headers, data=data, size=len(raw))

    async def _run(self, request: PreparedRequest, signal: Optional[asyncio.Event]) -> HTTPResponse:
        if signal is None:
            return await self._handler(request)
        if signal.is_set():
            raise RequestCancelledError()

        send = asyncio.ensure_future(self._handler(request))
        watch = asyncio.ensure_future(signal.wait())
        try:
            await asyncio.wait({send, watch}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            send.cancel()
            watch.cancel()
            raise
        watch.cancel()
        if send.done():
            return send.result()
        send.cancel()
        await asyncio.gather(send, return_exceptions=True)
        raise RequestCancelledError()

    async def make_authenticated_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Any] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        operation: Optional[str] = None,
    ) -> HTTPResponse:
        """Send one logical request and return the raw response

        Raises:
            RequestCancelledError: If ``signal`` is set before the response arrives
            ConstructionWireAPIError: On a non-retryable or exhausted HTTP failure
            ConstructionWireAuthError: If credentials cannot be obtained
        """
        method = method.upper()
        url = self.build_url(path)
        request = PreparedRequest(
            method=method,
            url=url,
            params=dict(params or {}),
            json=data,
            headers=self.default_headers(),
            context={"endpoint": operation} if operation else {},
        )
        log_context = dict(request.context)
        self.logger.log_request_start(method, url, log_context)
        started = time.monotonic()

        try:
            response = await self._run(request, signal)
        except (RequestCancelledError, asyncio.CancelledError):
            self.logger.log_request_cancelled(method, url, (time.monotonic() - started) * 1000, log_context)
            raise
        except Exception as e:
            self.logger.log_request_error(method, url, e, (time.monotonic() - started) * 1000, {
                **log_context,
                "path": path,
                "retries": request.retry_count,
            })
            raise

        self.logger.log_request_success(method, url, response.status, (time.monotonic() - started) * 1000, {
            **log_context,
            "response_size": response.size,
            "retries": request.retry_count,
        })
        return response


__all__ = [
    "RequestExecutor",
    "AuthMiddleware",
    "encode_query",
    "decode_body",
    "USER_AGENT",
]
