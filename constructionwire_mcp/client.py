"""
Client implementation for the ConstructionWire REST API.

This module defines :class:`ConstructionwireClient`, which exposes every
operation in :data:`~constructionwire_mcp.endpoints.ENDPOINTS` as an async
method and returns results in the MCP tool-result envelope.

Usage
-----

.. code-block:: python

    from constructionwire_mcp import ConstructionwireClient

    async with ConstructionwireClient(username="me@example.com", password="secret") as client:
        result = await client.reports_list({"State": ["CA", "NV"], "PageSize": 25})
        print(result["content"][0]["text"])

Every generated method is a thin alias for :meth:`ConstructionwireClient.invoke`
with the endpoint name fixed; parameters are given as one flat mapping (or as
keyword arguments) and routed to the path, query string or JSON body according
to the endpoint declaration.
"""

import asyncio
import inspect
import json
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .config import AUTH_MODE_BEARER, DEFAULT_API_BASE_URL, ServerConfig
from .endpoints import ENDPOINTS, get_endpoint
from .exceptions import (
    ConstructionWireError,
    ConstructionWireValidationError,
    RequestCancelledError,
)
from .logger import Logger
from .models import APIEndpoint, ProgressUpdate, text_result
from .transport.auth import AuthStrategy, BasicAuth, BearerAuth, ConstructionWireOAuthClient
from .transport.executor import DEFAULT_TIMEOUT, RequestExecutor
from .transport.params import classify_parameters, validate_required
from .transport.paths import build_path

ProgressCallback = Callable[[ProgressUpdate], Union[Awaitable[None], None]]


class ConstructionwireClient:
    """Async client for the ConstructionWire API.

    Parameters
    ----------
    username, password : str, optional
        Credentials for the static Basic authentication deployment.
    oauth_client : ConstructionWireOAuthClient, optional
        Token provider for the bearer deployment. Takes precedence over
        ``username``/``password``.
    auth : AuthStrategy, optional
        Fully custom credential strategy. Takes precedence over both of the
        above.
    api_base_url : str, optional
        Root URL every endpoint path is appended to.
    timeout : float, optional
        Per-attempt request timeout in seconds (default 30).
    rate_limit : int, optional
        Maximum requests per minute across all endpoints. Unset means no
        throttling.
    max_retries : int, optional
        How many times a 429/5xx response is retried (default 3).
    """

    def __init__(
        self,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        oauth_client: Optional[ConstructionWireOAuthClient] = None,
        auth: Optional[AuthStrategy] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limit: Optional[int] = None,
        max_retries: int = 3,
        logger: Optional[Logger] = None,
        executor: Optional[RequestExecutor] = None,
    ) -> None:
        self.logger = logger or Logger()
        self.oauth_client = oauth_client

        if auth is None:
            if oauth_client is not None:
                auth = BearerAuth(oauth_client, logger=self.logger)
            elif username and password:
                auth = BasicAuth(username, password, logger=self.logger)
            else:
                raise ValueError("Either username/password, an oauth_client or an auth strategy must be provided")
        self.auth = auth

        self.executor = executor or RequestExecutor(
            api_base_url,
            auth,
            max_retries=max_retries,
            rate_limit=rate_limit,
            timeout=timeout,
            logger=self.logger,
        )

    @classmethod
    def from_config(cls, config: ServerConfig, logger: Optional[Logger] = None) -> "ConstructionwireClient":
        cw = config.constructionwire
        logger = logger or Logger()
        options: Dict[str, Any] = dict(
            api_base_url=cw.api_base_url,
            timeout=cw.timeout,
            rate_limit=cw.rate_limit,
            max_retries=cw.max_retries,
            logger=logger,
        )
        if cw.auth_mode == AUTH_MODE_BEARER:
            oauth_client = ConstructionWireOAuthClient(cw.api_base_url, cw.email, cw.password, timeout=cw.timeout)
            return cls(oauth_client=oauth_client, **options)
        return cls(username=cw.username, password=cw.password, **options)

    async def initialize(self) -> None:
        if self.oauth_client is not None:
            await self.oauth_client.initialize()

    async def close(self) -> None:
        await self.executor.close()
        if self.oauth_client is not None:
            await self.oauth_client.close()

    async def __aenter__(self) -> "ConstructionwireClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _report_progress(self, on_progress: Optional[ProgressCallback], progress: float, message: str) -> None:
        if on_progress is None:
            return
        result = on_progress(ProgressUpdate(progress=progress, total=100, message=message))
        if inspect.isawaitable(result):
            await result

    def _describe_failure(self, error: Exception) -> str:
        # Timeouts and some transport errors carry no message of their own
        if str(error):
            return str(error)
        if isinstance(error, asyncio.TimeoutError):
            return f"Request timed out after {self.executor.timeout}s"
        return type(error).__name__

    async def invoke(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """Call the endpoint ``name`` and wrap its JSON in a tool result

        Raises
        ------
        RequestCancelledError
            If ``signal`` is set before the response arrives.
        ConstructionWireError
            ``Failed to execute <name>: <reason>`` for every other failure;
            the original exception is chained as ``__cause__``.
        """
        endpoint = get_endpoint(name)
        params = dict(params or {})
        await self._report_progress(on_progress, 0, f"Starting {name}...")

        try:
            validate_required(endpoint, params)
            classified = classify_parameters(endpoint, params)
            path = build_path(endpoint.path, classified.path_params)
            body = {k: v for k, v in classified.body_params.items() if v is not None}
            response = await self.executor.make_authenticated_request(
                endpoint.method.value,
                path,
                classified.query_params,
                body or None,
                signal=signal,
                operation=name,
            )
        except RequestCancelledError:
            raise
        except ConstructionWireValidationError as e:
            self.logger.error("VALIDATION_ERROR", str(e), {"endpoint": name})
            raise ConstructionWireError(f"Failed to execute {name}: {e}") from e
        except Exception as e:
            raise ConstructionWireError(f"Failed to execute {name}: {self._describe_failure(e)}") from e

        await self._report_progress(on_progress, 100, f"Completed {name}")
        return text_result(json.dumps(response.data, indent=2, ensure_ascii=False))


def _make_endpoint_method(endpoint: APIEndpoint):
    async def endpoint_method(
        self: ConstructionwireClient,
        params: Optional[Mapping[str, Any]] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        merged = {**(params or {}), **kwargs}
        return await self.invoke(endpoint.name, merged, signal=signal, on_progress=on_progress)

    lines = [endpoint.description, "", f"{endpoint.method.value} {endpoint.path}"]
    if endpoint.parameters:
        lines.append("")
        for param in endpoint.parameters:
            flags = param.location.value + (", array" if param.is_array else "") + (", required" if param.required else "")
            lines.append(f"    {param.name} ({flags})")
    endpoint_method.__name__ = endpoint.name
    endpoint_method.__qualname__ = f"ConstructionwireClient.{endpoint.name}"
    endpoint_method.__doc__ = "\n".join(lines)
    return endpoint_method


for _endpoint in ENDPOINTS.values():
    setattr(ConstructionwireClient, _endpoint.name, _make_endpoint_method(_endpoint))


__all__ = [
    "ConstructionwireClient",
    "ProgressCallback",
]
