"""Credential strategies for outbound ConstructionWire requests.

Two deployments exist: a static Basic header built once from a username and
password, and a bearer token obtained from :class:`ConstructionWireOAuthClient`
on every request. The executor only depends on :meth:`AuthStrategy.apply_auth`.
"""

import asyncio
import base64
import time
from typing import Any, Dict, Optional

import aiohttp

from ..exceptions import ConstructionWireAuthError
from ..logger import Logger, token_preview

# Refresh a bearer token this many seconds before it actually expires
EXPIRY_MARGIN = 60.0
DEFAULT_TOKEN_LIFETIME = 3600.0


class AuthStrategy:
    """Supplies credentials for each outbound request"""

    scheme = ""

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or Logger()

    async def apply_auth(self, headers: Dict[str, str]) -> Dict[str, str]:
        raise NotImplementedError


class BasicAuth(AuthStrategy):
    """Static ``Authorization: Basic`` header encoded at construction"""

    scheme = "Basic"

    def __init__(self, username: str, password: str, logger: Optional[Logger] = None):
        super().__init__(logger)
        if not username:
            raise ValueError("username must be provided")
        if not password:
            raise ValueError("password must be provided")
        creds = f"{username}:{password}".encode("utf-8")
        self._encoded = base64.b64encode(creds).decode("ascii")

    def get_auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Basic {self._encoded}"}

    async def apply_auth(self, headers: Dict[str, str]) -> Dict[str, str]:
        headers.update(self.get_auth_headers())
        self.logger.log_auth_event("Basic credentials applied", True, {"preview": token_preview(self._encoded)})
        return headers


class ConstructionWireOAuthClient:
    """Obtains and caches bearer tokens from the ConstructionWire auth endpoint

    The token is reused until it is within :data:`EXPIRY_MARGIN` seconds of
    expiry; concurrent callers share a single refresh.
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        password: str,
        *,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
        clock=time.monotonic,
    ):
        if not email:
            raise ValueError("email must be provided")
        if not password:
            raise ValueError("password must be provided")
        self.auth_url = f"{base_url.rstrip('/')}/auth"
        self.email = email
        self.password = password
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._clock = clock
        self._access_token: Optional[str] = None
        self._token_expiry = 0.0
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        await self.get_valid_access_token()

    def _is_valid(self) -> bool:
        return self._access_token is not None and self._clock() < self._token_expiry - EXPIRY_MARGIN

    async def get_valid_access_token(self) -> str:
        if self._is_valid():
            return self._access_token
        async with self._lock:
            if not self._is_valid():
                await self._refresh_access_token()
            return self._access_token

    async def _refresh_access_token(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        payload = {"username": self.email, "password": self.password}
        try:
            async with self._session.post(
                self.auth_url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                try:
                    body: Any = await response.json(content_type=None)
                except ValueError:
                    body = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ConstructionWireAuthError(f"Failed to connect to auth server: {exc}") from exc

        if status >= 400:
            raise ConstructionWireAuthError(f"Authentication failed with status {status}: {body}")
        if not isinstance(body, dict):
            raise ConstructionWireAuthError("Authentication response was not a JSON object")

        token = body.get("access_token") or body.get("token")
        if not token:
            raise ConstructionWireAuthError("Authentication response did not contain an access token")
        expires_in = body.get("expires_in")
        if not isinstance(expires_in, (int, float)) or isinstance(expires_in, bool):
            expires_in = DEFAULT_TOKEN_LIFETIME
        self._access_token = token
        self._token_expiry = self._clock() + float(expires_in)

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None


class BearerAuth(AuthStrategy):
    """``Authorization: Bearer`` header fetched from a token provider per request"""

    scheme = "Bearer"

    def __init__(self, token_provider: ConstructionWireOAuthClient, logger: Optional[Logger] = None):
        super().__init__(logger)
        self.token_provider = token_provider

    async def apply_auth(self, headers: Dict[str, str]) -> Dict[str, str]:
        try:
            token = await self.token_provider.get_valid_access_token()
        except ConstructionWireAuthError as exc:
            self.logger.log_auth_event("Bearer token unavailable", False, {"error": str(exc)})
            raise
        headers["Authorization"] = f"Bearer {token}"
        self.logger.log_auth_event("Bearer token applied", True, {"preview": token_preview(token)})
        return headers


__all__ = [
    "AuthStrategy",
    "BasicAuth",
    "BearerAuth",
    "ConstructionWireOAuthClient",
]
