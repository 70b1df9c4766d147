"""Shared request pipeline used by every ConstructionWire endpoint.

Path building, parameter classification, credentials, rate limiting and
retries are composed by :class:`RequestExecutor`.
"""

from .auth import AuthStrategy, BasicAuth, BearerAuth, ConstructionWireOAuthClient
from .executor import RequestExecutor
from .params import classify_parameters
from .paths import build_path
from .rate_limit import RateLimiter
from .retry import RetryMiddleware

__all__ = [
    "AuthStrategy",
    "BasicAuth",
    "BearerAuth",
    "ConstructionWireOAuthClient",
    "RequestExecutor",
    "classify_parameters",
    "build_path",
    "RateLimiter",
    "RetryMiddleware",
]
