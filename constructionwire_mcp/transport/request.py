"""Request and response shapes passed along the middleware chain."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional


@dataclass
class PreparedRequest:
    method: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    json: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)
    retry_count: int = 0
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class HTTPResponse:
    status: int
    headers: Dict[str, str]
    data: Any
    size: int = 0


Handler = Callable[[PreparedRequest], Awaitable[HTTPResponse]]


__all__ = [
    "PreparedRequest",
    "HTTPResponse",
    "Handler",
]
