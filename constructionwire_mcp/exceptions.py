"""
Custom exception types for the ConstructionWire client.

These exceptions allow callers to distinguish between failures
occurring during authentication, parameter validation, cancellation
and those arising from API requests.
"""

from typing import Any, Mapping, Optional


class ConstructionWireError(Exception):
    """Base exception for all ConstructionWire client errors."""


class ConstructionWireAuthError(ConstructionWireError):
    """Raised when authentication or token retrieval fails."""


class ConstructionWireValidationError(ConstructionWireError):
    """Raised when a call is missing a parameter the endpoint requires."""


class RequestCancelledError(ConstructionWireError):
    """Raised when the caller aborts a request through its signal."""

    def __init__(self, message: str = "Request was cancelled"):
        super().__init__(message)


class ConstructionWireAPIError(ConstructionWireError):
    """Raised when an HTTP request to the ConstructionWire API returns an error status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.headers = dict(headers or {})
        self.body = body
