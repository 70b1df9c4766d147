"""ConstructionWire MCP server package.

This package provides an async client for every documented ConstructionWire
API operation and an MCP server that exposes those operations as tools.
"""

__version__ = "1.0.0"

from .client import ConstructionwireClient
from .config import ServerConfig, load_config, validate_config
from .endpoints import ENDPOINTS, get_endpoint
from .exceptions import (
    ConstructionWireAPIError,
    ConstructionWireAuthError,
    ConstructionWireError,
    ConstructionWireValidationError,
    RequestCancelledError,
)
from .models import APIEndpoint, APIParameter, HTTPMethod, ParamLocation
from .tools import ConstructionwireTools

__all__ = [
    "ConstructionwireClient",
    "ConstructionwireTools",
    "ServerConfig",
    "load_config",
    "validate_config",
    "ENDPOINTS",
    "get_endpoint",
    "APIEndpoint",
    "APIParameter",
    "HTTPMethod",
    "ParamLocation",
    "ConstructionWireError",
    "ConstructionWireAPIError",
    "ConstructionWireAuthError",
    "ConstructionWireValidationError",
    "RequestCancelledError",
]
