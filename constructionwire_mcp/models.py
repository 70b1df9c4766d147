"""Data models for ConstructionWire API endpoints and parameters.

This module contains the core data structures used to describe the vendor
operations that are exposed both as client methods and as MCP tools.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class HTTPMethod(Enum):
    """Supported HTTP methods for API endpoints"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def sends_body(self) -> bool:
        """Whether undeclared parameters travel in the JSON body for this verb"""
        return self in (HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH)


class ParamLocation(Enum):
    """Where a declared parameter is placed on the outbound request"""
    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class APIParameter:
    """Configuration for an API endpoint parameter

    Args:
        name: Parameter name exactly as the vendor expects it
        type: JSON type of a single value ("string", "integer", "number", "boolean")
        location: Where the value goes on the request
        description: Parameter description for tool documentation
        required: Whether the parameter must be supplied
        is_array: Whether the vendor accepts a list of values
    """
    name: str
    type: str
    location: ParamLocation
    description: str = ""
    required: bool = False
    is_array: bool = False

    def json_schema(self) -> Dict[str, Any]:
        item = {"type": self.type}
        if self.is_array:
            schema: Dict[str, Any] = {"type": "array", "items": item}
        else:
            schema = dict(item)
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class APIEndpoint:
    """Configuration for one ConstructionWire API operation

    Args:
        name: Unique snake_case operation name (becomes method and tool name)
        path: Path template relative to the API base URL (supports /reports/{reportId})
        method: HTTP method to use
        description: Endpoint description for tool documentation
        parameters: Declared parameters with their request locations
    """
    name: str
    path: str
    method: HTTPMethod
    description: str
    parameters: Tuple[APIParameter, ...] = ()

    def parameter(self, name: str) -> Optional[APIParameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    @property
    def path_parameters(self) -> List[APIParameter]:
        return [p for p in self.parameters if p.location is ParamLocation.PATH]

    @property
    def required_parameters(self) -> List[APIParameter]:
        return [p for p in self.parameters if p.required]

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema describing the flat parameter object for this endpoint"""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.required_parameters],
        }


@dataclass
class ClassifiedParameters:
    """Per-call partition of caller parameters into request locations"""
    path_params: Dict[str, Any] = field(default_factory=dict)
    query_params: Dict[str, Any] = field(default_factory=dict)
    body_params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProgressUpdate:
    """Start/end progress marker reported to an ``on_progress`` callback"""
    progress: float
    total: float
    message: str


def text_result(text: str) -> Dict[str, Any]:
    """Wrap text in the uniform MCP tool-result envelope"""
    return {"content": [{"type": "text", "text": text}]}


__all__ = [
    "HTTPMethod",
    "ParamLocation",
    "APIParameter",
    "APIEndpoint",
    "ClassifiedParameters",
    "ProgressUpdate",
    "text_result",
]
