"""MCP tool definitions for the ConstructionWire API.

This module provides the ConstructionwireTools class which turns the endpoint
table into MCP tool definitions and routes tool calls to a
:class:`~constructionwire_mcp.client.ConstructionwireClient`.
"""

import asyncio
from typing import Any, Dict, List, Optional

from .client import ConstructionwireClient, ProgressCallback
from .endpoints import ENDPOINTS
from .logger import Logger
from .models import APIEndpoint

TOOL_PREFIX = "constructionwire_"


def tool_name(endpoint: APIEndpoint) -> str:
    return f"{TOOL_PREFIX}{endpoint.name}"


class ConstructionwireTools:
    """Maps MCP tool names onto client endpoint calls

    Args:
        client: Client every tool call is executed with
        logger: Structured logger for tool call events
    """

    def __init__(self, client: ConstructionwireClient, logger: Optional[Logger] = None):
        self.client = client
        self.logger = logger or client.logger
        self.endpoints: Dict[str, APIEndpoint] = {tool_name(e): e for e in ENDPOINTS.values()}

    def get_tool_definitions(self) -> List[Dict[str, Any]]:
        """Get all tool definitions

        Returns:
            List of ``{"name", "description", "inputSchema"}`` dictionaries
        """
        return [
            {
                "name": name,
                "description": endpoint.description,
                "inputSchema": endpoint.input_schema(),
            }
            for name, endpoint in self.endpoints.items()
        ]

    def can_handle(self, name: str) -> bool:
        return name in self.endpoints

    async def execute_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """Execute the tool ``name`` with ``arguments``

        Raises:
            ValueError: If the tool is not a ConstructionWire tool
        """
        endpoint = self.endpoints.get(name)
        if endpoint is None:
            self.logger.warn("TOOL_CALL", f"Unknown tool '{name}'")
            raise ValueError(f"Unknown tool: {name}")
        arguments = arguments or {}
        self.logger.info("TOOL_CALL", f"Tool call: {name}", {"argument_names": sorted(arguments)})
        return await self.client.invoke(endpoint.name, arguments, signal=signal, on_progress=on_progress)


__all__ = [
    "ConstructionwireTools",
    "TOOL_PREFIX",
    "tool_name",
]
