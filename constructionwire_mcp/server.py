"""Core MCP server implementation for the ConstructionWire tools.

This module provides the ConstructionwireMCPServer class which handles tool
listing and execution, delegating the actual API calls to
:class:`~constructionwire_mcp.tools.ConstructionwireTools`.
"""

import logging
from typing import List

from mcp import types as mcp_types
from mcp.server.lowlevel import Server

from .models import ProgressUpdate
from .tools import ConstructionwireTools


class ConstructionwireMCPServer:
    """MCP Server that serves the ConstructionWire tools

    This server focuses solely on MCP protocol handling (list_tools, call_tool)
    and delegates endpoint execution to a ConstructionwireTools instance.

    Args:
        server_name: Name for the MCP server instance
        tools: ConstructionwireTools instance to get tools from
    """

    def __init__(self, tools: ConstructionwireTools, server_name: str = "constructionwire-mcp"):
        self.server_name = server_name
        self.server = Server(server_name)
        self.tools = tools
        self._setup_server()
        logging.info(f"[ConstructionwireMCP] Initialized MCP server '{server_name}'")

    def list_tool_types(self) -> List[mcp_types.Tool]:
        return [
            mcp_types.Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["inputSchema"],
            )
            for definition in self.tools.get_tool_definitions()
        ]

    def _setup_server(self) -> None:
        """Setup the MCP server with list_tools and call_tool handlers"""

        @self.server.list_tools()
        async def list_tools() -> List[mcp_types.Tool]:
            tool_list = self.list_tool_types()
            logging.info(f"[ConstructionwireMCP] Returning {len(tool_list)} tools to MCP client")
            return tool_list

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> List[mcp_types.TextContent]:
            ctx = self.server.request_context
            progress_token = ctx.meta.progressToken if ctx.meta else None

            async def on_progress(update: ProgressUpdate) -> None:
                if progress_token is None:
                    return
                await ctx.session.send_progress_notification(
                    progress_token=progress_token,
                    progress=update.progress,
                    total=update.total,
                    message=update.message,
                )

            try:
                result = await self.tools.execute_tool(name, arguments, on_progress=on_progress)
            except Exception as e:
                logging.error(f"[ConstructionwireMCP] Tool '{name}' failed: {e}")
                raise
            return [mcp_types.TextContent(type="text", text=item["text"]) for item in result["content"]]

    def get_server(self) -> Server:
        """Get the configured MCP server instance

        Returns:
            The underlying MCP Server instance
        """
        return self.server


__all__ = [
    "ConstructionwireMCPServer",
]
