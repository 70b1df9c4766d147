import asyncio
import logging

from mcp.server.stdio import stdio_server

from constructionwire_mcp.bootstrap import build_runtime, load_validated_config


async def run() -> None:
    runtime = build_runtime(load_validated_config())
    server = runtime.mcp_server.get_server()
    try:
        await runtime.start()
        async with stdio_server() as (read_stream, write_stream):
            logging.info("ConstructionWire MCP server listening on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await runtime.stop()
        logging.info("ConstructionWire MCP server shutting down...")


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
