import contextlib
import logging
import os
from collections.abc import AsyncIterator

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from constructionwire_mcp.bootstrap import Runtime, build_runtime, load_validated_config


def create_app(runtime: Runtime, host: str = "0.0.0.0", port: int = 8080) -> Starlette:
    session_manager = StreamableHTTPSessionManager(
        app=runtime.mcp_server.get_server(),
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    async def health_handler(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "server": runtime.config.name,
            "tools_count": len(runtime.tools.endpoints),
        })

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        """Context manager for session manager and client lifecycle."""
        async with session_manager.run():
            try:
                await runtime.start()
                logging.info(f"ConstructionWire MCP Streamable HTTP Server started on {host}:{port}")
                logging.info("Available endpoints:")
                logging.info(f"  - POST http://{host}:{port}/ (MCP protocol)")
                logging.info(f"  - GET http://{host}:{port}/health (Health check)")
                yield
            finally:
                await runtime.stop()
                logging.info("ConstructionWire MCP Server shutting down...")

    return Starlette(
        routes=[
            Route("/health", health_handler, methods=["GET"]),
            Mount("/", app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )


def main():
    port = int(os.getenv("PORT", 8080))
    host = os.getenv("HOST", "0.0.0.0")

    runtime = build_runtime(load_validated_config())
    starlette_app = create_app(runtime, host, port)

    import uvicorn
    uvicorn.run(starlette_app, host=host, port=port)


if __name__ == "__main__":
    main()
