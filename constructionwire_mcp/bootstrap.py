"""Wiring shared by the stdio and streamable HTTP entry points."""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

from .client import ConstructionwireClient
from .config import ServerConfig, load_config, validate_config
from .log_shipper import LogShipper
from .logger import Logger, configure_logging
from .server import ConstructionwireMCPServer
from .tools import ConstructionwireTools


@dataclass
class Runtime:
    config: ServerConfig
    logger: Logger
    client: ConstructionwireClient
    tools: ConstructionwireTools
    mcp_server: ConstructionwireMCPServer
    shipper: Optional[LogShipper] = None

    async def start(self) -> None:
        if self.shipper is not None:
            await self.shipper.start()
        try:
            await self.client.initialize()
        except BaseException:
            await self.stop()
            raise
        self.logger.info("SERVER_START", f"{self.config.name} ready", {
            "tools": len(self.tools.endpoints),
            "auth_mode": self.config.constructionwire.auth_mode,
        })

    async def stop(self) -> None:
        """Release the client and the shipper; safe to call more than once"""
        try:
            await self.client.close()
        finally:
            if self.shipper is not None:
                await self.shipper.stop()


def load_validated_config() -> ServerConfig:
    """Load configuration and exit with status 1 if it is invalid"""
    configure_logging()
    try:
        config = load_config()
    except ValueError as e:
        logging.error(f"[Config] {e}")
        sys.exit(1)
    result = validate_config(config)
    if not result.is_valid:
        for error in result.errors:
            logging.error(f"[Config] {error}")
        sys.exit(1)
    return config


def build_runtime(config: ServerConfig) -> Runtime:
    shipper = LogShipper(config.log_shipping) if config.log_shipping.enabled else None
    logger = Logger(shipper=shipper)
    client = ConstructionwireClient.from_config(config, logger=logger)
    tools = ConstructionwireTools(client, logger=logger)
    mcp_server = ConstructionwireMCPServer(tools, server_name=config.name)
    return Runtime(config=config, logger=logger, client=client, tools=tools, mcp_server=mcp_server, shipper=shipper)


__all__ = [
    "Runtime",
    "load_validated_config",
    "build_runtime",
]
