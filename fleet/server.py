"""
Fleet - MCP Server
Expose AWS identity, EC2, S3, CloudWatch, Lambda, ECS, and CloudFormation
operations to MCP clients over stdio.
"""

import logging
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server.lowlevel import Server

from . import __version__
from .config import FleetConfig, configure_logging, get_config
from .dispatcher import Dispatcher
from .registry import ToolRegistry
from .tools import build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "fleet"


class ToolFailure(Exception):
    """Raised inside call_tool so the MCP SDK replies with isError=true."""


def to_mcp_tools(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["inputSchema"],
        )
        for tool in registry.describe()
    ]


async def handle_call(
    dispatcher: Dispatcher, name: str, arguments: Optional[dict[str, Any]]
) -> list[types.TextContent]:
    envelope = await dispatcher.invoke(name, arguments)
    if envelope.is_error:
        raise ToolFailure(envelope.to_text())
    return [types.TextContent(type="text", text=envelope.to_text())]


def create_server(registry: ToolRegistry) -> Server:
    """Wire a frozen registry into a low-level MCP server."""
    dispatcher = Dispatcher(registry)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return to_mcp_tools(registry)

    # Arguments are validated by the dispatcher so failures keep its messages
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await handle_call(dispatcher, name, arguments)

    return server


async def serve(config: Optional[FleetConfig] = None) -> None:
    config = config or get_config()
    configure_logging(config.log_level)

    registry = build_registry(config)
    server = create_server(registry)
    logger.info("Starting %s MCP server (region=%s)", SERVER_NAME, config.region)

    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
