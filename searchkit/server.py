"""MCP stdio server exposing the tool registry."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from searchkit import __server_name__, __version__
from searchkit.config.loader import load_config
from searchkit.config.schema import Config
from searchkit.tools.factory import build_tool_registry
from searchkit.tools.registry import ToolRegistry


class ToolCallFailed(Exception):
    """Raised to hand an error response back to the MCP server as ``isError``."""


def create_server(registry: ToolRegistry) -> Server:
    """Wire list_tools/call_tool handlers to the registry."""
    server = Server(__server_name__, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["inputSchema"],
            )
            for definition in registry.get_definitions()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        response = await registry.execute(name, arguments or {})
        if response.is_error:
            raise ToolCallFailed(response.text)
        return [types.TextContent(type="text", text=response.text)]

    return server


async def serve(config: Config) -> None:
    """Run the server over stdio until the client disconnects."""
    registry = build_tool_registry(config)
    server = create_server(registry)

    logger.info("{} MCP server v{} running on stdio", __server_name__, __version__)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Google search and webpage extraction MCP server")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument("--log-level", default="INFO", help="loguru log level")
    args = parser.parse_args(argv)

    # stdout carries the protocol stream.
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    config = load_config(args.config)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
