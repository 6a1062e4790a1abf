"""
MCP Server for File Uploader

Exposes one tool:
1. upload_file - upload a local file to volatile storage and return its URL

Usage:
    python -m file_uploader.mcp_server

Or configure in Claude Desktop's MCP settings with the
`file-uploader-mcp` command. Configuration comes from OAP_STORAGE_BASE_URL,
OAP_CLIENT_KEY, OAP_MIN_EXPIRE_AFTER and OAP_UPLOAD_TIMEOUT.
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import __version__
from .config.settings import configure_logging, get_settings
from .uploads import UploadPipeline, build_tool_definition
from .uploads.tool import TOOL_NAME

logger = logging.getLogger(__name__)

# Create MCP server
server = Server("file-uploader-mcp", version=__version__)


class ToolCallError(Exception):
    """Raised from call_tool so the server reports the call with isError set."""


def _build_tool_list() -> list[Tool]:
    """Build the list of all available tools."""
    tool_def = build_tool_definition(get_settings().OAP_MIN_EXPIRE_AFTER)
    return [Tool(
        name=tool_def["name"],
        title=tool_def["title"],
        description=tool_def["description"],
        inputSchema=tool_def["inputSchema"],
        outputSchema=tool_def["outputSchema"],
    )]


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return _build_tool_list()


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> tuple[list[TextContent], dict[str, Any]]:
    """Handle tool calls."""
    logger.info("Tool called: %s with arguments: %s", name, arguments)

    if name != TOOL_NAME:
        raise ValueError(f"Unknown tool: {name}")

    pipeline = UploadPipeline(get_settings())
    result = await pipeline.upload_async(
        arguments["file_path"],
        arguments.get("expire_after"),
    )

    if not result.ok:
        logger.error("Error in tool %s: %s", name, result.error.message)
        raise ToolCallError(f"Error: {result.error.message}")

    output = result.to_dict()
    logger.info("Tool %s returned %s", name, output["url"])
    return [TextContent(type="text", text=json.dumps(output))], output


async def main():
    """Run the MCP server."""
    configure_logging()
    logger.info("Starting File Uploader MCP Server %s...", __version__)
    tools = _build_tool_list()
    logger.info("Registered %d tools: %s", len(tools), [t.name for t in tools])
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
