"""sdlt_service.mcp.server

MCP (Model Context Protocol) server for UK Stamp Duty Land Tax.

Current implementation:
- stdio transport (newline-delimited JSON-RPC, see ``transport``)
- Tools:
  - calculate_sdlt

The tool table lives in ``sdlt_service.mcp.tools``; this module wires it
into an ``mcp`` low-level ``Server`` and owns the process lifecycle.
"""

from __future__ import annotations

import sys
from typing import Any

import anyio
import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server

from sdlt_service.config.settings import settings
from sdlt_service.core.exceptions import SDLTError
from sdlt_service.mcp.tools import dispatch, list_descriptors
from sdlt_service.mcp.transport import PROTOCOL_VERSION, stdio_transport
from sdlt_service.utils.logger import get_logger

logger = get_logger(__name__)



def build_server() -> Server:
    """Create the MCP server and register the tool handlers."""
    server = Server(
        settings.service_name,
        version=settings.service_version,
        instructions=settings.server_instructions,
    )

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list_descriptors()

    # Arguments are validated by the tool handlers; schema validation in the
    # library would turn a missing property_value into an error result.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        try:
            content = dispatch(name, arguments)
        except SDLTError as exc:
            logger.warning("tools/call %s failed: %s", name, exc)
            raise
        logger.info("tools/call %s ok", name)
        return content

    return server


def initialization_options(server: Server):
    return server.create_initialization_options(
        notification_options=NotificationOptions(
            prompts_changed=False,
            resources_changed=False,
            tools_changed=False,
        ),
        experimental_capabilities={},
    )


async def _run(server: Server) -> None:
    async with stdio_transport() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, initialization_options(server))


def main() -> None:
    server = build_server()
    logger.info(
        "Starting %s %s on stdio (MCP %s)",
        settings.service_name,
        settings.service_version,
        PROTOCOL_VERSION,
    )
    try:
        anyio.run(_run, server)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return
    except Exception:
        logger.exception("Transport failure, shutting down")
        sys.exit(1)
    logger.info("Transport closed, shutting down")


if __name__ == "__main__":
    main()
