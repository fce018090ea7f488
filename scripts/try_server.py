"""
Manual smoke test: spawn the SDLT MCP server over stdio and call the tool
"""
import asyncio
import os
import sys

from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client

# Add repo root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sdlt_service.utils.logger import get_logger

logger = get_logger(__name__)


SAMPLE_VALUES = [0, 125_000, 250_000, 500_000, 925_000, 2_000_000]


async def main():
    """Call calculate_sdlt for a handful of prices"""

    server_params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "sdlt_service"],
        cwd=os.path.join(os.path.dirname(__file__), ".."),
    )

    async with stdio_client(server_params) as (read, write):
        async with ClientSession(read, write) as session:
            init = await session.initialize()
            print("=" * 60)
            print(f"Connected to {init.serverInfo.name} {init.serverInfo.version}")
            print(f"Protocol: {init.protocolVersion}")
            print(f"Instructions: {init.instructions}")
            print("=" * 60)

            tools = await session.list_tools()
            for tool in tools.tools:
                print(f"- {tool.name}: {tool.description}")
            print()

            for value in SAMPLE_VALUES:
                result = await session.call_tool("calculate_sdlt", {"property_value": value})
                print(result.content[0].text)

            print()
            print("Edge cases")
            print("-" * 60)
            missing = await session.call_tool("calculate_sdlt", {})
            print(f"missing  -> {missing.content[0].text}")
            negative = await session.call_tool("calculate_sdlt", {"property_value": -1})
            print(f"negative -> isError={negative.isError} {negative.content[0].text}")


if __name__ == "__main__":
    asyncio.run(main())
