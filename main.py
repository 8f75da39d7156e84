# =============================================================================
# main.py  —  Demo Client for the Weather MCP Server
# =============================================================================
#
# HOW TO RUN:
#   WEATHER_API_KEY=... python main.py
#
# WHAT HAPPENS:
#   1. Starts tools/mcp_server.py as a subprocess (stdio transport)
#   2. Performs the MCP handshake and lists the available tools
#   3. Asks for a city ("London" or "London,GB")
#   4. Calls get_current_weather and prints the text it returns
#   5. Repeats until you enter a blank line
#
#   This is the same conversation an agent has with the server, minus the
#   agent: it's the quickest way to check that your key and network work.
# =============================================================================

import asyncio
import os
import sys

from dotenv import load_dotenv
from fastmcp import Client
from fastmcp.client.transports import StdioTransport
from fastmcp.exceptions import ToolError

# The server subprocess inherits this environment, so load .env first
load_dotenv()

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))


def parse_city_input(text: str) -> tuple[str, str | None]:
    """Split "City" or "City,CC" into (city, country_code)."""
    parts = [part.strip() for part in text.split(",")]
    parts = [part for part in parts if part]
    if len(parts) >= 2:
        return parts[0], parts[1]
    return (parts[0] if parts else text.strip()), None


def _result_text(result) -> str:
    for block in result.content:
        text = getattr(block, "text", None)
        if text:
            return text
    return str(result)


async def run_client() -> None:
    # =========================================================================
    # Step 1: Start the server as a subprocess
    # =========================================================================
    # "-m tools.mcp_server" from the project root keeps `core` importable
    # without installing the project.
    # =========================================================================
    transport = StdioTransport(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        env=dict(os.environ),
        cwd=PROJECT_ROOT,
    )

    async with Client(transport) as client:
        tools = await client.list_tools()
        print(f"Connected. Tools: {', '.join(tool.name for tool in tools)}")
        print("Type city (or blank to exit). You can enter 'City,CC' (e.g., London,GB).")

        # =====================================================================
        # Step 2: Interactive loop
        # =====================================================================
        while True:
            try:
                line = input("City: ")
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not line.strip():
                break

            city, country_code = parse_city_input(line)
            arguments = {"city": city}
            if country_code:
                arguments["country_code"] = country_code

            try:
                result = await client.call_tool("get_current_weather", arguments)
            except ToolError as exc:
                print(f"Error: {exc}")
                continue

            print(_result_text(result))


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    asyncio.run(run_client())
