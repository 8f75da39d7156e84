# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (the three weather tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the gateway's three operations as MCP tools.  Each tool is a
#   thin wrapper around a core/weather.py function. It logs the call and
#   passes the resulting text straight back.
#
# HOW IT WORKS (the flow):
#   1. An agent (or main.py's demo client) starts this server over stdio
#   2. It calls a tool by name, e.g. "get_current_weather"
#   3. FastMCP routes the call to the decorated function below
#   4. The function calls core/, which talks to OpenWeather
#   5. The agent receives one formatted string
#
# TOOL CONTRACT:
#   Every tool returns a STRING: either the weather report or a plain
#   explanation ("City not found…", "Rate limit exceeded…").  The agent
#   never has to decode an error object.  The single exception is a missing
#   API key: that raises, and FastMCP reports it as a tool error, because
#   it's a broken deployment rather than a bad question.
#
# RUNNING THIS SERVER:
#     a) Standalone:     python -m tools.mcp_server   (or: weather-mcp)
#     b) As subprocess:  main.py starts it via stdio transport
# =============================================================================

import logging
import sys
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from fastmcp import FastMCP

from core.weather import get_alerts, get_current_weather, get_forecast

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# A stray log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for the response text
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log the tool's text response in GREEN, then return it."""
    first_line = result.splitlines()[0] if result else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {first_line}{_RESET}")
    return result


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("weather")


# =============================================================================
# TOOL 1: get_current_weather
# =============================================================================
@mcp.tool(name="get_current_weather")
def get_current_weather_tool(city: str, country_code: Optional[str] = None) -> str:
    """Get current weather for a city.

    Args:
        city: City name (e.g., "London").
        country_code: Optional ISO country code (e.g., "GB").  Use it when the
            city name is ambiguous (Paris,FR vs Paris,US).

    Returns:
        One line with temperature, feels-like, conditions and humidity,
        or a short explanation if the lookup failed.
    """
    _log_request("get_current_weather", city=city, country_code=country_code)
    return _log_response("get_current_weather", get_current_weather(city, country_code))


# =============================================================================
# TOOL 2: get_weather_forecast
# =============================================================================
# The provider returns 40 three-hour samples.  The agent gets one line per
# day instead; see core.parsing.bucket_by_day for how a day's sample is
# picked.
# =============================================================================
@mcp.tool(name="get_weather_forecast")
def get_weather_forecast_tool(city: str, country_code: Optional[str] = None, days: int = 3) -> str:
    """Get a summarized 1–5 day forecast.

    Args:
        city: City name (e.g., "Berlin").
        country_code: Optional ISO country code (e.g., "DE").
        days: Days ahead (1–5).  Values outside the range are clamped.

    Returns:
        One line per day: "<date>: <temp>°C, <description>".
    """
    _log_request("get_weather_forecast", city=city, country_code=country_code, days=days)
    return _log_response("get_weather_forecast", get_forecast(city, country_code, days))


# =============================================================================
# TOOL 3: get_weather_alerts
# =============================================================================
# Two upstream calls: geocoding (city → lat/lon), then One Call 3.0.
# One Call needs its own subscription, so an "access denied" answer here
# usually means the plan, not the key.
# =============================================================================
@mcp.tool(name="get_weather_alerts")
def get_weather_alerts_tool(city: str, country_code: Optional[str] = None) -> str:
    """Active government weather alerts via One Call 3.0.

    Args:
        city: City name (e.g., "Miami").
        country_code: Optional ISO country code (e.g., "US").

    Returns:
        Each alert with its issuer, validity window (UTC) and description,
        or "No active alerts for <place>."
    """
    _log_request("get_weather_alerts", city=city, country_code=country_code)
    _log_status("Geocoding, then fetching One Call alerts")
    return _log_response("get_weather_alerts", get_alerts(city, country_code))


def main() -> None:
    # Load .env once, before the first tool call reads the settings
    load_dotenv(find_dotenv(usecwd=True))
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
