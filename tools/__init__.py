# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between an MCP client (usually an LLM
#   agent) and the gateway in core/.  Each tool:
#     1. Logs the incoming call
#     2. Calls one core/weather.py function
#     3. Returns its text unchanged
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs, parse JSON or word error messages (core/ does)
#   - They do NOT catch ConfigurationError; a missing API key should surface
#     as a tool error, not as a friendly sentence
# =============================================================================
