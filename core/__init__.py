# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL of the weather gateway's logic: building provider
# URLs, talking HTTP, normalizing errors, parsing JSON and formatting text.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or knows how its strings reach
#   the agent.  Every public operation in core/weather.py is a plain function
#   you can call from a REPL.
#
#   urls.py       → Request Builder
#   transport.py  → Transport Adapter (one GET → Success | Failure)
#   errors.py     → Error Normalizer + the message vocabulary
#   parsing.py    → Response Parser / forecast bucketing / alert formatting
#   geocoding.py  → Geocoding Resolver (alerts only)
#   weather.py    → the three operations, chaining the stages above
# =============================================================================
