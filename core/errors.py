# =============================================================================
# core/errors.py  —  Error Normalizer (the gateway's error vocabulary)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds every user-facing failure message the gateway can return, and the
#   one pure function that maps a raw provider response
#   (status code + body + which endpoint) onto that vocabulary.
#
# WHY A CLOSED VOCABULARY?
#   The caller is an LLM agent.  A handful of stable, plain-English messages
#   ("City not found…", "Rate limit exceeded…") are far easier for it to act
#   on than raw HTTP bodies.  Only statuses we don't recognize fall through
#   as "Error <status>: <body>".
#
# THE TWO 401/403 BRANCHES:
#   One Call 3.0 (alerts) needs a separate paid subscription.  A valid key
#   without that subscription still gets 401 there, so "API key invalid" would
#   send the user on a wild goose chase.  Same status, different hint,
#   different message.
# =============================================================================

from typing import Optional

CITY_NOT_FOUND = "City not found. Please check the city and country code."
ONECALL_ACCESS_DENIED = (
    "OpenWeather One Call 3.0 access denied. Your account likely lacks a "
    "One Call subscription (or the API key is invalid)."
)
API_KEY_INVALID = "Weather API key invalid or missing."
RATE_LIMITED = "Rate limit exceeded. Please wait and try again."

PROVIDER_TIMEOUT = "Weather provider timeout. Please try again."
NETWORK_ERROR = "Network error reaching weather provider."
UNEXPECTED_ERROR = "Unexpected error contacting weather provider."
UNREADABLE_RESPONSE = "Unable to parse data from weather provider."

UNPARSEABLE_WEATHER = "Unable to parse weather data from provider."
UNPARSEABLE_FORECAST = "Unable to parse forecast data from provider."
UNPARSEABLE_ALERTS = "Unable to parse alert data from provider."

LOCATION_UNRESOLVED = "Unable to resolve location. Please verify city and country code."

# Endpoint hints passed down from core/weather.py
HINT_CURRENT = "current"
HINT_FORECAST = "forecast"
HINT_GEOCODING = "geocoding"
HINT_ONECALL = "onecall"


def city_not_found(location: str) -> str:
    return f"City not found: {location}"


def map_provider_error(status: int, body: Optional[str], hint: Optional[str] = None) -> str:
    """Map a non-success provider response to a user-facing message.

    Total over all inputs: every status/body/hint combination yields a string.
    The checks run top to bottom, so a 401 whose body says "city not found"
    is still reported as a missing city.
    """
    body = body or ""

    # OpenWeather sometimes reports a missing city in the body of other codes
    if status == 404 or "city not found" in body.lower():
        return CITY_NOT_FOUND

    if status in (401, 403):
        if hint == HINT_ONECALL:
            return ONECALL_ACCESS_DENIED
        return API_KEY_INVALID

    if status == 429:
        return RATE_LIMITED

    return f"Error {status}: {body}"
