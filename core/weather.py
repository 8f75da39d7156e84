# =============================================================================
# core/weather.py  —  The Provider Gateway (public operations)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Exposes the three operations the MCP tools call:
#
#     get_current_weather(city, country_code)        → str
#     get_forecast(city, country_code, days=3)       → str
#     get_alerts(city, country_code)                 → str
#
#   Each one returns a single, ready-to-read string: a weather report OR a
#   plain-English explanation of what went wrong.  Never an exception, with
#   exactly one exception to that rule: a missing API key (ConfigurationError),
#   which is a deployment defect the agent cannot fix.
#
# THE PIPELINE (every operation is the same short chain):
#
#     validate city → require key → build URL → send → parse → format
#                                                 │        │
#                                     Failure? ───┴────────┴──→ return message
#
#   Alerts inserts a whole geocoding round trip before its own "send":
#
#     validate → key → resolve_location → alerts URL → send → parse → format
#
#   Each stage returns Success/Failure (core/models.py) and we bail out on the
#   first Failure.  No nesting, and every stage is testable on its own.
#
# NO STATE:
#   Nothing here is cached between calls.  Settings are read at call time
#   (or passed in, which is what the tests do).
# =============================================================================

import logging
from typing import Optional

from core import transport
from core.config import WeatherSettings, load_settings, require_api_key
from core.errors import (
    HINT_CURRENT,
    HINT_FORECAST,
    HINT_ONECALL,
    LOCATION_UNRESOLVED,
    city_not_found,
)
from core.geocoding import resolve_location
from core.models import Failure, Location
from core.parsing import (
    format_alerts,
    format_current_weather,
    format_forecast,
    parse_alerts,
    parse_current_weather,
    parse_forecast,
)
from core.urls import (
    alerts_url,
    clamp_days,
    current_weather_url,
    forecast_url,
    validate_city,
)

logger = logging.getLogger(__name__)


def get_current_weather(
    city: str,
    country_code: Optional[str] = None,
    *,
    settings: Optional[WeatherSettings] = None,
) -> str:
    """Current conditions for a city, e.g. "Current weather in London,GB: 12.5°C …".

    Args:
        city: City name.  Blank → "City must not be empty.", no network call.
        country_code: Optional ISO country code ("GB").
        settings: Provider settings; read from the environment when omitted.

    Raises:
        ConfigurationError: No API key is configured.
    """
    reason = validate_city(city)
    if reason:
        return reason

    settings = settings or load_settings()
    api_key = require_api_key(settings)
    location = Location.build(city, country_code)

    outcome = transport.send(current_weather_url(location, api_key, settings), hint=HINT_CURRENT)
    if isinstance(outcome, Failure):
        return outcome.message

    parsed = parse_current_weather(outcome.value)
    if isinstance(parsed, Failure):
        logger.warning("Failed to parse current weather response for %s", location)
        return parsed.message

    return format_current_weather(location.query, parsed.value)


def get_forecast(
    city: str,
    country_code: Optional[str] = None,
    days: int = 3,
    *,
    settings: Optional[WeatherSettings] = None,
) -> str:
    """A one-line-per-day forecast for the next `days` days (clamped to 1–5).

    Each day is represented by a single 3-hour sample: the noon sample when
    there is one, otherwise the first sample of that day.
    """
    reason = validate_city(city)
    if reason:
        return reason

    settings = settings or load_settings()
    api_key = require_api_key(settings)
    days = clamp_days(days)
    location = Location.build(city, country_code)

    outcome = transport.send(forecast_url(location, api_key, settings), hint=HINT_FORECAST)
    if isinstance(outcome, Failure):
        return outcome.message

    parsed = parse_forecast(outcome.value, days)
    if isinstance(parsed, Failure):
        logger.warning("Failed to parse forecast response for %s", location)
        return parsed.message

    return format_forecast(location.query, days, parsed.value)


def get_alerts(
    city: str,
    country_code: Optional[str] = None,
    *,
    settings: Optional[WeatherSettings] = None,
) -> str:
    """Active government weather alerts via One Call 3.0.

    Needs two calls: geocode the city, then fetch alerts by coordinates.
    One Call 3.0 is a separate subscription; a 401/403 there is reported as
    a subscription problem rather than a bad key.
    """
    reason = validate_city(city)
    if reason:
        return reason

    settings = settings or load_settings()
    api_key = require_api_key(settings)
    location = Location.build(city, country_code)

    # Stage 1: where is it?
    geo = resolve_location(location, api_key, settings)
    if isinstance(geo, Failure):
        logger.info("Geocoding failed for %s: %s", location, geo.message)
        if geo.not_found:
            return city_not_found(location.query)
        return LOCATION_UNRESOLVED
    place = geo.value

    # Stage 2: what's active there?
    url = alerts_url(place.latitude, place.longitude, api_key, settings)
    outcome = transport.send(url, hint=HINT_ONECALL)
    if isinstance(outcome, Failure):
        return outcome.message

    parsed = parse_alerts(outcome.value)
    if isinstance(parsed, Failure):
        logger.warning("Failed to parse alerts response for %s", place.resolved_name)
        return parsed.message

    return format_alerts(place.resolved_name, parsed.value)
