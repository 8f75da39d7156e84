# =============================================================================
# core/urls.py  —  Request Builder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns (location, operation parameters, settings) into the absolute
#   OpenWeather URL for each endpoint we call:
#
#     current   {base}/weather?q=…&appid=…&units=…&lang=…
#     forecast  {base}/forecast?q=…&appid=…&units=…&lang=…
#     geocode   {geo}/direct?q=…&limit=1&appid=…
#     alerts    {onecall}?lat=…&lon=…&appid=…&units=…&lang=…
#
# DEFAULTS, IN PRIORITY ORDER:
#   explicit per-call value  >  configured value  >  hard-coded fallback
#   The hard-coded fallbacks already live in WeatherSettings, so "configured"
#   and "fallback" collapse into one lookup here.
#
# NOTE: the location is percent-encoded with NO safe characters, so the
# comma in "London,GB" travels as %2C.
# =============================================================================

from typing import Optional
from urllib.parse import quote

from core.config import WeatherSettings
from core.models import Location

VALIDATION_MESSAGE = "City must not be empty."

MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 5


def validate_city(city: Optional[str]) -> Optional[str]:
    """Return the validation message for a blank city, or None if it's fine."""
    if city is None or not city.strip():
        return VALIDATION_MESSAGE
    return None


def clamp_days(days: int) -> int:
    """Clamp a forecast horizon into the 1–5 days the free tier supports."""
    return max(MIN_FORECAST_DAYS, min(MAX_FORECAST_DAYS, days))


def _encode(location: Location) -> str:
    return quote(location.query, safe="")


def _format_params(
    api_key: str,
    settings: WeatherSettings,
    units: Optional[str],
    lang: Optional[str],
) -> str:
    return f"appid={api_key}&units={units or settings.units}&lang={lang or settings.lang}"


def current_weather_url(
    location: Location,
    api_key: str,
    settings: WeatherSettings,
    *,
    units: Optional[str] = None,
    lang: Optional[str] = None,
) -> str:
    return (
        f"{settings.base_url}/weather?q={_encode(location)}"
        f"&{_format_params(api_key, settings, units, lang)}"
    )


def forecast_url(
    location: Location,
    api_key: str,
    settings: WeatherSettings,
    *,
    units: Optional[str] = None,
    lang: Optional[str] = None,
) -> str:
    return (
        f"{settings.base_url}/forecast?q={_encode(location)}"
        f"&{_format_params(api_key, settings, units, lang)}"
    )


def geocode_url(location: Location, api_key: str, settings: WeatherSettings) -> str:
    return f"{settings.geo_url}/direct?q={_encode(location)}&limit=1&appid={api_key}"


def alerts_url(
    latitude: float,
    longitude: float,
    api_key: str,
    settings: WeatherSettings,
    *,
    units: Optional[str] = None,
    lang: Optional[str] = None,
) -> str:
    return (
        f"{settings.onecall_url}?lat={latitude}&lon={longitude}"
        f"&{_format_params(api_key, settings, units, lang)}"
    )
