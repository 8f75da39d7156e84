# =============================================================================
# core/config.py  —  Provider Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the OpenWeather settings (API key, base URLs, units, language) from
#   the environment and hands them to the gateway as one frozen object.
#
# WHERE THE VALUES COME FROM:
#   WEATHER_API_KEY       required, no key means no calls
#   WEATHER_BASE_URL      default https://api.openweathermap.org/data/2.5
#   WEATHER_UNITS         default "metric"
#   WEATHER_LANG          default "en"
#   WEATHER_GEO_URL       default https://api.openweathermap.org/geo/1.0
#   WEATHER_ONECALL_URL   default https://api.openweathermap.org/data/3.0/onecall
#
#   load_settings() only reads os.environ.  The server entry point loads a
#   .env file from the working directory once, at start-up (python-dotenv);
#   real environment variables win over it.
#
# THE MISSING-KEY RULE:
#   A missing key is a deployment defect, not something the agent can fix
#   by rephrasing its question.  So require_api_key() RAISES, while every
#   per-call problem (bad city, 404, timeout…) comes back as plain text.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_GEO_URL = "https://api.openweathermap.org/geo/1.0"
DEFAULT_ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
DEFAULT_UNITS = "metric"
DEFAULT_LANG = "en"


class ConfigurationError(RuntimeError):
    """Raised when the gateway is deployed without a usable configuration."""


@dataclass(frozen=True)
class WeatherSettings:
    """Process-wide provider settings.  Read-only once built."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    units: str = DEFAULT_UNITS
    lang: str = DEFAULT_LANG
    geo_url: str = DEFAULT_GEO_URL
    onecall_url: str = DEFAULT_ONECALL_URL


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def load_settings() -> WeatherSettings:
    """Build settings from the current environment.

    Blank variables count as unset, so `WEATHER_UNITS=` falls back to
    "metric" instead of sending an empty `units=` to the provider.
    """
    return WeatherSettings(
        api_key=_env("WEATHER_API_KEY"),
        base_url=(_env("WEATHER_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        units=_env("WEATHER_UNITS") or DEFAULT_UNITS,
        lang=_env("WEATHER_LANG") or DEFAULT_LANG,
        geo_url=(_env("WEATHER_GEO_URL") or DEFAULT_GEO_URL).rstrip("/"),
        onecall_url=_env("WEATHER_ONECALL_URL") or DEFAULT_ONECALL_URL,
    )


def require_api_key(settings: WeatherSettings) -> str:
    """Return the API key or fail before any network activity."""
    key = (settings.api_key or "").strip()
    if not key:
        logger.warning("Weather API key not configured (WEATHER_API_KEY).")
        raise ConfigurationError("Weather API key is not set (WEATHER_API_KEY).")
    return key
