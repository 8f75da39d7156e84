# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# These dataclasses define the *shape* of every value that flows through the
# weather gateway.  They carry almost no behavior. They are structured bags of
# data that each stage of the pipeline hands to the next.
#
# LIFETIME:
#   Every model here is rebuilt on every tool call.  Nothing is cached and
#   nothing is persisted.  The only process-wide state is the configuration
#   (see core/config.py), and that is read-only after startup.
#
# THE OUTCOME TYPE:
#   Success / Failure is the thread that runs through the whole pipeline.
#   Each stage (transport, geocoding, parsing) returns one of them, and the
#   operation in core/weather.py exits early on the first Failure.  That keeps
#   the geocode-then-fetch chain flat instead of a pyramid of if/else.
# =============================================================================

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union


# -----------------------------------------------------------------------------
# Location: what the caller asked about
# -----------------------------------------------------------------------------
# OpenWeather accepts "London" or "London,GB" as its `q` parameter.  The same
# string doubles as the display name in every message we return.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Location:
    """A trimmed city with an optional ISO country code."""

    city: str                          # "London" (never empty once built)
    country_code: Optional[str] = None  # "GB", or None when not given

    @classmethod
    def build(cls, city: str, country_code: Optional[str] = None) -> "Location":
        code = (country_code or "").strip()
        return cls(city=city.strip(), country_code=code or None)

    @property
    def query(self) -> str:
        """The canonical "city" or "city,CC" string."""
        if self.country_code:
            return f"{self.city},{self.country_code}"
        return self.city

    def __str__(self) -> str:
        return self.query


# -----------------------------------------------------------------------------
# Success / Failure: the outcome of one pipeline stage
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    """A stage finished; `value` is the decoded document or parsed model."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """A stage failed; `message` is already safe to show the caller."""

    message: str
    status_code: Optional[int] = None  # None for timeouts / network errors
    not_found: bool = False            # Set by geocoding for unknown places


ProviderOutcome = Union[Success, Failure]


# -----------------------------------------------------------------------------
# CurrentWeather: what /weather gives us
# -----------------------------------------------------------------------------
@dataclass
class CurrentWeather:
    temperature_c: Decimal
    feels_like_c: Decimal
    humidity_pct: int
    description: str                   # e.g., "light rain"


# -----------------------------------------------------------------------------
# ForecastDay: one representative sample per calendar day
# -----------------------------------------------------------------------------
# The provider returns eight 3-hour samples per day.  We keep exactly one,
# chosen by core.parsing.bucket_by_day.
# -----------------------------------------------------------------------------
@dataclass
class ForecastDay:
    date: str                          # "2025-07-15"
    temperature_c: Decimal
    description: str


# -----------------------------------------------------------------------------
# Alert: one severe-weather warning from One Call 3.0
# -----------------------------------------------------------------------------
@dataclass
class Alert:
    """A government weather alert.  Missing fields are empty, not errors."""

    sender: str                        # "NWS Miami"
    event: str                         # "Heat Advisory"
    start_utc: Optional[datetime]      # None when the provider sent 0/nothing
    end_utc: Optional[datetime]
    description: str


# -----------------------------------------------------------------------------
# GeocodeResult: the alerts path needs coordinates, not a city name
# -----------------------------------------------------------------------------
@dataclass
class GeocodeResult:
    latitude: float
    longitude: float
    resolved_name: str                 # Provider's "name,country", e.g. "Miami,US"
