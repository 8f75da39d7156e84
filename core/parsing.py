# =============================================================================
# core/parsing.py  —  Response Parser / Aggregator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns decoded OpenWeather JSON into our dataclasses, and those dataclasses
#   into the short text the agent receives.
#
#     parse_current_weather  /weather      → CurrentWeather
#     parse_forecast         /forecast     → list[ForecastDay] (one per day)
#     parse_alerts           /onecall      → list[Alert]
#     parse_geocode          /geo/direct   → GeocodeResult | None
#
#   Every parse_* returns a Success or a Failure; a surprising document shape
#   becomes an "Unable to parse…" message, never an exception in the caller.
#
# STRICT vs TOLERANT:
#   Current weather and forecast are STRICT: a missing temperature means the
#   whole answer is wrong, so we refuse it.  Alerts are TOLERANT: the provider
#   omits fields freely, and one odd alert must not hide the others.
#   In between: a forecast sample may carry a null dt_txt or description,
#   which reads as "" instead of failing the whole forecast.
# =============================================================================

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional, TypeVar

from core.errors import UNPARSEABLE_ALERTS, UNPARSEABLE_FORECAST, UNPARSEABLE_WEATHER
from core.models import (
    Alert,
    CurrentWeather,
    Failure,
    ForecastDay,
    GeocodeResult,
    ProviderOutcome,
    Success,
)

T = TypeVar("T")

NOON = "12"


class _ShapeError(ValueError):
    """The document doesn't have the shape we need."""


# -----------------------------------------------------------------------------
# Strict accessors: raise _ShapeError on anything unexpected
# -----------------------------------------------------------------------------
def _field(obj: Any, name: str) -> Any:
    if not isinstance(obj, dict) or name not in obj:
        raise _ShapeError(f"missing field {name!r}")
    return obj[name]


def _number(value: Any, name: str) -> Decimal:
    # bool is an int subclass; true/false is never a temperature
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise _ShapeError(f"{name} is not a number")
    return Decimal(value)


def _integer(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _ShapeError(f"{name} is not an integer")
    return value


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise _ShapeError(f"{name} is not a string")
    return value


def _string_or_empty(value: Any, name: str) -> str:
    # JSON null reads as ""; any other non-string is still a shape error
    return "" if value is None else _string(value, name)


def _first_description(doc: Any, nullable: bool = False) -> str:
    weather = _field(doc, "weather")
    if not isinstance(weather, list) or not weather:
        raise _ShapeError("weather list is empty")
    read = _string_or_empty if nullable else _string
    return read(_field(weather[0], "description"), "weather[0].description")


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------
def _degrees(value: Decimal) -> str:
    """Fixed-point text for a temperature: 1E+2 → "100", 12.50 → "12.50"."""
    return f"{value:f}"


# -----------------------------------------------------------------------------
# Tolerant accessors: a default instead of an error
# -----------------------------------------------------------------------------
def _get_str(obj: dict, name: str) -> str:
    value = obj.get(name)
    return value if isinstance(value, str) else ""


def _get_int(obj: dict, name: str) -> int:
    value = obj.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        return 0
    if isinstance(value, Decimal) and not value.is_finite():
        return 0
    return int(value)


# =============================================================================
# Current weather
# =============================================================================
def parse_current_weather(doc: Any) -> ProviderOutcome:
    try:
        main = _field(doc, "main")
        weather = CurrentWeather(
            temperature_c=_number(_field(main, "temp"), "main.temp"),
            feels_like_c=_number(_field(main, "feels_like"), "main.feels_like"),
            humidity_pct=_integer(_field(main, "humidity"), "main.humidity"),
            description=_first_description(doc),
        )
    except _ShapeError:
        return Failure(UNPARSEABLE_WEATHER)
    return Success(weather)


def format_current_weather(location: str, weather: CurrentWeather) -> str:
    return (
        f"Current weather in {location}: {_degrees(weather.temperature_c)}°C "
        f"(feels {_degrees(weather.feels_like_c)}°C), {weather.description}, "
        f"humidity {weather.humidity_pct}%."
    )


# =============================================================================
# Forecast bucketing
# =============================================================================
# The /forecast endpoint returns a flat list of 3-hour samples, each with a
# "dt_txt" like "2025-07-15 12:00:00".  We want ONE line per day.
#
# THE RULE (pinned by tests, do not "improve" it):
#   - The first sample seen for a date is kept…
#   - …unless a later sample for that date is at hour "12", which replaces it.
#   So noon always wins, but among non-noon samples the FIRST one wins,
#   not the closest to noon.
# =============================================================================
def split_timestamp(dt_txt: str) -> tuple[str, str]:
    """Split "YYYY-MM-DD HH:MM:SS" into (date, hour) by position."""
    date = dt_txt[:10] if len(dt_txt) >= 10 else dt_txt
    hour = dt_txt[11:13] if len(dt_txt) >= 13 else "00"
    return date, hour


def bucket_by_day(samples: Iterable[tuple[str, T]]) -> dict[str, T]:
    """Keep one item per date from (dt_txt, item) pairs, in arrival order."""
    buckets: dict[str, T] = {}
    for dt_txt, item in samples:
        date, hour = split_timestamp(dt_txt)
        if date not in buckets or hour == NOON:
            buckets[date] = item
    return buckets


def select_days(buckets: dict[str, T], days: int) -> list[T]:
    """The first `days` buckets in date order (ISO dates sort chronologically)."""
    return [buckets[date] for date in sorted(buckets)[:days]]


def parse_forecast(doc: Any, days: int) -> ProviderOutcome:
    try:
        entries = _field(doc, "list")
        if not isinstance(entries, list):
            raise _ShapeError("list is not an array")

        samples = []
        for entry in entries:
            dt_txt = _string_or_empty(_field(entry, "dt_txt"), "dt_txt")
            date, _ = split_timestamp(dt_txt)
            samples.append((dt_txt, ForecastDay(
                date=date,
                temperature_c=_number(_field(_field(entry, "main"), "temp"), "main.temp"),
                description=_first_description(entry, nullable=True),
            )))
    except _ShapeError:
        return Failure(UNPARSEABLE_FORECAST)

    return Success(select_days(bucket_by_day(samples), days))


def format_forecast(location: str, days: int, forecast: list[ForecastDay]) -> str:
    lines = [f"{day.date}: {_degrees(day.temperature_c)}°C, {day.description}" for day in forecast]
    return f"Forecast for {location} (next {days} day(s)):\n- " + "\n- ".join(lines)


# =============================================================================
# Alerts
# =============================================================================
def _utc(timestamp: int) -> Optional[datetime]:
    if timestamp <= 0:
        return None
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _alert_from(entry: Any) -> Alert:
    entry = entry if isinstance(entry, dict) else {}
    return Alert(
        sender=_get_str(entry, "sender_name"),
        event=_get_str(entry, "event"),
        start_utc=_utc(_get_int(entry, "start")),
        end_utc=_utc(_get_int(entry, "end")),
        description=_get_str(entry, "description"),
    )


def parse_alerts(doc: Any) -> ProviderOutcome:
    """Extract alerts; an absent or empty "alerts" field is an empty list."""
    if not isinstance(doc, dict):
        return Failure(UNPARSEABLE_ALERTS)
    alerts = doc.get("alerts")
    if not isinstance(alerts, list):
        return Success([])
    return Success([_alert_from(entry) for entry in alerts])


def _format_time(moment: Optional[datetime]) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%SZ") if moment else "unknown"


def format_alert(alert: Alert) -> str:
    text = (
        f"• {alert.event} ({alert.sender})\n"
        f"  from {_format_time(alert.start_utc)} to {_format_time(alert.end_utc)}\n"
        f"  {alert.description}"
    )
    return text.strip()


def format_alerts(resolved_name: str, alerts: list[Alert]) -> str:
    if not alerts:
        return f"No active alerts for {resolved_name}."
    return f"Alerts for {resolved_name}:\n" + "\n\n".join(format_alert(a) for a in alerts)


# =============================================================================
# Geocoding
# =============================================================================
def parse_geocode(doc: Any) -> ProviderOutcome:
    """Success(GeocodeResult), or Success(None) when the provider found nothing."""
    try:
        if not isinstance(doc, list):
            raise _ShapeError("geocoding response is not an array")
        if not doc:
            return Success(None)
        first = doc[0]
        name = _string(_field(first, "name"), "name")
        country = _string(_field(first, "country"), "country")
        result = GeocodeResult(
            latitude=float(_number(_field(first, "lat"), "lat")),
            longitude=float(_number(_field(first, "lon"), "lon")),
            resolved_name=f"{name},{country}",
        )
    except _ShapeError as exc:
        return Failure(str(exc))
    return Success(result)
