from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.errors import UNPARSEABLE_ALERTS, UNPARSEABLE_FORECAST, UNPARSEABLE_WEATHER
from core.models import Alert, CurrentWeather, Failure, ForecastDay, GeocodeResult, Success
from core.parsing import (
    bucket_by_day,
    format_alerts,
    format_current_weather,
    format_forecast,
    parse_alerts,
    parse_current_weather,
    parse_forecast,
    parse_geocode,
    select_days,
    split_timestamp,
)


def sample(dt_txt, temp, description):
    return {"dt_txt": dt_txt, "main": {"temp": temp}, "weather": [{"description": description}]}


# =============================================================================
# Forecast bucketing (first-seen wins, except noon always wins)
# =============================================================================
class TestBucketByDay:
    def test_noon_replaces_earlier_sample(self):
        buckets = bucket_by_day([("2025-07-15 09:00:00", "nine"), ("2025-07-15 12:00:00", "noon")])
        assert buckets == {"2025-07-15": "noon"}

    def test_first_seen_wins_without_noon(self):
        buckets = bucket_by_day([("2025-07-15 03:00:00", "three"), ("2025-07-15 06:00:00", "six")])
        assert buckets == {"2025-07-15": "three"}

    def test_samples_after_noon_do_not_replace_it(self):
        buckets = bucket_by_day([
            ("2025-07-15 12:00:00", "noon"),
            ("2025-07-15 15:00:00", "three pm"),
            ("2025-07-15 21:00:00", "nine pm"),
        ])
        assert buckets == {"2025-07-15": "noon"}

    def test_first_seen_is_by_arrival_not_by_hour(self):
        buckets = bucket_by_day([("2025-07-15 18:00:00", "late"), ("2025-07-15 06:00:00", "early")])
        assert buckets == {"2025-07-15": "late"}

    def test_a_second_noon_sample_replaces_the_first(self):
        buckets = bucket_by_day([("2025-07-15 12:00:00", "a"), ("2025-07-15 12:30:00", "b")])
        assert buckets == {"2025-07-15": "b"}

    def test_days_are_independent(self):
        buckets = bucket_by_day([
            ("2025-07-16 00:00:00", "16 midnight"),
            ("2025-07-15 21:00:00", "15 night"),
            ("2025-07-16 12:00:00", "16 noon"),
        ])
        assert buckets == {"2025-07-15": "15 night", "2025-07-16": "16 noon"}

    def test_select_days_sorts_and_limits(self):
        buckets = {"2025-07-17": "c", "2025-07-15": "a", "2025-07-16": "b"}
        assert select_days(buckets, 2) == ["a", "b"]
        assert select_days(buckets, 5) == ["a", "b", "c"]


@pytest.mark.parametrize(
    "dt_txt, expected",
    [
        ("2025-07-15 12:00:00", ("2025-07-15", "12")),
        ("2025-07-15 1", ("2025-07-15", "00")),
        ("2025-07", ("2025-07", "00")),
        ("", ("", "00")),
    ],
)
def test_split_timestamp(dt_txt, expected):
    assert split_timestamp(dt_txt) == expected


# =============================================================================
# Current weather
# =============================================================================
CURRENT = {
    "main": {"temp": Decimal("12.5"), "feels_like": Decimal("11.25"), "humidity": 81},
    "weather": [{"description": "light rain"}],
}


def test_parse_current_weather():
    assert parse_current_weather(CURRENT) == Success(CurrentWeather(
        temperature_c=Decimal("12.5"),
        feels_like_c=Decimal("11.25"),
        humidity_pct=81,
        description="light rain",
    ))


def test_format_current_weather():
    weather = parse_current_weather(CURRENT).value
    assert format_current_weather("London,GB", weather) == (
        "Current weather in London,GB: 12.5°C (feels 11.25°C), light rain, humidity 81%."
    )


def test_exponent_temperatures_print_in_fixed_point():
    weather = CurrentWeather(Decimal("1E+2"), Decimal("-5E-1"), 40, "clear sky")
    assert format_current_weather("Cairo,EG", weather) == (
        "Current weather in Cairo,EG: 100°C (feels -0.5°C), clear sky, humidity 40%."
    )


@pytest.mark.parametrize(
    "doc",
    [
        {},
        [],
        None,
        {"main": {"temp": 1, "feels_like": 1}, "weather": [{"description": "x"}]},
        {"main": {"temp": "warm", "feels_like": 1, "humidity": 5}, "weather": [{"description": "x"}]},
        {"main": {"temp": 1, "feels_like": 1, "humidity": Decimal("50.5")}, "weather": [{"description": "x"}]},
        {"main": {"temp": 1, "feels_like": 1, "humidity": 5}, "weather": []},
        {"main": {"temp": 1, "feels_like": 1, "humidity": 5}, "weather": [{"description": None}]},
        {"main": {"temp": True, "feels_like": 1, "humidity": 5}, "weather": [{"description": "x"}]},
    ],
)
def test_malformed_current_weather(doc):
    assert parse_current_weather(doc) == Failure(UNPARSEABLE_WEATHER)


# =============================================================================
# Forecast
# =============================================================================
def test_parse_forecast_picks_one_sample_per_day():
    doc = {"list": [
        sample("2025-07-15 09:00:00", Decimal("18.1"), "cloudy"),
        sample("2025-07-15 12:00:00", Decimal("21.4"), "sunny"),
        sample("2025-07-16 03:00:00", Decimal("14"), "mist"),
        sample("2025-07-16 06:00:00", Decimal("15"), "fog"),
    ]}
    assert parse_forecast(doc, 5) == Success([
        ForecastDay("2025-07-15", Decimal("21.4"), "sunny"),
        ForecastDay("2025-07-16", Decimal("14"), "mist"),
    ])


def test_format_forecast_single_day():
    days = [ForecastDay("2025-07-15", Decimal("21.40"), "scattered clouds")]
    assert format_forecast("Berlin,DE", 1, days) == (
        "Forecast for Berlin,DE (next 1 day(s)):\n- 2025-07-15: 21.40°C, scattered clouds"
    )


def test_format_forecast_exponent_temperature():
    days = [ForecastDay("2025-07-15", Decimal("2.5E+1"), "clear sky")]
    assert format_forecast("Berlin,DE", 1, days).endswith("- 2025-07-15: 25°C, clear sky")


def test_null_timestamp_and_description_read_as_empty():
    doc = {"list": [
        sample("2025-07-15 12:00:00", Decimal("20.5"), None),
        sample(None, 7, "rain"),
    ]}
    assert parse_forecast(doc, 5) == Success([
        ForecastDay("", Decimal("7"), "rain"),
        ForecastDay("2025-07-15", Decimal("20.5"), ""),
    ])


@pytest.mark.parametrize(
    "doc",
    [
        {},
        {"list": "nope"},
        {"list": [{"main": {"temp": 1}, "weather": [{"description": "x"}]}]},
        {"list": [sample("2025-07-15 09:00:00", None, "x")]},
        {"list": [sample("2025-07-15 09:00:00", 1, 42)]},
        {"list": [sample(12345, 1, "x")]},
        {"list": [sample("2025-07-15 09:00:00", 1, "x"), {"dt_txt": "2025-07-16 09:00:00"}]},
    ],
)
def test_malformed_forecast(doc):
    assert parse_forecast(doc, 3) == Failure(UNPARSEABLE_FORECAST)


# =============================================================================
# Alerts
# =============================================================================
def test_parse_alerts_full_entry():
    doc = {"alerts": [{
        "sender_name": "NWS Miami",
        "event": "Heat Advisory",
        "start": 1752580800,
        "end": 1752616800,
        "description": "Heat index up to 110.",
    }]}
    assert parse_alerts(doc) == Success([Alert(
        sender="NWS Miami",
        event="Heat Advisory",
        start_utc=datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc),
        end_utc=datetime(2025, 7, 15, 22, 0, tzinfo=timezone.utc),
        description="Heat index up to 110.",
    )])


def test_malformed_entries_get_defaults_instead_of_failing():
    doc = {"alerts": [
        {"event": 42, "start": "soon", "end": True},
        "not an object",
        {"event": "Flood Watch", "start": Decimal("1752580800.0")},
    ]}
    alerts = parse_alerts(doc).value
    assert alerts[0] == Alert(sender="", event="", start_utc=None, end_utc=None, description="")
    assert alerts[1] == Alert(sender="", event="", start_utc=None, end_utc=None, description="")
    assert alerts[2].event == "Flood Watch"
    assert alerts[2].start_utc == datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("doc", [{}, {"alerts": None}, {"alerts": {}}, {"alerts": []}])
def test_no_alerts(doc):
    assert parse_alerts(doc) == Success([])
    assert format_alerts("Miami,US", parse_alerts(doc).value) == "No active alerts for Miami,US."


def test_alerts_document_must_be_an_object():
    assert parse_alerts([]) == Failure(UNPARSEABLE_ALERTS)


def test_format_alerts():
    alerts = [
        Alert("NWS Miami", "Heat Advisory",
              datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc),
              datetime(2025, 7, 15, 22, 0, tzinfo=timezone.utc),
              "Heat index up to 110."),
        Alert("", "Flood Watch", None, None, ""),
    ]
    assert format_alerts("Miami,US", alerts) == (
        "Alerts for Miami,US:\n"
        "• Heat Advisory (NWS Miami)\n"
        "  from 2025-07-15 12:00:00Z to 2025-07-15 22:00:00Z\n"
        "  Heat index up to 110.\n"
        "\n"
        "• Flood Watch ()\n"
        "  from unknown to unknown"
    )


# =============================================================================
# Geocoding
# =============================================================================
def test_parse_geocode_first_candidate():
    doc = [
        {"name": "Miami", "country": "US", "lat": Decimal("25.7741728"), "lon": Decimal("-80.19362")},
        {"name": "Miami", "country": "CA", "lat": 49, "lon": -98},
    ]
    assert parse_geocode(doc) == Success(GeocodeResult(25.7741728, -80.19362, "Miami,US"))


def test_parse_geocode_empty():
    assert parse_geocode([]) == Success(None)


@pytest.mark.parametrize("doc", [{}, [{"name": "Miami", "lat": 1, "lon": 2}], [{"name": "X", "country": "Y", "lat": "1", "lon": 2}]])
def test_parse_geocode_malformed(doc):
    assert isinstance(parse_geocode(doc), Failure)
