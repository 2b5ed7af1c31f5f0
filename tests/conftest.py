"""
Shared fixtures: a small Open-Meteo hourly response for Chicago.
"""

import copy

import pytest

MOCK_FORECAST = {
    "latitude": 40.6936,
    "longitude": 89.589,
    "generationtime_ms": 0.123,
    "utc_offset_seconds": -21600,
    "timezone": "America/Chicago",
    "timezone_abbreviation": "CST",
    "elevation": 150.0,
    "hourly_units": {
        "time":                      "iso8601",
        "temperature_2m":            "°C",
        "relative_humidity_2m":      "%",
        "apparent_temperature":      "°C",
        "precipitation_probability": "%",
        "precipitation":             "mm",
        "rain":                      "mm",
        "showers":                   "mm",
        "snowfall":                  "cm",
        "weather_code":              "wmo code",
        "visibility":                "m",
    },
    "hourly": {
        "time":                      ["2024-01-01T00:00", "2024-01-01T01:00", "2024-01-01T02:00"],
        "temperature_2m":            [-5.0,               -5.4,               -6.1],
        "relative_humidity_2m":      [80,                 82,                 85],
        "apparent_temperature":      [-9.8,               -10.2,              -11.0],
        "precipitation_probability": [10,                 15,                 40],
        "precipitation":             [0.0,                0.0,                0.3],
        "rain":                      [0.0,                0.0,                0.0],
        "showers":                   [0.0,                0.0,                0.0],
        "snowfall":                  [0.0,                0.0,                0.21],
        "weather_code":              [3,                  3,                  71],
        "visibility":                [24140.0,            20000.0,            8500.0],
    },
}

# 2024-01-01T00:00 in Chicago (CST, UTC-6) is 06:00 UTC
MIDNIGHT_CHICAGO = 1704088800


@pytest.fixture
def forecast_document():
    """A fresh copy of MOCK_FORECAST that tests may mutate."""
    return copy.deepcopy(MOCK_FORECAST)


def single_sample(document, time, **values):
    """Shrink `document` to one hourly sample at `time`, overriding any value fields."""
    for name, column in document["hourly"].items():
        document["hourly"][name] = column[:1]
    document["hourly"]["time"] = [time]
    for name, value in values.items():
        document["hourly"][name] = [value]
    return document
