"""
serialize.py — Render WeatherData back into the response document shape.

The output parses back into an equal WeatherData, but is not byte-identical to
the original response (key order, number formatting).
"""

import json
import logging
from dataclasses import asdict

from forecast.errors import SerializationError
from forecast.models import HOURLY_FIELDS, WeatherData
from forecast.observation import VALUE_FIELDS

log = logging.getLogger(__name__)


def to_document(weather: WeatherData) -> dict:
    """Return a JSON-ready dict; hourly arrays are in chronological order."""
    observations = [observation for _, observation in weather.observations()]
    hourly = {"time": [observation.time for observation in observations]}
    for name, attr, _ in VALUE_FIELDS:
        hourly[name] = [getattr(observation, attr) for observation in observations]

    document = asdict(weather.envelope)
    document["hourly_units"] = asdict(weather.hourly_units)
    document["hourly"] = {name: hourly[name] for name in HOURLY_FIELDS}
    return document


def to_json(weather: WeatherData, indent: int | None = None) -> str:
    """
    Serialize WeatherData to JSON text.

    Raises
    ------
    SerializationError
        If the aggregate holds values JSON cannot represent (NaN, Infinity).
    """
    try:
        return json.dumps(to_document(weather), indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        log.error("Failed to serialize weather data to JSON: %s", exc)
        raise SerializationError(f"cannot serialize weather data: {exc}") from exc
