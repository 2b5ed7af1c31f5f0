"""
transform.py — Parse a raw Open-Meteo hourly forecast into WeatherData.

Stages, each aborting the parse on failure:
  envelope → hourly_units → hourly arrays → timezone → per-position decode

Produces:
  - weather : WeatherData keyed by Unix epoch second
  - hourly_df: one row per observation, in chronological order
"""

import json
import logging

import pandas as pd

from forecast.coerce import optional_float, require_float, require_object, require_str
from forecast.errors import SampleError, StructuralError
from forecast.models import Envelope, WeatherData
from forecast.observation import HourlyArrays, decode_observation
from forecast.timeresolve import resolve_timezone
from forecast.units import parse_units

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger(__name__)

OBSERVATION_COLUMNS = [
    "time",
    "temperature",
    "relative_humidity",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "visibility",
]


def parse_envelope(document: dict) -> Envelope:
    envelope = Envelope(
        latitude=require_float(document, "latitude"),
        longitude=require_float(document, "longitude"),
        generationtime_ms=require_float(document, "generationtime_ms"),
        utc_offset_seconds=require_float(document, "utc_offset_seconds"),
        timezone=require_str(document, "timezone"),
        timezone_abbreviation=require_str(document, "timezone_abbreviation"),
        elevation=optional_float(document, "elevation", 0.0),
    )
    log.debug("Envelope: %s", envelope)
    return envelope


def parse_forecast(document, skip_invalid: bool = False) -> WeatherData:
    """
    Transform a decoded forecast document into WeatherData.

    Parameters
    ----------
    document : dict
        JSON object returned by the forecast endpoint.
    skip_invalid : bool
        By default the first undecodable position aborts the parse. When True,
        such positions are left out and their errors are kept on
        WeatherData.skipped instead.

    Raises
    ------
    StructuralError
        If the envelope, units or arrays are malformed or the timezone is unknown.
    SampleError
        If a position cannot be decoded and skip_invalid is False.
    """
    if not isinstance(document, dict):
        raise StructuralError("document", "expected a JSON object")

    envelope = parse_envelope(document)
    units = parse_units(require_object(document, "hourly_units"))
    arrays = HourlyArrays.from_hourly(require_object(document, "hourly"))
    tz = resolve_timezone(envelope.timezone, envelope.timezone_abbreviation)

    hourly = {}
    ambiguous = []
    skipped = []
    for position in range(len(arrays)):
        try:
            sample = decode_observation(position, arrays, tz)
        except SampleError as exc:
            if not skip_invalid:
                raise
            log.warning("Skipping sample: %s", exc)
            skipped.append(exc)
            continue
        if sample.ambiguous:
            ambiguous.append(sample.observation.time)
        hourly[sample.epoch] = sample.observation

    log.info(
        "Parsed %d hourly observations for (%s, %s)",
        len(hourly), envelope.latitude, envelope.longitude,
    )
    return WeatherData(
        envelope=envelope,
        hourly_units=units,
        hourly=hourly,
        ambiguous_times=tuple(ambiguous),
        skipped=tuple(skipped),
    )


def parse_forecast_text(text: str, skip_invalid: bool = False) -> WeatherData:
    """Decode JSON text and parse it; invalid JSON is a StructuralError."""
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise StructuralError("document", f"invalid JSON: {exc}") from exc
    return parse_forecast(document, skip_invalid=skip_invalid)


def to_dataframe(weather: WeatherData) -> pd.DataFrame:
    """One row per observation, sorted by epoch, with a UTC valid_time column."""
    epochs = weather.timestamps()
    rows = [
        {column: getattr(weather.hourly[epoch], column) for column in OBSERVATION_COLUMNS}
        for epoch in epochs
    ]
    hourly_df = pd.DataFrame(rows, columns=OBSERVATION_COLUMNS)
    hourly_df.insert(0, "epoch", pd.Series(epochs, dtype="int64"))
    hourly_df.insert(1, "valid_time", pd.to_datetime(hourly_df["epoch"], unit="s", utc=True))
    hourly_df["latitude"] = weather.envelope.latitude
    hourly_df["longitude"] = weather.envelope.longitude
    return hourly_df


def transform(raw_data: dict, skip_invalid: bool = False) -> tuple[WeatherData, pd.DataFrame]:
    """
    Transform raw API response into (weather, hourly_df).

    Returns
    -------
    tuple[WeatherData, pd.DataFrame]
    """
    weather = parse_forecast(raw_data, skip_invalid=skip_invalid)
    hourly_df = to_dataframe(weather)
    log.info("Transformed %d rows into hourly_df", len(hourly_df))
    return weather, hourly_df


if __name__ == "__main__":
    from forecast.extract import extract
    from forecast.report import format_envelope, format_table

    weather, _ = transform(extract())
    print(format_envelope(weather))
    print(format_table(weather))
