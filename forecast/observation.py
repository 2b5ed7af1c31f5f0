"""
observation.py — Decode one hourly position out of the parallel arrays.

The `hourly` block stores one array per quantity, all indexed by the same
position. decode_observation() joins them for a single position, so bounds and
type checks live in one place and fail with a SampleError for that position.
"""

from dataclasses import dataclass
from typing import NamedTuple

from forecast.coerce import (
    CoercionError,
    require_array,
    to_float,
    to_int,
    to_str,
    to_truncated_int,
)
from forecast.errors import NonexistentTimeError, SampleError
from forecast.models import HOURLY_FIELDS, Observation
from forecast.timeresolve import InvalidTimestamp, NonexistentLocalTime, to_epoch

# API field → (Observation attribute, coercion)
VALUE_FIELDS = (
    ("temperature_2m", "temperature", to_float),
    ("relative_humidity_2m", "relative_humidity", to_truncated_int),
    ("apparent_temperature", "apparent_temperature", to_float),
    ("precipitation_probability", "precipitation_probability", to_float),
    ("precipitation", "precipitation", to_float),
    ("rain", "rain", to_float),
    ("showers", "showers", to_float),
    ("snowfall", "snowfall", to_float),
    ("weather_code", "weather_code", to_int),
    ("visibility", "visibility", to_float),
)


@dataclass(frozen=True)
class HourlyArrays:
    """The eleven arrays of the `hourly` block. Lengths are checked per position."""

    time: list
    temperature_2m: list
    relative_humidity_2m: list
    apparent_temperature: list
    precipitation_probability: list
    precipitation: list
    rain: list
    showers: list
    snowfall: list
    weather_code: list
    visibility: list

    @classmethod
    def from_hourly(cls, hourly: dict) -> "HourlyArrays":
        """Raises StructuralError if an array is missing or is not a JSON array."""
        return cls(**{
            name: require_array(hourly, name, where="hourly") for name in HOURLY_FIELDS
        })

    def __len__(self) -> int:
        return len(self.time)


class DecodedSample(NamedTuple):
    epoch: int
    observation: Observation
    ambiguous: bool


def _element(arrays: HourlyArrays, name: str, position: int):
    values = getattr(arrays, name)
    if position >= len(values):
        raise SampleError(position, name, f"array has only {len(values)} elements")
    return values[position]


def decode_observation(position: int, arrays: HourlyArrays, tz) -> DecodedSample:
    """
    Decode the sample at `position`.

    Raises
    ------
    SampleError
        Naming the first field (in response order) that is out of range,
        null or mistyped at this position.
    NonexistentTimeError
        If the local time falls in a daylight-saving gap.
    """
    raw_time = _element(arrays, "time", position)
    try:
        timestamp = to_str(raw_time)
        instant = to_epoch(timestamp, tz)
    except NonexistentLocalTime as exc:
        raise NonexistentTimeError(position, "time", str(exc)) from exc
    except (CoercionError, InvalidTimestamp) as exc:
        raise SampleError(position, "time", str(exc)) from exc

    values = {}
    for name, attr, convert in VALUE_FIELDS:
        raw = _element(arrays, name, position)
        try:
            values[attr] = convert(raw)
        except CoercionError as exc:
            raise SampleError(position, name, str(exc)) from exc

    return DecodedSample(
        instant.epoch, Observation(time=timestamp, **values), instant.ambiguous
    )
