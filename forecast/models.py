"""
models.py — Value objects produced by the forecast transformer.

  Envelope     : scalar metadata of one response (location, timezone, ...)
  HourlyUnits  : unit string per hourly field, keyed by the API field names
  Observation  : one decoded hourly sample
  WeatherData  : envelope + units + epoch-second → Observation mapping
"""

from dataclasses import dataclass, field

# API field names of the hourly block, in response order
HOURLY_FIELDS = (
    "time",
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "visibility",
)


@dataclass(frozen=True)
class Envelope:
    latitude: float  # degrees
    longitude: float  # degrees
    generationtime_ms: float
    utc_offset_seconds: float
    timezone: str  # IANA name, e.g. "America/Chicago"
    timezone_abbreviation: str  # e.g. "CST"
    elevation: float = 0.0  # metres; the only optional envelope field


@dataclass(frozen=True)
class HourlyUnits:
    time: str  # "iso8601"
    temperature_2m: str
    relative_humidity_2m: str
    apparent_temperature: str
    precipitation_probability: str
    precipitation: str
    rain: str
    showers: str
    snowfall: str
    weather_code: str  # "wmo code"
    visibility: str


@dataclass(frozen=True)
class Observation:
    """One hourly sample. `time` is the local timestamp exactly as received."""

    time: str
    temperature: float
    relative_humidity: int  # percent
    apparent_temperature: float
    precipitation_probability: float  # percent
    precipitation: float
    rain: float
    showers: float
    snowfall: float
    weather_code: int  # WMO code
    visibility: float  # metres


@dataclass(frozen=True)
class WeatherData:
    """
    Result of one parse call. Read-only after construction.

    `hourly` maps Unix epoch seconds to observations and has no defined order;
    use timestamps() or observations() for chronological access.
    `ambiguous_times` and `skipped` are diagnostics and do not take part in
    equality.
    """

    envelope: Envelope
    hourly_units: HourlyUnits
    hourly: dict = field(default_factory=dict)
    ambiguous_times: tuple = field(default=(), compare=False)
    skipped: tuple = field(default=(), compare=False)

    def timestamps(self) -> list[int]:
        return sorted(self.hourly)

    def observations(self) -> list[tuple[int, Observation]]:
        return [(epoch, self.hourly[epoch]) for epoch in self.timestamps()]

    def __len__(self) -> int:
        return len(self.hourly)
