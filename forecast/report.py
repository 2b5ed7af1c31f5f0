"""
report.py — Plain-text rendering of WeatherData for terminals and logs.
"""

from forecast.models import WeatherData

# (header label, unit field, Observation attribute, width, number format)
_COLUMNS = (
    ("Time", "time", "time", 18, None),
    ("Temperature", "temperature_2m", "temperature", 18, ".2f"),
    ("Rel. Humidity", "relative_humidity_2m", "relative_humidity", 22, "d"),
    ("Appr. Temperature", "apparent_temperature", "apparent_temperature", 26, ".2f"),
    ("Preci. Probability", "precipitation_probability", "precipitation_probability", 26, ".2f"),
    ("Precipitation", "precipitation", "precipitation", 19, ".2f"),
    ("Rain", "rain", "rain", 10, ".2f"),
    ("Showers", "showers", "showers", 15, ".2f"),
    ("Snowfall", "snowfall", "snowfall", 13, ".2f"),
    ("Weather Code", "weather_code", "weather_code", 23, "d"),
    ("Visibility", "visibility", "visibility", 15, ".2f"),
)


def format_envelope(weather: WeatherData) -> str:
    env = weather.envelope
    return (
        f"Latitude: {env.latitude:.3f}°\tLongitude: {env.longitude:.3f}°\t"
        f"Generation Time: {env.generationtime_ms:.3f}ms\n"
        f"UTC Offset: {env.utc_offset_seconds:g}s\tTimezone: {env.timezone}\n"
        f"Timezone Abbreviation: {env.timezone_abbreviation}\tElevation: {env.elevation:.2f}m"
    )


def _row(cells) -> str:
    return "|" + "|".join(cells) + "|"


def format_header(weather: WeatherData) -> str:
    units = weather.hourly_units
    return _row(
        f"{label} ({getattr(units, unit)})".ljust(width)
        for label, unit, _, width, _ in _COLUMNS
    )


def format_table(weather: WeatherData) -> str:
    """Header with units, then one row per observation in chronological order."""
    lines = [format_header(weather)]
    for _, observation in weather.observations():
        cells = []
        for _, _, attr, width, spec in _COLUMNS:
            value = getattr(observation, attr)
            text = format(value, spec) if spec else value
            cells.append(text.rjust(width) if spec else text.ljust(width))
        lines.append(_row(cells))
    return "\n".join(lines)
