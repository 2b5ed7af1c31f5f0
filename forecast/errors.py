"""
errors.py — Exception types raised while fetching, parsing and serializing forecasts.

Two parse-side kinds are kept apart:
  - StructuralError : the document shape is wrong; nothing can be decoded
  - SampleError     : the shape is fine but one hourly position is not
"""


class ForecastError(Exception):
    """Base class for every error raised by the forecast package."""


class StructuralError(ForecastError):
    """A required envelope, unit or array field is missing or mistyped."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class SampleError(ForecastError):
    """One hourly position could not be decoded."""

    def __init__(self, position: int, field: str, reason: str):
        self.position = position
        self.field = field
        self.reason = reason
        super().__init__(f"hourly.{field}[{position}]: {reason}")


class NonexistentTimeError(SampleError):
    """The local timestamp falls inside a daylight-saving gap."""


class SerializationError(ForecastError):
    """The aggregate could not be rendered as JSON text."""


class FetchError(ForecastError):
    """The forecast endpoint could not be reached or answered with a non-200 status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
