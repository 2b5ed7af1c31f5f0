"""
units.py — Parse the `hourly_units` block into HourlyUnits.
"""

from forecast.coerce import require_str
from forecast.models import HOURLY_FIELDS, HourlyUnits


def parse_units(units: dict) -> HourlyUnits:
    """
    Build HourlyUnits from the `hourly_units` object.

    Raises
    ------
    StructuralError
        If any of the eleven keys is missing or is not a string.
    """
    return HourlyUnits(**{
        name: require_str(units, name, where="hourly_units") for name in HOURLY_FIELDS
    })
