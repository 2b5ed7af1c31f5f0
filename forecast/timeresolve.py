"""
timeresolve.py — Convert naive local timestamps to Unix epoch seconds.

Open-Meteo reports hourly times as "YYYY-MM-DDTHH:MM" in the local time of the
requested timezone, without an offset. Around daylight-saving transitions such
a time can map to two instants (fall back) or to none (spring forward):

  - ambiguous   → the later instant is used and the time is flagged
  - nonexistent → NonexistentLocalTime is raised
"""

import logging
from datetime import datetime
from typing import NamedTuple

from pytz import UnknownTimeZoneError, timezone
from pytz.exceptions import AmbiguousTimeError, NonExistentTimeError

from forecast.errors import StructuralError

log = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"


class InvalidTimestamp(ValueError):
    """The timestamp does not match TIMESTAMP_FORMAT."""


class NonexistentLocalTime(ValueError):
    """The local time is skipped by a daylight-saving transition."""


class LocalInstant(NamedTuple):
    epoch: int
    ambiguous: bool


def resolve_timezone(name: str, abbreviation: str = ""):
    """
    Look the document's timezone up in the tz database.

    The IANA name is tried first since it carries the DST rules; the
    abbreviation is only a fallback (most abbreviations such as "CST" are not
    database entries).

    Raises
    ------
    StructuralError
        If neither identifier is known.
    """
    for candidate in (name, abbreviation):
        if not candidate:
            continue
        try:
            return timezone(candidate)
        except UnknownTimeZoneError:
            log.debug("Timezone %r is not in the tz database", candidate)
    raise StructuralError(
        "timezone", f"unknown timezone {name!r} (abbreviation {abbreviation!r})"
    )


def parse_naive(timestamp: str) -> datetime:
    """Unpadded fields such as "2024-1-1T0:0" are accepted, as strptime allows."""
    try:
        return datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as exc:
        raise InvalidTimestamp(
            f"{timestamp!r} does not match {TIMESTAMP_FORMAT}"
        ) from exc


def to_epoch(timestamp: str, tz) -> LocalInstant:
    """
    Return the Unix epoch second of `timestamp` read as local time in `tz`.

    Raises InvalidTimestamp or NonexistentLocalTime.
    """
    naive = parse_naive(timestamp)
    try:
        local = tz.localize(naive, is_dst=None)
    except NonExistentTimeError as exc:
        raise NonexistentLocalTime(
            f"{timestamp} does not exist in {tz.zone}"
        ) from exc
    except AmbiguousTimeError:
        later = max(
            (tz.localize(naive, is_dst=flag) for flag in (True, False)),
            key=lambda candidate: candidate.timestamp(),
        )
        log.warning(
            "%s is ambiguous in %s; using the later instant (UTC%s)",
            timestamp, tz.zone, later.strftime("%z"),
        )
        return LocalInstant(int(later.timestamp()), True)
    return LocalInstant(int(local.timestamp()), False)
