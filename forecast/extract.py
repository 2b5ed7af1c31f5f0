"""
extract.py — Fetch a raw hourly forecast from the Open-Meteo API.

Location and horizon come from FORECAST_* environment variables; no API key
is required for the public endpoint.
"""

import json
import logging
import os
from dataclasses import dataclass
from urllib.parse import urlencode

import requests

from forecast.errors import FetchError
from forecast.models import HOURLY_FIELDS

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger(__name__)

API_URL = "https://api.open-meteo.com/v1/forecast"

# Every array of models.HOURLY_FIELDS; "time" is always returned
HOURLY_QUERY = HOURLY_FIELDS[1:]


@dataclass(frozen=True)
class ForecastRequest:
    """Query parameters for one forecast call."""

    latitude: float
    longitude: float
    forecast_days: int = 7
    past_days: int = 0
    timezone: str = "auto"
    api_key: str | None = None
    base_url: str = API_URL

    @classmethod
    def from_env(cls) -> "ForecastRequest":
        return cls(
            latitude=float(os.getenv("FORECAST_LATITUDE", "40.6936")),
            longitude=float(os.getenv("FORECAST_LONGITUDE", "-89.589")),
            forecast_days=int(os.getenv("FORECAST_DAYS", "7")),
            past_days=int(os.getenv("FORECAST_PAST_DAYS", "0")),
            timezone=os.getenv("FORECAST_TIMEZONE", "auto"),
            api_key=os.getenv("FORECAST_API_KEY") or None,
            base_url=os.getenv("FORECAST_API_URL", API_URL),
        )


def build_url(request: ForecastRequest) -> str:
    params = {
        "latitude": f"{request.latitude:.3f}",
        "longitude": f"{request.longitude:.3f}",
        "hourly": ",".join(HOURLY_QUERY),
        "timezone": request.timezone,
    }
    if request.forecast_days:
        params["forecast_days"] = request.forecast_days
    if request.past_days:
        params["past_days"] = request.past_days
    if request.api_key:
        params["apikey"] = request.api_key
    return f"{request.base_url}?{urlencode(params, safe=',/')}"


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers["Accept"] = "application/json"
    return session


def fetch_text(url: str, session: requests.Session | None = None) -> str:
    """
    GET `url` and return the response body as text.

    Raises
    ------
    FetchError
        On a transport failure or any status other than 200.
    """
    session = session or _build_session()
    log.debug("Performing HTTP GET for %s", url)
    try:
        response = session.get(url, timeout=30)
    except requests.RequestException as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc

    if response.status_code != 200:
        log.error("Forecast endpoint answered HTTP %d", response.status_code)
        raise FetchError(
            f"GET {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    return response.text


def extract(request: ForecastRequest | None = None) -> dict:
    """Call Open-Meteo and return the raw JSON response."""
    request = request or ForecastRequest.from_env()
    log.info(
        "Fetching hourly forecast for lat=%s, lon=%s (%d days)",
        request.latitude, request.longitude, request.forecast_days,
    )
    body = fetch_text(build_url(request), session=_build_session())
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise FetchError(f"response is not valid JSON: {exc}") from exc

    hourly = data.get("hourly") if isinstance(data, dict) else None
    if isinstance(hourly, dict):
        log.info("Received %d hours of data", len(hourly.get("time", [])))
    return data


if __name__ == "__main__":
    raw = extract()
    print(raw)
