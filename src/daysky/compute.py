"""Sun-events layer: geocoding, timezone lookup, and the sunrise-sunset and skyfield providers."""

import logging
from datetime import date, datetime, time, timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx
from pytz import UnknownTimeZoneError, timezone
from skyfield import almanac
from skyfield.api import Loader, wgs84
from timezonefinder import TimezoneFinder

from daysky.config import Settings
from daysky.models import DaySchedule, ObserverContext, QueryInput
from daysky.schedule import schedule_from_sun_information

logger = logging.getLogger(__name__)

_SUN_API_URL = "https://api.sunrise-sunset.org/json"
_USER_AGENT = "DaySky/1.0 (ambient sundial display)"

# dark_twilight_day states: 0 night, 1 astronomical, 2 nautical, 3 civil, 4 day
_TWILIGHT_TRANSITIONS: dict[tuple[int, int], str] = {
    (0, 1): "astronomical_twilight_begin",
    (1, 2): "nautical_twilight_begin",
    (2, 3): "civil_twilight_begin",
    (3, 4): "sunrise",
    (4, 3): "sunset",
    (3, 2): "civil_twilight_end",
    (2, 1): "nautical_twilight_end",
    (1, 0): "astronomical_twilight_end",
}


class GeocodingError(Exception):
    """Geocoder call failure."""


class ProviderError(Exception):
    """Sun-events provider call failure."""


@lru_cache(maxsize=1)
def _timezone_finder() -> TimezoneFinder:
    return TimezoneFinder()


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": _USER_AGENT}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def observer_from_coordinates(
    lat: float, lng: float, tz_name: str | None = None, address_display: str = ""
) -> ObserverContext:
    """Build an ObserverContext, resolving the timezone from coordinates if needed.

    Raises:
        GeocodingError: When no timezone is found or the given name is unknown.
    """
    if tz_name is None:
        tz_name = _timezone_finder().timezone_at(lat=lat, lng=lng)
        if tz_name is None:
            raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
    try:
        timezone(tz_name)
    except UnknownTimeZoneError as exc:
        raise GeocodingError(f"Unknown timezone: {tz_name}") from exc
    return ObserverContext(
        lat=lat,
        lng=lng,
        tz_name=tz_name,
        address_display=address_display or f"{lat:.4f}, {lng:.4f}",
    )


def geocode_address(address: str, tz_name: str | None = None) -> ObserverContext:
    """Resolve an address string to an ObserverContext.

    Args:
        address: Address string in any language.
        tz_name: Timezone override; resolved from coordinates when None.

    Returns:
        ObserverContext containing lat/lng, timezone, and normalized address.

    Raises:
        GeocodingError: On API error or when address cannot be found.
    """
    try:
        result = _geocode_nominatim(address)
    except httpx.HTTPError as exc:
        raise GeocodingError(f"Geocoder request failed: {exc}") from exc
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result
    return observer_from_coordinates(lat, lng, tz_name, address_display)


def fetch_sun_information(context: ObserverContext, day: date) -> dict[str, Any]:
    """Fetch the day's twilight/sunrise/sunset timestamps from sunrise-sunset.org.

    Returns:
        The raw payload: ``{"results": {...}, "status": "OK", "tzid": ...}``
        with ISO-8601 timestamps.

    Raises:
        ProviderError: On a transport error, an HTTP error, or a non-OK status.
    """
    params = {
        "lat": context.lat,
        "lng": context.lng,
        "date": day.isoformat(),
        "formatted": 0,
        "tzid": context.tz_name,
    }
    logger.debug("Fetching sun information for %s on %s", context.address_display, day)
    try:
        resp = httpx.get(_SUN_API_URL, params=params, timeout=10)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise ProviderError(f"sunrise-sunset request failed: {exc}") from exc
    status = data.get("status")
    if status != "OK":
        raise ProviderError(f"sunrise-sunset error: {status}")
    return data


@lru_cache(maxsize=4)
def _ephemeris(ephemeris_dir: str) -> tuple[Loader, Any]:
    loader = Loader(ephemeris_dir)
    return loader, loader("de421.bsp")


def compute_sun_information(
    context: ObserverContext, day: date, ephemeris_dir: Path
) -> dict[str, Any]:
    """Offline counterpart of fetch_sun_information, computed with skyfield.

    Events that do not happen during the local day (polar summer/winter) are
    left as None; building a schedule from them raises ScheduleInvalidError.

    Raises:
        ProviderError: When the ephemeris cannot be downloaded or read.
    """
    try:
        return _search_sun_events(context, day, ephemeris_dir)
    except OSError as exc:
        raise ProviderError(f"skyfield ephemeris unavailable: {exc}") from exc


def _search_sun_events(
    context: ObserverContext, day: date, ephemeris_dir: Path
) -> dict[str, Any]:
    loader, eph = _ephemeris(str(ephemeris_dir))
    ts = loader.timescale()
    local_tz = timezone(context.tz_name)
    start = local_tz.localize(datetime.combine(day, time()))
    end = local_tz.localize(datetime.combine(day + timedelta(days=1), time()))
    t0, t1 = ts.from_datetime(start), ts.from_datetime(end)

    topos = wgs84.latlon(latitude_degrees=context.lat, longitude_degrees=context.lng)
    results: dict[str, str | None] = {key: None for key in _TWILIGHT_TRANSITIONS.values()}
    results["solar_noon"] = None

    twilight = almanac.dark_twilight_day(eph, topos)
    previous = int(twilight(t0))
    times, states = almanac.find_discrete(t0, t1, twilight)
    for t, state in zip(times, states):
        key = _TWILIGHT_TRANSITIONS.get((previous, int(state)))
        if key is not None and results[key] is None:
            results[key] = t.utc_datetime().isoformat()
        previous = int(state)

    transits = almanac.meridian_transits(eph, eph["sun"], topos)
    times, states = almanac.find_discrete(t0, t1, transits)
    for t, state in zip(times, states):
        if int(state) == 1:  # upper transit
            results["solar_noon"] = t.utc_datetime().isoformat()
            break

    return {"results": results, "status": "OK", "tzid": context.tz_name}


def load_schedule(context: ObserverContext, day: date, settings: Settings) -> DaySchedule:
    """Fetch or compute the day's sun events and validate them into a DaySchedule.

    Raises:
        ProviderError: When the API provider fails.
        ScheduleInvalidError: When the events do not form a valid day.
        ParseError: When a timestamp cannot be read.
    """
    if settings.provider == "skyfield":
        sun_info = compute_sun_information(context, day, settings.ephemeris_dir)
    else:
        sun_info = fetch_sun_information(context, day)
    return schedule_from_sun_information(sun_info, context.tz_name)


def resolve_observer(settings: Settings) -> ObserverContext:
    if settings.has_coordinates:
        assert settings.lat is not None and settings.lng is not None
        return observer_from_coordinates(
            settings.lat, settings.lng, settings.tz_name, settings.address or ""
        )
    assert settings.address is not None
    return geocode_address(settings.address, settings.tz_name)


def run(query: QueryInput, settings: Settings) -> DaySchedule:
    """Top-level entry point: takes a QueryInput and returns a DaySchedule.

    Args:
        query: User input (address, local day).
        settings: Provider choice and ephemeris location.

    Returns:
        Validated DaySchedule for that place and day.
    """
    context = geocode_address(query.address, settings.tz_name)
    return load_schedule(context, query.day, settings)
