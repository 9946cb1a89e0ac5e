"""Minutes-since-midnight arithmetic on the circular 24h domain."""

import math
from datetime import datetime, tzinfo

from pytz import timezone
from pytz.tzinfo import BaseTzInfo

MINUTES_PER_DAY = 24 * 60
_TAU = 2 * math.pi


class ParseError(ValueError):
    """Timestamp could not be parsed."""


def parse_timestamp(timestamp: str | datetime) -> datetime:
    if isinstance(timestamp, datetime):
        return timestamp
    if not isinstance(timestamp, str):
        raise ParseError(f"Unsupported timestamp type: {type(timestamp).__name__}")
    text = timestamp.strip()
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ParseError(f"Invalid ISO-8601 timestamp: {timestamp!r}") from exc


def time_to_minutes(timestamp: str | datetime, tz: tzinfo | str | None = None) -> float:
    """Convert an absolute timestamp to minutes since local midnight.

    Args:
        timestamp: ISO-8601 string or datetime. Naive values are taken as
            already in the observer's local time.
        tz: Observer timezone (tzinfo or IANA name). System local when None.

    Returns:
        ``hours * 60 + minutes + seconds / 60`` in the observer's timezone.

    Raises:
        ParseError: If the timestamp is not valid ISO-8601.
    """
    dt = parse_timestamp(timestamp)
    if dt.tzinfo is not None:
        if isinstance(tz, str):
            tz = timezone(tz)
        dt = dt.astimezone(tz)
    return minutes_of_day(dt)


def localize(dt: datetime, tz: tzinfo | str | None) -> datetime:
    """Attach the observer timezone to a naive local datetime.

    With no timezone the value stays naive, which the moon engine reads as UTC.
    """
    if tz is None:
        return dt
    if isinstance(tz, str):
        tz = timezone(tz)
    if isinstance(tz, BaseTzInfo):
        return tz.localize(dt)
    return dt.replace(tzinfo=tz)


def minutes_of_day(dt: datetime) -> float:
    return get_time_minutes(dt.hour, dt.minute, dt.second + dt.microsecond / 1e6)


def get_time_minutes(hours: int, minutes: int, seconds: float) -> float:
    return hours * 60 + minutes + seconds / 60


def normalize_minutes(minutes: float) -> float:
    """Reduce any minute value into [0, 1440)."""
    value = minutes % MINUTES_PER_DAY
    return 0.0 if value >= MINUTES_PER_DAY else value


def circular_distance(a: float, b: float) -> float:
    """Shortest distance between two minute values on the 24h circle."""
    diff = normalize_minutes(a - b)
    return min(diff, MINUTES_PER_DAY - diff)


def minutes_to_angle(minutes: float) -> float:
    """Map minutes to a dial angle: midnight at -pi/2, increasing clockwise."""
    progress = normalize_minutes(minutes) / MINUTES_PER_DAY
    return progress * _TAU - math.pi / 2


def angle_to_minutes(angle: float) -> float:
    """Inverse of minutes_to_angle. Accepts any angle; returns [0, 1440)."""
    shifted = (angle + math.pi / 2) % _TAU
    return normalize_minutes(shifted / _TAU * MINUTES_PER_DAY)


def _split(minutes: float) -> tuple[int, int, int]:
    hours = math.floor(minutes / 60)
    mins = math.floor(minutes % 60)
    secs = math.floor((minutes % 1) * 60)
    return hours, mins, secs


def format_time(minutes: float) -> str:
    """Format minutes since midnight as ``HH:MM:SS``."""
    hours, mins, secs = _split(minutes)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def format_duration(minutes: float) -> str:
    """Format a duration as ``2h 5m 0s``, dropping leading zero units.

    Negative durations render as ``--``.
    """
    if minutes < 0:
        return "--"
    hours, mins, secs = _split(minutes)
    if hours > 0:
        return f"{hours}h {mins}m {secs}s"
    if mins > 0:
        return f"{mins}m {secs}s"
    return f"{secs}s"
