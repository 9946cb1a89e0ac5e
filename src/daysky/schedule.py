"""DaySchedule construction, segment lookup, and sundial event helpers."""

import logging
from collections.abc import Mapping
from datetime import tzinfo
from typing import Any

from daysky.models import DaySchedule, NextEvent, Segment, SundialEvent
from daysky.timeutil import (
    MINUTES_PER_DAY,
    minutes_to_angle,
    normalize_minutes,
    parse_timestamp,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

# Schedule field → provider payload key, in chronological order
BOUNDARY_KEYS: dict[str, str] = {
    "astro_twilight_begin": "astronomical_twilight_begin",
    "nautical_twilight_begin": "nautical_twilight_begin",
    "civil_twilight_begin": "civil_twilight_begin",
    "sunrise": "sunrise",
    "solar_noon": "solar_noon",
    "sunset": "sunset",
    "civil_twilight_end": "civil_twilight_end",
    "nautical_twilight_end": "nautical_twilight_end",
    "astro_twilight_end": "astronomical_twilight_end",
}

# Short dial labels (i18n keys)
_LABELS: dict[str, str] = {
    "astro_twilight_begin": "label_astro",
    "nautical_twilight_begin": "label_nautical",
    "civil_twilight_begin": "label_civil",
    "sunrise": "label_sunrise",
    "solar_noon": "label_noon",
    "sunset": "label_sunset",
    "civil_twilight_end": "label_civil",
    "nautical_twilight_end": "label_nautical",
    "astro_twilight_end": "label_astro",
}

_MAJOR_EVENTS = frozenset({"sunrise", "solar_noon", "sunset"})

# The provider reports events that never happen on that day as 1970-01-01T00:00:01
_EPOCH_SENTINEL_YEAR = 1970

_SEGMENTS_BY_BOUNDARY: tuple[Segment, ...] = (
    Segment.ASTRONOMICAL_DAWN,
    Segment.NAUTICAL_DAWN,
    Segment.CIVIL_DAWN,
    Segment.MORNING,
    Segment.AFTERNOON,
    Segment.CIVIL_DUSK,
    Segment.NAUTICAL_DUSK,
    Segment.ASTRONOMICAL_DUSK,
    Segment.POST_DUSK_NIGHT,
)


class ScheduleInvalidError(ValueError):
    """Boundaries are missing or out of order; no schedule was built."""


def make_schedule(**minutes: float) -> DaySchedule:
    """Validate nine boundary minute values and build a DaySchedule.

    Args:
        **minutes: One keyword per DaySchedule field, in minutes since midnight.

    Returns:
        The validated, immutable schedule.

    Raises:
        ScheduleInvalidError: On a missing or unknown boundary, boundaries
            not strictly increasing, or a day spanning a full 24h.
            ``astro_twilight_end`` alone may wrap past midnight, as long as
            it stays before ``astro_twilight_begin``.
    """
    missing = [name for name in BOUNDARY_KEYS if name not in minutes]
    unknown = [name for name in minutes if name not in BOUNDARY_KEYS]
    if missing or unknown:
        raise ScheduleInvalidError(f"Bad boundaries: missing={missing}, unknown={unknown}")

    names = list(BOUNDARY_KEYS)
    values = [float(minutes[name]) for name in names]
    for value, name in zip(values, names):
        if not 0 <= value < MINUTES_PER_DAY:
            raise ScheduleInvalidError(f"{name}={value} is outside [0, 1440)")

    unwrapped = list(values)
    if values[-1] < values[0]:
        unwrapped[-1] += MINUTES_PER_DAY
    for (prev_name, prev), (name, value) in zip(
        zip(names, unwrapped), zip(names[1:], unwrapped[1:])
    ):
        if value <= prev:
            raise ScheduleInvalidError(
                f"{name} ({value:.2f}) must come after {prev_name} ({prev:.2f})"
            )
    return DaySchedule(**dict(zip(names, values)))


def schedule_from_sun_information(
    sun_info: Mapping[str, Any], tz: tzinfo | str | None = None
) -> DaySchedule:
    """Build a DaySchedule from a sun-events provider payload.

    Args:
        sun_info: ``{"results": {...}, "status": "OK"}`` as returned by
            sunrise-sunset.org (``formatted=0``) or the skyfield provider.
        tz: Observer timezone used to read the timestamps.

    Raises:
        ScheduleInvalidError: On a failed status or a boundary that does not
            occur (polar day/night), or out-of-order boundaries.
        ParseError: On an unparsable timestamp.
    """
    status = sun_info.get("status", "OK")
    if status != "OK":
        raise ScheduleInvalidError(f"Provider status: {status}")
    results = sun_info.get("results") or {}

    minutes: dict[str, float] = {}
    for name, key in BOUNDARY_KEYS.items():
        raw = results.get(key)
        if raw is None:
            raise ScheduleInvalidError(f"{key} does not occur on this day")
        if parse_timestamp(raw).year == _EPOCH_SENTINEL_YEAR:
            raise ScheduleInvalidError(f"{key} does not occur on this day")
        minutes[name] = time_to_minutes(raw, tz)
    schedule = make_schedule(**minutes)
    logger.debug("Built schedule %s", schedule)
    return schedule


def segment_progress(minutes: float, start: float, end: float) -> float:
    """Fraction of the way from start to end, clamped to [0, 1].

    Zero or negative length segments count as already finished.
    """
    duration = end - start
    if duration <= 0:
        return 1.0
    return max(0.0, min(1.0, (minutes - start) / duration))


def night_progress(minutes: float, schedule: DaySchedule) -> float:
    """Fraction through the night running from astro dusk to the next astro dawn."""
    into = normalize_minutes(minutes - schedule.astro_twilight_end)
    return segment_progress(into, 0.0, schedule.night_length)


def unwrap_minutes(minutes: float, schedule: DaySchedule) -> float:
    """Place a clock minute on the schedule's timeline, starting at astro dawn."""
    minutes = normalize_minutes(minutes)
    if minutes < schedule.astro_twilight_begin:
        return minutes + MINUTES_PER_DAY
    return minutes


def is_night(minutes: float, schedule: DaySchedule) -> bool:
    return unwrap_minutes(minutes, schedule) >= schedule.timeline()[-1]


def segment_at(minutes: float, schedule: DaySchedule) -> Segment:
    """Return the segment containing ``minutes`` (reduced to [0, 1440))."""
    minutes = normalize_minutes(minutes)
    if is_night(minutes, schedule):
        if minutes < schedule.astro_twilight_begin:
            return Segment.PRE_DAWN_NIGHT
        return Segment.POST_DUSK_NIGHT

    position = unwrap_minutes(minutes, schedule)
    segment = Segment.ASTRONOMICAL_DAWN
    for boundary, following in zip(schedule.timeline()[1:-1], _SEGMENTS_BY_BOUNDARY[1:-1]):
        if position < boundary:
            break
        segment = following
    return segment


def sundial_events(schedule: DaySchedule | None) -> tuple[SundialEvent, ...]:
    if schedule is None:
        return ()
    return tuple(
        SundialEvent(
            name=name,
            label=_LABELS[name],
            minutes=value,
            angle=minutes_to_angle(value),
            is_major=name in _MAJOR_EVENTS,
        )
        for name, value in zip(BOUNDARY_KEYS, schedule.boundaries())
    )


def find_next_event(minutes: float, schedule: DaySchedule | None) -> NextEvent:
    """Find the nearest upcoming boundary (or midnight) after ``minutes``.

    Events at or before the current time wrap to the following day.
    """
    if schedule is None:
        return NextEvent(name="--", minutes_until=0.0)

    events = list(zip(BOUNDARY_KEYS, schedule.boundaries()))
    events.append(("midnight", float(MINUTES_PER_DAY)))

    best_name = "--"
    best_until = float("inf")
    for name, value in events:
        until = value - minutes
        if until <= 0:
            until += MINUTES_PER_DAY
        if until < best_until:
            best_name, best_until = name, until
    return NextEvent(name=best_name, minutes_until=best_until)
