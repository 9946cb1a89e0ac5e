"""Lunar phase and illumination from the calendar date alone."""

import math
from datetime import datetime, timezone

from daysky.models import MoonPhaseSample

SYNODIC_MONTH = 29.53058867  # days between successive new moons

NEW_MOON_LUX = 0.001
FULL_MOON_LUX = 0.27

# Half-width of the phase window counted as exactly new/quarter/full
_PHASE_WINDOW = 0.03


def julian_day(dt: datetime) -> float:
    """Julian Day of a civil (Gregorian) date and time.

    Aware datetimes are converted to UTC first; naive ones are used as-is.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    year, month = dt.year, dt.month
    hour = dt.hour + dt.minute / 60 + (dt.second + dt.microsecond / 1e6) / 3600

    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + dt.day
        + b
        - 1524.5
        + hour / 24
    )


_REFERENCE_NEW_MOON_JD = julian_day(datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc))


def days_since_new_moon(dt: datetime) -> float:
    """Age of the moon in days, in [0, SYNODIC_MONTH)."""
    age = (julian_day(dt) - _REFERENCE_NEW_MOON_JD) % SYNODIC_MONTH
    return 0.0 if age >= SYNODIC_MONTH else age


def moon_phase(dt: datetime) -> float:
    """0 = new moon, 0.5 = full moon, approaching 1 = new moon again."""
    return days_since_new_moon(dt) / SYNODIC_MONTH


def moon_illumination(dt: datetime) -> float:
    return phase_to_illumination(moon_phase(dt))


def phase_to_illumination(phase: float) -> float:
    """Percent lit: linear ramp to 100 at full moon and back down."""
    if phase < 0.5:
        return phase * 2 * 100
    return (1 - phase) * 2 * 100


def illumination_to_lux(illumination: float) -> float:
    return NEW_MOON_LUX + (FULL_MOON_LUX - NEW_MOON_LUX) * (illumination / 100)


def moon_lux(dt: datetime) -> float:
    return illumination_to_lux(moon_illumination(dt))


def phase_name(phase: float) -> str:
    """Named bucket (i18n key) for a phase fraction."""
    if phase < _PHASE_WINDOW or phase > 1 - _PHASE_WINDOW:
        return "new_moon"
    for center, name in ((0.25, "first_quarter"), (0.5, "full_moon"), (0.75, "last_quarter")):
        if abs(phase - center) <= _PHASE_WINDOW:
            return name
    if phase < 0.25:
        return "waxing_crescent"
    if phase < 0.5:
        return "waxing_gibbous"
    if phase < 0.75:
        return "waning_gibbous"
    return "waning_crescent"


def moon_sample(dt: datetime) -> MoonPhaseSample:
    phase = moon_phase(dt)
    illumination = phase_to_illumination(phase)
    return MoonPhaseSample(
        phase=phase,
        illumination=illumination,
        lux=illumination_to_lux(illumination),
        phase_name=phase_name(phase),
    )
