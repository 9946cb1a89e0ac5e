"""Illuminance (lux) model over a DaySchedule and its perceptual darkness mapping.

Lux spans about eight orders of magnitude between a moonless night and direct
noon sun. Each schedule segment interpolates between two reference anchors
with an easing curve whose value (and, for smooth-step, slope) matches its
neighbours at the boundary, so the curve never jumps as time advances.
"""

import math

from daysky.models import DaySchedule
from daysky.schedule import is_night, segment_progress, unwrap_minutes
from daysky.timeutil import normalize_minutes

# Light intensity (lux) reference points
NIGHT_NO_MOON = 0.001
ASTRONOMICAL_TWILIGHT = 0.1
NAUTICAL_TWILIGHT = 1.0
CIVIL_TWILIGHT = 10.0
SUNRISE_SUNSET = 100.0
EARLY_MORNING = 1000.0
NOON_DIRECT_SUN = 100000.0
NOON_EQUATOR_MAX = 500000.0

# Minutes on each side of the night spent blending between moonlight and twilight
TWILIGHT_TRANSITION = 30.0

_AFTERNOON_DIP = 0.05  # fraction of the noon peak lost over the flat first half


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def _clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def smooth_step(t: float) -> float:
    t = _clamp01(t)
    return t * t * (3 - 2 * t)


def ease_in_quad(t: float) -> float:
    t = _clamp01(t)
    return t * t


def ease_out_quad(t: float) -> float:
    t = _clamp01(t)
    return 1 - (1 - t) ** 2


def ease_in_out_cubic(t: float) -> float:
    t = _clamp01(t)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def _night_lux(minutes: float, schedule: DaySchedule, moon_lux: float) -> float:
    length = schedule.night_length
    window = min(TWILIGHT_TRANSITION, length / 2)
    into = normalize_minutes(minutes - schedule.astro_twilight_end)

    if into < window:
        return lerp(ASTRONOMICAL_TWILIGHT, moon_lux, smooth_step(segment_progress(into, 0.0, window)))
    if into > length - window:
        progress = segment_progress(into, length - window, length)
        return lerp(moon_lux, ASTRONOMICAL_TWILIGHT, smooth_step(progress))
    return moon_lux


def _day_lux(minutes: float, s: DaySchedule) -> float:
    # minutes is on the unwrapped timeline; dusk may lie past 1440
    astro_end = s.timeline()[-1]

    if minutes < s.nautical_twilight_begin:
        t = segment_progress(minutes, s.astro_twilight_begin, s.nautical_twilight_begin)
        return lerp(ASTRONOMICAL_TWILIGHT, NAUTICAL_TWILIGHT, smooth_step(t))

    if minutes < s.civil_twilight_begin:
        t = segment_progress(minutes, s.nautical_twilight_begin, s.civil_twilight_begin)
        return lerp(NAUTICAL_TWILIGHT, CIVIL_TWILIGHT, smooth_step(t))

    if minutes < s.sunrise:
        # Stays darker longer, then accelerates into sunrise
        t = segment_progress(minutes, s.civil_twilight_begin, s.sunrise)
        return lerp(CIVIL_TWILIGHT, SUNRISE_SUNSET, ease_in_quad(t))

    if minutes < s.solar_noon:
        progress = segment_progress(minutes, s.sunrise, s.solar_noon)
        if progress < 0.2:
            return lerp(SUNRISE_SUNSET, EARLY_MORNING, smooth_step(progress / 0.2))
        # Flattens out approaching the peak
        return lerp(EARLY_MORNING, NOON_DIRECT_SUN, ease_out_quad((progress - 0.2) / 0.8))

    if minutes < s.sunset:
        progress = segment_progress(minutes, s.solar_noon, s.sunset)
        if progress < 0.5:
            return NOON_DIRECT_SUN * (1 - smooth_step(progress / 0.5) * _AFTERNOON_DIP)
        late = smooth_step((progress - 0.5) / 0.5)
        return lerp(NOON_DIRECT_SUN * (1 - _AFTERNOON_DIP), SUNRISE_SUNSET, late)

    if minutes < s.civil_twilight_end:
        t = segment_progress(minutes, s.sunset, s.civil_twilight_end)
        return lerp(SUNRISE_SUNSET, CIVIL_TWILIGHT, ease_in_quad(t))

    if minutes < s.nautical_twilight_end:
        t = segment_progress(minutes, s.civil_twilight_end, s.nautical_twilight_end)
        return lerp(CIVIL_TWILIGHT, NAUTICAL_TWILIGHT, smooth_step(t))

    t = segment_progress(minutes, s.nautical_twilight_end, astro_end)
    return lerp(NAUTICAL_TWILIGHT, ASTRONOMICAL_TWILIGHT, smooth_step(t))


def compute_lux(minutes: float, schedule: DaySchedule, moon_lux: float = NIGHT_NO_MOON) -> float:
    """Estimate ambient illuminance at a time of day.

    Args:
        minutes: Minutes since local midnight (any value; reduced mod 1440).
        schedule: Validated solar boundaries for the day.
        moon_lux: Night-sky floor from the moon phase. Returned unchanged in
            deep night.

    Returns:
        Lux, clamped to [0.001, 500000].
    """
    minutes = normalize_minutes(minutes)
    if is_night(minutes, schedule):
        lux = _night_lux(minutes, schedule, moon_lux)
    else:
        lux = _day_lux(unwrap_minutes(minutes, schedule), schedule)
    return max(NIGHT_NO_MOON, min(NOON_EQUATOR_MAX, lux))


_LOG_MIN = math.log10(NIGHT_NO_MOON)
_LOG_MAX = math.log10(NOON_DIRECT_SUN)


def lux_to_darkness(lux: float) -> float:
    """Map lux to a 0-100 darkness percentage on a log scale.

    0.001 lux maps to 100, 100000 lux to 0. An ease-in-out cubic softens the
    middle of the range; the map is strictly decreasing in lux.
    """
    log_lux = math.log10(max(NIGHT_NO_MOON, min(NOON_DIRECT_SUN, lux)))
    normalized = 1 - (log_lux - _LOG_MIN) / (_LOG_MAX - _LOG_MIN)
    return max(0.0, min(100.0, ease_in_out_cubic(normalized) * 100))


def darkness_to_lightness(darkness: float) -> float:
    """Background lightness, kept off pure black and pure white."""
    return max(5.0, min(95.0, 100 - darkness))
