"""Circular hue, saturation, and text-contrast model for the ambient sky color.

Hues are interpolated along the shorter arc of the color wheel unless a
segment names an explicit direction. Every anchor pair below was chosen so
that no path enters the green band (roughly 90-180 degrees) on its way
between night blues and sunrise reds.
"""

import math

from daysky.models import ColorSample, ContrastState, DaySchedule
from daysky.schedule import is_night, night_progress, segment_progress, unwrap_minutes
from daysky.timeutil import normalize_minutes

FALLBACK_HUE = 240.0
FALLBACK_SATURATION = 10.0

# Hue anchors (degrees)
NIGHT_MIDDLE = 240.0
NIGHT_EDGE = 235.0
NAUTICAL_DAWN = 225.0
BLUE_HOUR_DAWN = 215.0
GOLDEN_HOUR_DAWN = 35.0
SUNRISE = 15.0
MORNING_LIGHT = 205.0
SOLAR_NOON = 210.0
AFTERNOON_LIGHT = 205.0
SUNSET = 15.0
GOLDEN_HOUR_DUSK = 30.0
BLUE_HOUR_DUSK = 220.0
NAUTICAL_DUSK = 230.0

# Saturation anchors (percent) at each schedule boundary
_SATURATION_ANCHORS = (11.0, 12.0, 13.0, 15.0, 9.0, 15.0, 13.0, 12.0, 11.0)
NIGHT_SATURATION = 11.0
_NIGHT_RIPPLE = 0.75

# Hysteresis for the light/dark text decision
CONTRAST_SMOOTHING = 0.2
CONTRAST_BAND = 5.0


def _wrap(hue: float) -> float:
    hue = hue % 360
    return 0.0 if hue >= 360 else hue


def lerp_hue(h1: float, h2: float, t: float) -> float:
    """Interpolate along the shorter arc, wrapping through 0/360."""
    diff = ((h2 - h1 + 540) % 360) - 180
    return _wrap(h1 + diff * t + 360)


def lerp_hue_directed(h1: float, h2: float, t: float, direction: int = 1) -> float:
    """Interpolate along a fixed arc: increasing hue for +1, decreasing for -1."""
    if direction >= 0:
        diff = (h2 - h1) % 360
    else:
        diff = -((h1 - h2) % 360)
    return _wrap(h1 + diff * t)


def get_complementary_hue(hue: float) -> float:
    return _wrap(hue + 180)


def _split_hue(progress: float, pivot: float, start: float, middle: float, end: float) -> float:
    if progress < pivot:
        return lerp_hue(start, middle, progress / pivot)
    return lerp_hue(middle, end, (progress - pivot) / (1 - pivot))


def compute_hue(minutes: float, schedule: DaySchedule) -> float:
    """Sky hue in degrees at a time of day."""
    s = schedule

    if is_night(minutes, s):
        # 0 at the middle of the night, 1 at either edge
        from_middle = abs(night_progress(minutes, s) - 0.5) * 2
        return lerp_hue(NIGHT_MIDDLE, NIGHT_EDGE, from_middle)

    minutes = unwrap_minutes(minutes, s)

    if minutes < s.nautical_twilight_begin:
        t = segment_progress(minutes, s.astro_twilight_begin, s.nautical_twilight_begin)
        return lerp_hue(NIGHT_EDGE, NAUTICAL_DAWN, t)

    if minutes < s.civil_twilight_begin:
        t = segment_progress(minutes, s.nautical_twilight_begin, s.civil_twilight_begin)
        return lerp_hue(NAUTICAL_DAWN, BLUE_HOUR_DAWN, t)

    if minutes < s.sunrise:
        progress = segment_progress(minutes, s.civil_twilight_begin, s.sunrise)
        if progress < 0.5:
            # 215 -> 35 is a half turn; go up through violet and magenta, not down through green
            return lerp_hue_directed(BLUE_HOUR_DAWN, GOLDEN_HOUR_DAWN, progress * 2, direction=1)
        return lerp_hue(GOLDEN_HOUR_DAWN, SUNRISE, (progress - 0.5) * 2)

    if minutes < s.solar_noon:
        progress = segment_progress(minutes, s.sunrise, s.solar_noon)
        return _split_hue(progress, 0.3, SUNRISE, MORNING_LIGHT, SOLAR_NOON)

    if minutes < s.sunset:
        progress = segment_progress(minutes, s.solar_noon, s.sunset)
        return _split_hue(progress, 0.3, SOLAR_NOON, AFTERNOON_LIGHT, SUNSET)

    if minutes < s.civil_twilight_end:
        progress = segment_progress(minutes, s.sunset, s.civil_twilight_end)
        return _split_hue(progress, 0.4, SUNSET, GOLDEN_HOUR_DUSK, BLUE_HOUR_DUSK)

    if minutes < s.nautical_twilight_end:
        t = segment_progress(minutes, s.civil_twilight_end, s.nautical_twilight_end)
        return lerp_hue(BLUE_HOUR_DUSK, NAUTICAL_DUSK, t)

    t = segment_progress(minutes, s.nautical_twilight_end, s.timeline()[-1])
    return lerp_hue(NAUTICAL_DUSK, NIGHT_EDGE, t)


def _smooth(t: float) -> float:
    return t * t * (3 - 2 * t)


def compute_saturation(minutes: float, schedule: DaySchedule) -> float:
    """Sky saturation in percent, kept between 9 and 15.

    Lowest (nearly white) at solar noon, highest at sunrise and sunset,
    with a small bounded ripple through the night.
    """
    minutes = normalize_minutes(minutes)
    boundaries = schedule.timeline()

    if is_night(minutes, schedule):
        window = math.sin(math.pi * night_progress(minutes, schedule))
        ripple = math.sin(minutes / 60 * math.pi * 2)
        return NIGHT_SATURATION + _NIGHT_RIPPLE * window * ripple

    minutes = unwrap_minutes(minutes, schedule)

    for index in range(len(boundaries) - 1):
        start, end = boundaries[index], boundaries[index + 1]
        if minutes < end:
            t = _smooth(segment_progress(minutes, start, end))
            low, high = _SATURATION_ANCHORS[index], _SATURATION_ANCHORS[index + 1]
            return low + (high - low) * t
    return _SATURATION_ANCHORS[-1]


def update_contrast(
    state: ContrastState | None,
    bg_lightness: float,
    alpha: float = CONTRAST_SMOOTHING,
    band: float = CONTRAST_BAND,
) -> ContrastState:
    """Advance the text-contrast accumulator by one tick.

    The background lightness is exponentially smoothed, and the light/dark
    text decision only flips once the smoothed value leaves ``50 ± band``.
    """
    if state is None or state.lightness is None:
        smoothed = bg_lightness
    else:
        smoothed = state.lightness + alpha * (bg_lightness - state.lightness)

    light_text = None if state is None else state.light_text
    if light_text is None:
        light_text = smoothed < 50
    elif light_text and smoothed > 50 + band:
        light_text = False
    elif not light_text and smoothed < 50 - band:
        light_text = True
    return ContrastState(lightness=smoothed, light_text=light_text)


def derive_text_color(background: ColorSample, contrast: ContrastState | None = None) -> ColorSample:
    """Readable foreground: complementary hue, pushed to the far end of lightness.

    Dark backgrounds get 85-95% lightness text, light ones 5-15%. When a
    contrast state is given, its smoothed decision picks the side.
    """
    inverse = 100 - background.lightness
    if contrast is not None and contrast.light_text is not None:
        light_text = contrast.light_text
    else:
        light_text = background.lightness < 50

    if light_text:
        lightness = max(85.0, min(95.0, inverse + 20))
    else:
        lightness = min(15.0, max(5.0, inverse - 20))

    return ColorSample(
        hue=get_complementary_hue(background.hue),
        saturation=min(20.0, background.saturation * 1.5),
        lightness=lightness,
    )
