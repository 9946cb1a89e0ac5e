"""Per-tick composition of the appearance model into a single AmbientFrame."""

from datetime import date, datetime, time, timedelta, tzinfo

from daysky.color import (
    FALLBACK_HUE,
    FALLBACK_SATURATION,
    compute_hue,
    compute_saturation,
    derive_text_color,
    update_contrast,
)
from daysky.illuminance import compute_lux, darkness_to_lightness, lux_to_darkness
from daysky.models import AmbientFrame, ColorSample, ContrastState, DaySchedule
from daysky.moon import moon_sample
from daysky.schedule import segment_at
from daysky.timeutil import localize, normalize_minutes

FALLBACK_DARKNESS = 50.0
FALLBACK_LUX = 0.0


def moon_datetime(moon_date: date, minutes: float, tz: tzinfo | str | None = None) -> datetime:
    """The observer's local date and displayed time, for moon-phase lookup.

    Without ``tz`` the result is naive and read as UTC by the moon engine.
    """
    return localize(datetime.combine(moon_date, time()) + timedelta(minutes=minutes), tz)


def compute_frame(
    minutes: float,
    schedule: DaySchedule | None,
    moon_date: date | None = None,
    contrast: ContrastState | None = None,
    tz: tzinfo | str | None = None,
) -> AmbientFrame:
    """Evaluate the whole model for one time of day.

    Args:
        minutes: Displayed minutes since local midnight (clock or manual override).
        schedule: Current solar boundaries, or None before the first fetch.
        moon_date: Calendar date for the moon phase. Today when None; it
            follows the real date even while the displayed time is overridden.
        contrast: Accumulator from the previous tick, or None on the first one.
        tz: Observer timezone (tzinfo or IANA name) for the moon phase.

    Returns:
        The frame, carrying the updated contrast accumulator for the next tick.
        Without a schedule, fallback values are returned instead of failing.
    """
    minutes = normalize_minutes(minutes)
    moon = moon_sample(moon_datetime(moon_date or date.today(), minutes, tz))

    if schedule is None:
        segment = None
        lux = FALLBACK_LUX
        darkness = FALLBACK_DARKNESS
        hue, saturation = FALLBACK_HUE, FALLBACK_SATURATION
    else:
        segment = segment_at(minutes, schedule)
        lux = compute_lux(minutes, schedule, moon.lux)
        darkness = lux_to_darkness(lux)
        hue = compute_hue(minutes, schedule)
        saturation = compute_saturation(minutes, schedule)

    background = ColorSample(
        hue=hue, saturation=saturation, lightness=darkness_to_lightness(darkness)
    )
    next_contrast = update_contrast(contrast, background.lightness)
    return AmbientFrame(
        minutes=minutes,
        segment=segment,
        lux=lux,
        darkness=darkness,
        background=background,
        text=derive_text_color(background, next_contrast),
        moon=moon,
        contrast=next_contrast,
    )
