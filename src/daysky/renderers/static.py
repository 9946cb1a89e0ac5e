"""Matplotlib static PNG renderer for a whole day of the appearance model."""

import colorsys
from datetime import date, tzinfo
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from daysky.ambient import compute_frame
from daysky.models import ColorSample, DaySchedule
from daysky.schedule import sundial_events
from daysky.timeutil import MINUTES_PER_DAY

_ROOT = Path(__file__).parent.parent.parent.parent


def _rgb(color: ColorSample) -> tuple[float, float, float]:
    return colorsys.hls_to_rgb(color.hue / 360, color.lightness / 100, color.saturation / 100)


def render_day_curve(
    schedule: DaySchedule,
    moon_date: date | None = None,
    step_minutes: float = 2.0,
    tz: tzinfo | str | None = None,
) -> Figure:
    """Plot lux, darkness, and the background color strip over 24 hours.

    Args:
        schedule: Solar boundaries for the day.
        moon_date: Calendar date for the moon phase (today when None).
        step_minutes: Sampling interval.
        tz: Observer timezone for the moon phase.

    Returns:
        matplotlib Figure object.
    """
    minutes = np.arange(0.0, MINUTES_PER_DAY, step_minutes)
    frames = [compute_frame(float(m), schedule, moon_date, tz=tz) for m in minutes]
    hours = minutes / 60

    fig, (ax_lux, ax_dark, ax_strip) = plt.subplots(
        3, 1, figsize=(12, 7), sharex=True, gridspec_kw={"height_ratios": [3, 2, 1]}
    )

    ax_lux.semilogy(hours, [f.lux for f in frames], color="#f5c56b", linewidth=1.5)
    ax_lux.set_ylabel("lux")
    ax_lux.set_ylim(0.0005, 200000)

    ax_dark.plot(hours, [f.darkness for f in frames], color="#7ec8e3", linewidth=1.5)
    ax_dark.set_ylabel("darkness %")
    ax_dark.set_ylim(-2, 102)

    strip = np.array([[_rgb(f.background) for f in frames]])
    ax_strip.imshow(strip, aspect="auto", extent=(0, 24, 0, 1))
    ax_strip.set_yticks([])
    ax_strip.set_xlabel("hour")
    ax_strip.set_xlim(0, 24)
    ax_strip.set_xticks(range(0, 25, 3))

    for event in sundial_events(schedule):
        for ax in (ax_lux, ax_dark):
            ax.axvline(
                event.minutes / 60,
                color="#999999",
                linewidth=0.8 if event.is_major else 0.4,
                linestyle="-" if event.is_major else ":",
            )

    fig.tight_layout()
    return fig


def save_day_curve(
    schedule: DaySchedule,
    moon_date: date | None = None,
    output_path: Path | None = None,
    tz: tzinfo | str | None = None,
) -> Path:
    """Save the day curve as a PNG file.

    Args:
        schedule: Solar boundaries for the day.
        moon_date: Calendar date for the moon phase (today when None).
        output_path: Destination path. Auto-generated under results/ if None.
        tz: Observer timezone for the moon phase.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        day = moon_date or date.today()
        output_path = _ROOT / "results" / f"daysky__{day:%Y_%m_%d}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_day_curve(schedule, moon_date, tz=tz)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
