"""HTML summary block shown under the sundial."""

import html

from daysky.i18n import t
from daysky.models import AmbientFrame, DaySchedule
from daysky.schedule import find_next_event
from daysky.timeutil import format_duration


def summary_lines(
    frame: AmbientFrame, schedule: DaySchedule | None, address_display: str, lang: str = "en"
) -> list[str]:
    """Plain-text lines: next event, darkness, moon, and the observer's address."""
    next_event = find_next_event(frame.minutes, schedule)
    lines = [
        f"{t('label_next_event', lang)}: {t(next_event.name, lang)} · "
        f"{format_duration(next_event.minutes_until)}",
        f"{t('label_darkness', lang)} {frame.darkness:.1f}% · {frame.lux:,.3f} lux",
    ]
    if frame.moon is not None:
        lines.append(
            f"{t('label_moon', lang)}: {t(frame.moon.phase_name, lang)} · "
            f"{frame.moon.illumination:.0f}%"
        )
    lines.append(address_display)
    return lines


def render_summary_html(
    frame: AmbientFrame, schedule: DaySchedule | None, address_display: str, lang: str = "en"
) -> str:
    """Summary block for ``st.markdown(..., unsafe_allow_html=True)``.

    Every line is HTML-escaped; the address comes straight from the geocoder
    or from ``DAYSKY_ADDRESS``.
    """
    lines = summary_lines(frame, schedule, address_display, lang)
    return "<div class='daysky-meta'>" + "<br>".join(html.escape(line) for line in lines) + "</div>"
