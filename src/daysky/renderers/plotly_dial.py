"""Plotly sundial renderer.

Draws the 24h dial as a polar chart: midnight at the top, time running
clockwise, boundary events as markers on the rim and the current time as a
hand from the centre.
"""

import plotly.graph_objects as go

from daysky.i18n import t
from daysky.models import AmbientFrame, DaySchedule
from daysky.schedule import sundial_events
from daysky.timeutil import MINUTES_PER_DAY, format_time

_MAJOR_COLOR = "#f5c56b"
_MINOR_COLOR = "#7ec8e3"


def _theta(minutes: float) -> float:
    """Polar-axis degrees; the layout rotates 0 to the top and runs clockwise."""
    return minutes / MINUTES_PER_DAY * 360


def render_sundial(
    frame: AmbientFrame, schedule: DaySchedule | None, lang: str = "en"
) -> go.Figure:
    """Render the day dial for one frame.

    Args:
        frame: Current model output; its background/text colors style the dial.
        schedule: Solar boundaries to mark on the rim. None draws the hand only.
        lang: Language code for event labels.

    Returns:
        Plotly Figure object.
    """
    events = sundial_events(schedule)
    bg = frame.background.css()
    fg = frame.text.css()

    event_trace = go.Scatterpolar(
        r=[1.0] * len(events),
        theta=[_theta(e.minutes) for e in events],
        mode="markers+text",
        text=[t(e.label, lang) for e in events],
        textposition="top center",
        textfont=dict(color=fg, size=11),
        marker=dict(
            size=[12 if e.is_major else 7 for e in events],
            color=[_MAJOR_COLOR if e.is_major else _MINOR_COLOR for e in events],
            line=dict(width=0),
        ),
        hovertext=[f"{t(e.name, lang)} {format_time(e.minutes)}" for e in events],
        hoverinfo="text",
        name="events",
    )

    hand_trace = go.Scatterpolar(
        r=[0.0, 0.9],
        theta=[_theta(frame.minutes)] * 2,
        mode="lines",
        line=dict(color=fg, width=3),
        hoverinfo="skip",
        name="now",
    )

    fig = go.Figure(data=[event_trace, hand_trace])
    fig.update_layout(
        paper_bgcolor=bg,
        showlegend=False,
        margin=dict(l=20, r=20, t=20, b=20),
        width=480,
        height=480,
        polar=dict(
            bgcolor=bg,
            radialaxis=dict(visible=False, range=[0, 1.15]),
            angularaxis=dict(
                rotation=90,
                direction="clockwise",
                tickmode="array",
                tickvals=[0, 90, 180, 270],
                ticktext=["00", "06", "12", "18"],
                tickfont=dict(color=fg),
                gridcolor="rgba(255,255,255,0.08)",
                linecolor=fg,
            ),
        ),
    )
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig
