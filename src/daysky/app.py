"""DaySky: Streamlit ambient display whose colors follow the real sky."""

import datetime
import time

import streamlit as st
from dotenv import load_dotenv
from pytz import timezone
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from daysky.ambient import compute_frame  # noqa: E402
from daysky.compute import (  # noqa: E402
    GeocodingError,
    ProviderError,
    load_schedule,
    resolve_observer,
)
from daysky.config import ConfigError, load_settings  # noqa: E402
from daysky.i18n import t  # noqa: E402
from daysky.renderers.plotly_dial import render_sundial  # noqa: E402
from daysky.renderers.summary_html import render_summary_html  # noqa: E402
from daysky.schedule import ScheduleInvalidError  # noqa: E402
from daysky.timeutil import (  # noqa: E402
    ParseError,
    format_time,
    minutes_of_day,
)

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

try:
    _settings = load_settings()
except ConfigError as exc:
    st.error(str(exc))
    st.stop()

_lang: str = st.session_state.get("lang", _settings.lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
# The schedule and the contrast accumulator are the only values carried
# between reruns; everything else is recomputed from them each tick.

if "context" not in st.session_state:
    st.session_state.context = None
if "schedule" not in st.session_state:
    st.session_state.schedule = None
if "schedule_fetched_at" not in st.session_state:
    st.session_state.schedule_fetched_at = 0.0
if "contrast" not in st.session_state:
    st.session_state.contrast = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

if st.session_state.context is None:
    try:
        st.session_state.context = resolve_observer(_settings)
    except GeocodingError as exc:
        st.error(t("error_schedule", _lang).format(error=exc))
        st.stop()

_context = st.session_state.context
_now = datetime.datetime.now(timezone(_context.tz_name))

# Refresh the schedule on the configured period, keeping the last good one on failure
if time.monotonic() - st.session_state.schedule_fetched_at >= _settings.refresh_seconds:
    with st.spinner(t("loading_schedule", _lang)):
        try:
            st.session_state.schedule = load_schedule(_context, _now.date(), _settings)
            st.session_state.error_msg = None
        except (ProviderError, ScheduleInvalidError, ParseError) as exc:
            st.session_state.error_msg = str(exc)
    st.session_state.schedule_fetched_at = time.monotonic()

# --- Time override ---
_override = st.toggle(t("label_override", _lang), key="override_on")
if _override:
    _picked: datetime.time = st.slider(
        t("label_override", _lang),
        min_value=datetime.time(0, 0),
        max_value=datetime.time(23, 59),
        value=_now.time().replace(second=0, microsecond=0),
        step=datetime.timedelta(minutes=5),
        label_visibility="collapsed",
    )
    _minutes = _picked.hour * 60 + _picked.minute
else:
    _minutes = minutes_of_day(_now)

_schedule = st.session_state.schedule
_frame = compute_frame(
    _minutes, _schedule, _now.date(), st.session_state.contrast, tz=_context.tz_name
)
st.session_state.contrast = _frame.contrast

_bg = _frame.background
_fg = _frame.text

# --- Ambient theme CSS (recomputed every tick) ---
st.markdown(
    f"""
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {{
        background: linear-gradient(180deg, {_bg.css()} 0%, {_bg.css(_bg.darker)} 100%) !important;
        transition: background 1s linear;
    }}
    [data-testid="stHeader"], [data-testid="stToolbar"] {{
        display: none !important;
    }}
    html, body, p, label, span, h1, h2, h3, [data-testid="stWidgetLabel"] p {{
        color: {_fg.css()} !important;
    }}
    .daysky-clock {{
        font-size: 3.2rem;
        text-align: center;
        letter-spacing: 0.08em;
        margin: 0.5rem 0 0;
    }}
    .daysky-meta {{
        text-align: center;
        opacity: 0.8;
        font-size: 0.95rem;
        line-height: 1.8;
    }}
    </style>
    """,
    unsafe_allow_html=True,
)

st.markdown(f"<div class='daysky-clock'>{format_time(_minutes)}</div>", unsafe_allow_html=True)

st.plotly_chart(
    render_sundial(_frame, _schedule, _lang),
    use_container_width=False,
    config={"displayModeBar": False},
)

st.markdown(
    render_summary_html(_frame, _schedule, _context.address_display, _lang),
    unsafe_allow_html=True,
)

if st.session_state.error_msg:
    st.caption(t("error_schedule", _lang).format(error=st.session_state.error_msg))

# --- Tick ---
if not _override:
    time.sleep(_settings.tick_seconds)
    st.rerun()
