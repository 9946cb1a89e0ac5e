"""`daysky` command line: one frame, a whole-day chart, or a live tick loop."""

import json
import logging
import threading
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from pytz import timezone

from daysky.ambient import compute_frame
from daysky.compute import GeocodingError, ProviderError, load_schedule, resolve_observer
from daysky.config import ConfigError, Settings, load_settings
from daysky.i18n import t
from daysky.models import AmbientFrame, DaySchedule, ObserverContext
from daysky.schedule import ScheduleInvalidError, find_next_event
from daysky.ticker import AmbientTicker
from daysky.timeutil import ParseError, format_duration, format_time, minutes_of_day

EXIT_INPUT_ERROR = 1
EXIT_DATA_UNAVAILABLE = 4


class DayskyCliError(click.ClickException):
    """Click exception with explicit exit-code control."""

    def __init__(self, message: str, *, exit_code: int = EXIT_INPUT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)


def _settings() -> Settings:
    try:
        return load_settings()
    except ConfigError as exc:
        raise DayskyCliError(str(exc)) from exc


def _observer(settings: Settings) -> ObserverContext:
    try:
        return resolve_observer(settings)
    except (GeocodingError, ProviderError) as exc:
        raise DayskyCliError(str(exc), exit_code=EXIT_DATA_UNAVAILABLE) from exc


def _schedule(context: ObserverContext, day: date, settings: Settings) -> DaySchedule:
    try:
        return load_schedule(context, day, settings)
    except (ProviderError, ScheduleInvalidError, ParseError) as exc:
        raise DayskyCliError(str(exc), exit_code=EXIT_DATA_UNAVAILABLE) from exc


def _parse_clock(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        parsed = datetime.strptime(value, "%H:%M")
    except ValueError as exc:
        raise DayskyCliError(f"--at must be HH:MM, got {value!r}") from exc
    return minutes_of_day(parsed)


def frame_payload(frame: AmbientFrame, schedule: DaySchedule | None, lang: str) -> dict[str, Any]:
    next_event = find_next_event(frame.minutes, schedule)
    return {
        "time": format_time(frame.minutes),
        "segment": frame.segment.value if frame.segment else None,
        "lux": round(frame.lux, 4),
        "darkness": round(frame.darkness, 2),
        "background": {**asdict(frame.background), "darker": frame.background.darker},
        "text": {**asdict(frame.text), "darker": frame.text.darker},
        "moon": None
        if frame.moon is None
        else {**asdict(frame.moon), "label": t(frame.moon.phase_name, lang)},
        "next_event": {
            "name": t(next_event.name, lang),
            "in": format_duration(next_event.minutes_until),
        },
    }


def _echo_frame(frame: AmbientFrame, schedule: DaySchedule | None, lang: str, as_json: bool) -> None:
    payload = frame_payload(frame, schedule, lang)
    if as_json:
        click.echo(json.dumps(payload, ensure_ascii=False))
        return
    moon = payload["moon"]
    click.echo(
        f"{payload['time']}  {payload['segment'] or '--':<18} "
        f"lux={payload['lux']:<11} {t('label_darkness', lang)}={payload['darkness']:>6.2f}%  "
        f"bg={frame.background.css()}  text={frame.text.css()}  "
        f"{t('label_moon', lang)}={moon['label'] if moon else '--'}  "
        f"{t('label_next_event', lang)}: {payload['next_event']['name']} "
        f"({payload['next_event']['in']})"
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Ambient sky color and darkness from real sun and moon events."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("now")
@click.option("--date", "day", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Local day (default: today).")
@click.option("--at", "at", type=str, default=None, help="Override the time of day (HH:MM).")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON.")
def now_command(day: datetime | None, at: str | None, as_json: bool) -> None:
    """Print the frame for the configured location right now."""
    settings = _settings()
    context = _observer(settings)
    local_now = datetime.now(timezone(context.tz_name))
    target_day = day.date() if day else local_now.date()
    schedule = _schedule(context, target_day, settings)

    minutes = _parse_clock(at)
    if minutes is None:
        minutes = minutes_of_day(local_now)
    frame = compute_frame(minutes, schedule, target_day, tz=context.tz_name)
    _echo_frame(frame, schedule, settings.lang, as_json)


@main.command("curve")
@click.option("--date", "day", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Local day (default: today).")
@click.option("--out", "out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="PNG path.")
def curve_command(day: datetime | None, out: Path | None) -> None:
    """Save the day's lux, darkness, and color curve as a PNG."""
    from daysky.renderers.static import save_day_curve

    settings = _settings()
    context = _observer(settings)
    target_day = day.date() if day else datetime.now(timezone(context.tz_name)).date()
    schedule = _schedule(context, target_day, settings)
    path = save_day_curve(schedule, target_day, out, tz=context.tz_name)
    click.echo(f"Saved: {path}")


@main.command("watch")
@click.option("--at", "at", type=str, default=None, help="Freeze the displayed time of day (HH:MM).")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON lines.")
def watch_command(at: str | None, as_json: bool) -> None:
    """Run the tick loop and print one frame per tick until interrupted."""
    settings = _settings()
    context = _observer(settings)
    tz = timezone(context.tz_name)

    ticker = AmbientTicker(lambda day: load_schedule(context, day, settings), tz=tz)
    ticker.override_minutes = _parse_clock(at)

    stop = threading.Event()
    try:
        ticker.run(
            lambda frame: _echo_frame(frame, ticker.schedule, settings.lang, as_json),
            stop,
            tick_seconds=settings.tick_seconds,
            refresh_seconds=settings.refresh_seconds,
        )
    except KeyboardInterrupt:
        stop.set()


if __name__ == "__main__":
    main()
