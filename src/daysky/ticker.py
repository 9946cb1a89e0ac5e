"""Caller-owned tick loop: owns the schedule reference and the contrast accumulator."""

import logging
import threading
import time
from collections.abc import Callable
from datetime import date, datetime, tzinfo

from daysky.ambient import compute_frame
from daysky.compute import ProviderError
from daysky.models import AmbientFrame, ContrastState, DaySchedule
from daysky.schedule import ScheduleInvalidError
from daysky.timeutil import ParseError, minutes_of_day, normalize_minutes

logger = logging.getLogger(__name__)

ScheduleFetcher = Callable[[date], DaySchedule]


class AmbientTicker:
    """Drive the appearance model once per tick.

    The ticker is the single writer of both the schedule reference and the
    contrast accumulator. Schedule swaps happen under a lock, so a tick sees
    either the old schedule or the new one, never a mix.
    """

    def __init__(
        self,
        fetch_schedule: ScheduleFetcher | None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._fetch_schedule = fetch_schedule
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._lock = threading.Lock()
        self._schedule: DaySchedule | None = None
        self.contrast = ContrastState()
        self.override_minutes: float | None = None  # Manual scrubbing; None follows the clock

    @property
    def schedule(self) -> DaySchedule | None:
        with self._lock:
            return self._schedule

    def replace_schedule(self, schedule: DaySchedule) -> None:
        with self._lock:
            self._schedule = schedule

    def refresh(self, day: date | None = None) -> bool:
        """Fetch a fresh schedule, keeping the last good one on failure.

        Returns:
            True when the schedule was replaced.
        """
        if self._fetch_schedule is None:
            return False
        day = day or self._clock().date()
        try:
            schedule = self._fetch_schedule(day)
        except (ParseError, ScheduleInvalidError, ProviderError) as exc:
            if self.schedule is None:
                logger.warning("Schedule refresh failed, no schedule loaded yet: %s", exc)
            else:
                logger.warning("Schedule refresh failed, keeping previous schedule: %s", exc)
            return False
        self.replace_schedule(schedule)
        logger.debug("Schedule replaced for %s", day)
        return True

    def tick(self, now: datetime | None = None) -> AmbientFrame:
        now = now or self._clock()
        if self.override_minutes is None:
            minutes = minutes_of_day(now)
        else:
            minutes = normalize_minutes(self.override_minutes)
        frame = compute_frame(minutes, self.schedule, now.date(), self.contrast, self._tz)
        self.contrast = frame.contrast
        return frame

    def run(
        self,
        on_frame: Callable[[AmbientFrame], None],
        stop: threading.Event,
        tick_seconds: float = 1.0,
        refresh_seconds: float = 60.0,
    ) -> None:
        """Tick until ``stop`` is set, refreshing the schedule periodically."""
        next_refresh = time.monotonic()
        while not stop.is_set():
            if time.monotonic() >= next_refresh:
                self.refresh()
                next_refresh = time.monotonic() + refresh_seconds
            on_frame(self.tick())
            stop.wait(tick_seconds)
