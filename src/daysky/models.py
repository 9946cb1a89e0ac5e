"""Data model definitions. Explicit boundaries between the schedule, model, and render layers."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address string ("Central Park, New York")
    day: date  # Local calendar day to fetch sun events for


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone lookup. Input to the sun-events providers."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    tz_name: str  # IANA timezone name ("Asia/Seoul")
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class DaySchedule:
    """The nine solar boundaries of one local day, in minutes since midnight.

    Built by ``daysky.schedule.make_schedule``, which guarantees the fields are
    strictly increasing in declaration order on the day that starts at
    astronomical dawn. Only ``astro_twilight_end`` may fall after local
    midnight (summer at mid latitudes), in which case it is stored as its
    clock minute and ``timeline()`` adds the day back. Never mutated; a
    provider refresh produces a new instance.
    """

    astro_twilight_begin: float
    nautical_twilight_begin: float
    civil_twilight_begin: float
    sunrise: float
    solar_noon: float
    sunset: float
    civil_twilight_end: float
    nautical_twilight_end: float
    astro_twilight_end: float

    def boundaries(self) -> tuple[float, ...]:
        return (
            self.astro_twilight_begin,
            self.nautical_twilight_begin,
            self.civil_twilight_begin,
            self.sunrise,
            self.solar_noon,
            self.sunset,
            self.civil_twilight_end,
            self.nautical_twilight_end,
            self.astro_twilight_end,
        )

    @property
    def dusk_wraps(self) -> bool:
        """Astronomical dusk falls after local midnight."""
        return self.astro_twilight_end < self.nautical_twilight_end

    def timeline(self) -> tuple[float, ...]:
        """Boundaries on an unwrapped minute line, strictly increasing."""
        bounds = self.boundaries()
        if self.dusk_wraps:
            return bounds[:-1] + (bounds[-1] + 24 * 60,)
        return bounds

    @property
    def night_length(self) -> float:
        """Minutes from astronomical dusk to the next astronomical dawn."""
        return self.astro_twilight_begin + 24 * 60 - self.timeline()[-1]


class Segment(str, Enum):
    """The ten stretches of the [0, 1440) minute line cut by the nine boundaries."""

    PRE_DAWN_NIGHT = "pre_dawn_night"
    ASTRONOMICAL_DAWN = "astronomical_dawn"
    NAUTICAL_DAWN = "nautical_dawn"
    CIVIL_DAWN = "civil_dawn"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DUSK = "astronomical_dusk"
    POST_DUSK_NIGHT = "post_dusk_night"


@dataclass(frozen=True)
class SundialEvent:
    """A single boundary placed on the 24h dial."""

    name: str  # i18n key ("sunrise", "civil_twilight_end", ...)
    label: str  # i18n key of the short dial label
    minutes: float  # Minutes since local midnight
    angle: float  # Dial angle in radians (midnight at -pi/2)
    is_major: bool  # Sunrise, solar noon, sunset


@dataclass(frozen=True)
class NextEvent:
    name: str  # i18n key, or "--" when no schedule is loaded
    minutes_until: float


@dataclass(frozen=True)
class ColorSample:
    """HSL color handed to the styling layer."""

    hue: float  # Degrees, [0, 360)
    saturation: float  # Percent, [0, 100]
    lightness: float  # Percent, [0, 100]

    @property
    def darker(self) -> float:
        """Lightness of the darker gradient stop."""
        return max(0.0, min(100.0, self.lightness - 10))

    def css(self, lightness: float | None = None) -> str:
        light = self.lightness if lightness is None else lightness
        return f"hsl({self.hue:.1f}, {self.saturation:.1f}%, {light:.1f}%)"


@dataclass(frozen=True)
class MoonPhaseSample:
    phase: float  # 0 = new moon, 0.5 = full moon, [0, 1)
    illumination: float  # Percent lit, [0, 100]
    lux: float  # Night-sky floor contributed by the moon, [0.001, 0.27]
    phase_name: str  # i18n key ("full_moon", "waxing_crescent", ...)


@dataclass(frozen=True)
class ContrastState:
    """Caller-owned accumulator for text-contrast hysteresis.

    Threaded from tick to tick by the caller; each update returns a new
    instance. ``None`` fields mean no sample has been seen yet.
    """

    lightness: float | None = None  # Smoothed background lightness
    light_text: bool | None = None  # Current light-on-dark decision


@dataclass(frozen=True)
class AmbientFrame:
    """Everything a single tick produces. The sole input to renderers."""

    minutes: float
    segment: Segment | None  # None when no schedule is loaded
    lux: float
    darkness: float
    background: ColorSample
    text: ColorSample
    moon: MoonPhaseSample | None
    contrast: ContrastState = field(default_factory=ContrastState)
