"""Shared fixtures: a symmetric 06:00-18:00 day and a midsummer day whose dusk wraps midnight."""

import pytest

from daysky.models import DaySchedule
from daysky.schedule import make_schedule


def hm(hours: int, minutes: int = 0) -> float:
    return hours * 60 + minutes


@pytest.fixture
def schedule() -> DaySchedule:
    """Civil 05:30/18:30, sunrise 06:00, noon 12:00, sunset 18:00, 30-min twilight steps."""
    return make_schedule(
        astro_twilight_begin=hm(4, 30),
        nautical_twilight_begin=hm(5),
        civil_twilight_begin=hm(5, 30),
        sunrise=hm(6),
        solar_noon=hm(12),
        sunset=hm(18),
        civil_twilight_end=hm(18, 30),
        nautical_twilight_end=hm(19),
        astro_twilight_end=hm(19, 30),
    )


@pytest.fixture
def sun_information() -> dict:
    """sunrise-sunset.org payload (formatted=0) matching the ``schedule`` fixture in UTC."""
    return {
        "results": {
            "sunrise": "2024-03-20T06:00:00+00:00",
            "sunset": "2024-03-20T18:00:00+00:00",
            "solar_noon": "2024-03-20T12:00:00+00:00",
            "day_length": 43200,
            "civil_twilight_begin": "2024-03-20T05:30:00+00:00",
            "civil_twilight_end": "2024-03-20T18:30:00+00:00",
            "nautical_twilight_begin": "2024-03-20T05:00:00+00:00",
            "nautical_twilight_end": "2024-03-20T19:00:00+00:00",
            "astronomical_twilight_begin": "2024-03-20T04:30:00+00:00",
            "astronomical_twilight_end": "2024-03-20T19:30:00+00:00",
        },
        "status": "OK",
        "tzid": "UTC",
    }


@pytest.fixture
def summer_schedule() -> DaySchedule:
    """Madrid midsummer: astronomical dusk at 00:40 the next morning."""
    return make_schedule(
        astro_twilight_begin=hm(4, 58),
        nautical_twilight_begin=hm(5, 42),
        civil_twilight_begin=hm(6, 17),
        sunrise=hm(6, 44),
        solar_noon=hm(14, 14),
        sunset=hm(21, 48),
        civil_twilight_end=hm(22, 16),
        nautical_twilight_end=hm(23),
        astro_twilight_end=hm(0, 40),
    )


@pytest.fixture
def madrid_sun_information() -> dict:
    """sunrise-sunset.org payload for Madrid on 2024-06-21, in UTC (CEST is UTC+2)."""
    return {
        "results": {
            "sunrise": "2024-06-21T04:44:00+00:00",
            "sunset": "2024-06-21T19:48:00+00:00",
            "solar_noon": "2024-06-21T12:14:00+00:00",
            "day_length": 54240,
            "civil_twilight_begin": "2024-06-21T04:17:00+00:00",
            "civil_twilight_end": "2024-06-21T20:16:00+00:00",
            "nautical_twilight_begin": "2024-06-21T03:42:00+00:00",
            "nautical_twilight_end": "2024-06-21T21:00:00+00:00",
            "astronomical_twilight_begin": "2024-06-21T02:58:00+00:00",
            "astronomical_twilight_end": "2024-06-21T22:40:00+00:00",
        },
        "status": "OK",
        "tzid": "UTC",
    }
