"""Tests for circular minute arithmetic, timestamp parsing, and display formatting."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from daysky.timeutil import (
    ParseError,
    angle_to_minutes,
    circular_distance,
    format_duration,
    format_time,
    localize,
    minutes_to_angle,
    normalize_minutes,
    time_to_minutes,
)


class TestTimeToMinutes:
    def test_utc_timestamp_in_utc(self):
        assert time_to_minutes("2024-03-20T06:15:30+00:00", "UTC") == pytest.approx(375.5)

    def test_converts_to_observer_timezone(self):
        # 03:00 UTC is noon in Seoul
        assert time_to_minutes("2024-06-01T03:00:00+00:00", "Asia/Seoul") == pytest.approx(720)

    def test_accepts_trailing_z(self):
        assert time_to_minutes("2024-06-01T18:45:00Z", "UTC") == pytest.approx(1125)

    def test_naive_timestamp_is_already_local(self):
        assert time_to_minutes("2024-06-01T07:30:00", "Asia/Seoul") == pytest.approx(450)

    def test_accepts_datetime(self):
        assert time_to_minutes(datetime(2024, 6, 1, 23, 59, 30)) == pytest.approx(1439.5)

    @pytest.mark.parametrize("bad", ["", "not a time", "2024-13-40T99:00:00"])
    def test_unparsable_raises_parse_error(self, bad):
        with pytest.raises(ParseError):
            time_to_minutes(bad, "UTC")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            time_to_minutes("garbage")


class TestAngles:
    def test_midnight_is_top(self):
        assert minutes_to_angle(0) == pytest.approx(-math.pi / 2)

    def test_quarter_points(self):
        assert minutes_to_angle(360) == pytest.approx(0.0)
        assert minutes_to_angle(720) == pytest.approx(math.pi / 2)
        assert minutes_to_angle(1080) == pytest.approx(math.pi)

    def test_angle_range(self):
        for m in range(0, 1440, 7):
            angle = minutes_to_angle(m)
            assert -math.pi / 2 <= angle < 3 * math.pi / 2

    def test_monotonic_over_the_day(self):
        angles = [minutes_to_angle(m) for m in range(1440)]
        assert all(b > a for a, b in zip(angles, angles[1:]))

    @pytest.mark.parametrize("minutes", [0.0, 0.5, 360.0, 720.0, 1080.0, 1439.99, 1234.567])
    def test_round_trip_minutes(self, minutes):
        assert circular_distance(angle_to_minutes(minutes_to_angle(minutes)), minutes) < 1e-6

    @pytest.mark.parametrize("angle", [-math.pi / 2, 0.0, 1.0, math.pi, 4.0])
    def test_round_trip_angles(self, angle):
        back = minutes_to_angle(angle_to_minutes(angle))
        assert math.cos(back - angle) == pytest.approx(1.0)
        assert math.sin(back - angle) == pytest.approx(0.0, abs=1e-9)

    def test_angle_to_minutes_normalizes_any_angle(self):
        assert circular_distance(angle_to_minutes(-math.pi / 2 + 10 * math.pi), 0.0) < 1e-6
        assert angle_to_minutes(-3 * math.pi / 2) == pytest.approx(720.0)
        assert 0 <= angle_to_minutes(-123.4) < 1440

    def test_1440_wraps_to_midnight(self):
        assert normalize_minutes(1440) == 0.0
        assert minutes_to_angle(1440) == pytest.approx(minutes_to_angle(0))


class TestFormatting:
    def test_format_time(self):
        assert format_time(0) == "00:00:00"
        assert format_time(375.5) == "06:15:30"
        assert format_time(1439.5) == "23:59:30"

    def test_format_duration_negative(self):
        assert format_duration(-5) == "--"

    def test_format_duration_hours(self):
        assert format_duration(125) == "2h 5m 0s"

    def test_format_duration_drops_leading_units(self):
        assert format_duration(5.5) == "5m 30s"
        assert format_duration(0.5) == "30s"
        assert format_duration(0) == "0s"


class TestLocalize:
    def test_zone_name(self):
        when = localize(datetime(2024, 3, 20, 18, 30), "Asia/Seoul")
        assert when.utcoffset() == timedelta(hours=9)
        assert (when.hour, when.minute) == (18, 30)

    def test_pytz_zone_applies_daylight_saving(self):
        when = localize(datetime(2024, 6, 21, 0, 30), "Europe/Madrid")
        assert when.utcoffset() == timedelta(hours=2)

    def test_fixed_offset(self):
        when = localize(datetime(2024, 3, 20, 12), timezone.utc)
        assert when.tzinfo is timezone.utc

    def test_no_timezone_stays_naive(self):
        assert localize(datetime(2024, 3, 20, 12), None).tzinfo is None
