"""Tests for the `daysky` click commands, with location and provider stubbed."""

import json

import pytest
from click.testing import CliRunner

from daysky import cli
from daysky.compute import GeocodingError, ProviderError
from daysky.models import ObserverContext

UTC_OBSERVER = ObserverContext(lat=0.0, lng=0.0, tz_name="UTC", address_display="Null Island")


@pytest.fixture
def env(monkeypatch):
    for key in (
        "DAYSKY_ADDRESS",
        "DAYSKY_LAT",
        "DAYSKY_LNG",
        "DAYSKY_TZ",
        "DAYSKY_PROVIDER",
        "DAYSKY_TICK_SECONDS",
        "DAYSKY_REFRESH_SECONDS",
        "DAYSKY_LANG",
        "DAYSKY_EPHEMERIS_DIR",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    return monkeypatch


@pytest.fixture
def located(env, schedule):
    env.setenv("DAYSKY_LAT", "0")
    env.setenv("DAYSKY_LNG", "0")
    env.setattr(cli, "resolve_observer", lambda settings: UTC_OBSERVER)
    env.setattr(cli, "load_schedule", lambda context, day, settings: schedule)
    return env


class TestNowCommand:
    def test_json_frame_at_noon(self, located):
        result = CliRunner().invoke(cli.main, ["now", "--date", "2024-03-20", "--at", "12:00", "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["time"] == "12:00:00"
        assert payload["segment"] == "afternoon"
        assert payload["lux"] == pytest.approx(100000.0)
        assert payload["background"]["lightness"] == pytest.approx(95.0)
        assert payload["background"]["darker"] == pytest.approx(85.0)
        assert payload["next_event"] == {"name": "Sunset", "in": "6h 0m 0s"}

    def test_korean_labels(self, located):
        located.setenv("DAYSKY_LANG", "ko")
        result = CliRunner().invoke(cli.main, ["now", "--date", "2024-03-20", "--at", "05:45", "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["segment"] == "civil_dawn"
        assert payload["next_event"]["name"] == "일출"

    def test_text_output(self, located):
        result = CliRunner().invoke(cli.main, ["now", "--date", "2024-03-20", "--at", "00:00"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("00:00:00  pre_dawn_night")
        assert "Next: Astronomical Twilight Begin (4h 30m 0s)" in result.output

    def test_bad_clock(self, located):
        result = CliRunner().invoke(cli.main, ["now", "--at", "noon"])
        assert result.exit_code == cli.EXIT_INPUT_ERROR
        assert "HH:MM" in result.output


class TestErrors:
    def test_missing_location_is_input_error(self, env):
        result = CliRunner().invoke(cli.main, ["now"])
        assert result.exit_code == cli.EXIT_INPUT_ERROR
        assert "DAYSKY_ADDRESS" in result.output

    def test_geocoding_failure(self, env):
        env.setenv("DAYSKY_ADDRESS", "nowhere")

        def fail(settings):
            raise GeocodingError("Address not found: nowhere")

        env.setattr(cli, "resolve_observer", fail)
        result = CliRunner().invoke(cli.main, ["now"])
        assert result.exit_code == cli.EXIT_DATA_UNAVAILABLE
        assert "Address not found" in result.output

    def test_provider_failure(self, located):
        def fail(context, day, settings):
            raise ProviderError("sunrise-sunset error: INVALID_DATE")

        located.setattr(cli, "load_schedule", fail)
        result = CliRunner().invoke(cli.main, ["now", "--json"])
        assert result.exit_code == cli.EXIT_DATA_UNAVAILABLE
        assert "INVALID_DATE" in result.output


class TestCurveCommand:
    def test_saves_png(self, located, tmp_path):
        out = tmp_path / "curve.png"
        result = CliRunner().invoke(cli.main, ["curve", "--date", "2024-03-20", "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()
        assert f"Saved: {out}" in result.output
