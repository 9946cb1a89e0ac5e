"""Tests for circular hue interpolation, the daily hue/saturation curves, and text contrast."""

import numpy as np
import pytest

from daysky.color import (
    compute_hue,
    compute_saturation,
    derive_text_color,
    get_complementary_hue,
    lerp_hue,
    lerp_hue_directed,
    update_contrast,
)
from daysky.models import ColorSample, ContrastState

from conftest import hm


def _hue_gap(a: float, b: float) -> float:
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


# =============================================================================
# Hue arithmetic
# =============================================================================


class TestHueArithmetic:
    def test_shorter_arc_wraps_through_zero(self):
        assert lerp_hue(350, 10, 0.5) == pytest.approx(0.0, abs=1e-9)
        assert lerp_hue(10, 350, 0.25) == pytest.approx(5.0)

    def test_end_points(self):
        assert lerp_hue(215, 35, 0.0) == pytest.approx(215.0)
        assert lerp_hue(30, 220, 1.0) == pytest.approx(220.0)

    def test_directed_increasing(self):
        assert lerp_hue_directed(215, 35, 0.5, direction=1) == pytest.approx(305.0)

    def test_directed_decreasing(self):
        assert lerp_hue_directed(215, 35, 0.5, direction=-1) == pytest.approx(125.0)

    def test_directed_result_in_range(self):
        for t in np.linspace(0, 1, 21):
            assert 0 <= lerp_hue_directed(300, 20, t) < 360

    def test_complementary_hue(self):
        assert get_complementary_hue(200) == 20
        assert get_complementary_hue(270) == 90
        assert get_complementary_hue(0) == 180


# =============================================================================
# Daily curves
# =============================================================================


class TestHueCurve:
    def test_range(self, schedule):
        for m in np.arange(0, 1440, 0.5):
            assert 0 <= compute_hue(m, schedule) < 360

    def test_continuous(self, schedule):
        hues = [compute_hue(m, schedule) for m in np.arange(0, 1440.25, 0.25)]
        assert max(_hue_gap(a, b) for a, b in zip(hues, hues[1:])) < 5

    def test_never_green(self, schedule):
        for m in np.arange(0, 1440, 0.25):
            hue = compute_hue(m, schedule)
            assert not 90 < hue < 180, f"green hue {hue:.1f} at minute {m}"

    def test_wraps_midnight(self, schedule):
        assert compute_hue(0, schedule) == compute_hue(1440, schedule)

    def test_anchors(self, schedule):
        assert compute_hue(hm(12), schedule) == pytest.approx(210.0)
        assert compute_hue(hm(6), schedule) == pytest.approx(15.0)
        assert compute_hue(hm(18), schedule) == pytest.approx(15.0)
        assert compute_hue(hm(19, 30), schedule) == pytest.approx(235.0)
        # Middle of the night
        assert compute_hue(0, schedule) == pytest.approx(240.0)

    def test_civil_dawn_goes_through_magenta(self, schedule):
        assert compute_hue(hm(5, 37.5), schedule) == pytest.approx(305.0)


class TestSaturationCurve:
    def test_range(self, schedule):
        for m in np.arange(0, 1440, 0.5):
            assert 8 <= compute_saturation(m, schedule) <= 20

    def test_whitest_at_noon(self, schedule):
        assert compute_saturation(hm(12), schedule) == pytest.approx(9.0)

    def test_most_saturated_at_sunrise_and_sunset(self, schedule):
        assert compute_saturation(hm(6), schedule) == pytest.approx(15.0)
        assert compute_saturation(hm(18), schedule) == pytest.approx(15.0)

    def test_night_ripple_is_bounded(self, schedule):
        for m in np.arange(hm(19, 30), hm(28, 30), 1.0):
            assert abs(compute_saturation(m, schedule) - 11.0) <= 0.75 + 1e-9

    def test_continuous_at_night_edges(self, schedule):
        assert compute_saturation(hm(19, 30), schedule) == pytest.approx(11.0)
        assert compute_saturation(hm(4, 30) - 1e-6, schedule) == pytest.approx(11.0, abs=1e-4)


# =============================================================================
# Text color and contrast
# =============================================================================


class TestTextColor:
    @pytest.mark.parametrize(
        ("background", "expected"),
        [(10, 95), (40, 85), (90, 5), (60, 15)],
    )
    def test_lightness_bands(self, background, expected):
        text = derive_text_color(ColorSample(hue=200, saturation=10, lightness=background))
        assert text.lightness == pytest.approx(expected)

    def test_complementary_hue(self):
        text = derive_text_color(ColorSample(hue=210, saturation=9, lightness=95))
        assert text.hue == pytest.approx(30.0)

    def test_saturation_capped(self):
        assert derive_text_color(ColorSample(200, 10, 50)).saturation == pytest.approx(15.0)
        assert derive_text_color(ColorSample(200, 15, 50)).saturation == pytest.approx(20.0)

    def test_contrast_state_picks_side(self):
        background = ColorSample(hue=200, saturation=10, lightness=52)
        text = derive_text_color(background, ContrastState(lightness=52, light_text=True))
        assert text.lightness == pytest.approx(85.0)


class TestContrastHysteresis:
    def test_first_sample_decides_directly(self):
        assert update_contrast(None, 30).light_text is True
        assert update_contrast(ContrastState(), 70).light_text is False

    def test_flip_waits_for_band(self):
        state = update_contrast(None, 30)
        flips = []
        for i in range(1, 15):
            state = update_contrast(state, 60)
            if not state.light_text:
                flips.append(i)
        # Smoothed lightness crosses 55 on the ninth update
        assert flips[0] == 9

    def test_no_flip_inside_band(self):
        state = ContrastState(lightness=56, light_text=False)
        for _ in range(50):
            state = update_contrast(state, 48)
        assert state.light_text is False
        assert state.lightness == pytest.approx(48.0, abs=0.01)

    def test_returns_new_state(self):
        state = ContrastState(lightness=40, light_text=True)
        updated = update_contrast(state, 80)
        assert updated is not state
        assert state.lightness == 40
        assert updated.lightness == pytest.approx(48.0)


class TestDuskAfterMidnight:
    def test_hue_continuous_and_never_green(self, summer_schedule):
        hues = [compute_hue(m, summer_schedule) for m in np.arange(0, 1440.25, 0.25)]
        assert max(_hue_gap(a, b) for a, b in zip(hues, hues[1:])) < 5
        assert not any(90 < hue < 180 for hue in hues)

    def test_dusk_hue_spans_midnight(self, summer_schedule):
        # 60 of the 100 astronomical-dusk minutes have passed at midnight
        assert compute_hue(0.0, summer_schedule) == pytest.approx(230 + 5 * 0.6)
        assert compute_hue(hm(0, 40), summer_schedule) == pytest.approx(235.0)

    def test_saturation_continuous(self, summer_schedule):
        values = [compute_saturation(m, summer_schedule) for m in np.arange(0, 1440.25, 0.25)]
        assert max(abs(b - a) for a, b in zip(values, values[1:])) < 0.2
