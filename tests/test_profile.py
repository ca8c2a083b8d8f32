import math

import numpy as np
import pytest

from tinct_colorengine import D65, TWO_PI, LUVColor
from tinct_gamut import most_saturated_in_gamut
from tinct_profile import (
    LightnessProfile,
    angular_distance,
    inverse_quadratic_bezier,
    mix_hue,
    quadratic_bezier,
    target_lightness,
)


def test_mix_hue_wraps_upward_through_zero():
    mid = mix_hue(0.5, 0.1, TWO_PI - 0.1)
    assert angular_distance(mid, 0.0) == pytest.approx(0.0, abs=1e-12)


def test_mix_hue_runs_down_when_start_is_far_past_end():
    # h0 - h1 > pi: no wrap through 0, the mix goes straight down
    mid = mix_hue(0.5, TWO_PI - 0.1, 0.1)
    assert mid == pytest.approx(math.pi, abs=1e-12)

    # a warm sequential at hue 5.5 heads toward yellow through blue and green
    h = mix_hue(0.5, 5.5, D65.bright_hue)
    assert h == pytest.approx(0.5 * (5.5 + D65.bright_hue), abs=1e-12)
    assert h == pytest.approx(3.4994, abs=1e-4)


def test_mix_hue_normalizes_inputs():
    assert mix_hue(0.5, 0.1 + TWO_PI, -0.1) == pytest.approx(mix_hue(0.5, 0.1, TWO_PI - 0.1))
    assert mix_hue(0.0, -1.0, 1.0) == pytest.approx(TWO_PI - 1.0)


def test_mix_hue_endpoints():
    assert mix_hue(0.0, 1.0, 4.0) == pytest.approx(1.0)
    assert mix_hue(1.0, 1.0, 4.0) == pytest.approx(4.0)
    assert mix_hue(0.25, 1.0, 2.0) == pytest.approx(1.25)


def test_angular_distance():
    assert angular_distance(0.1, TWO_PI - 0.1) == pytest.approx(0.2)
    assert angular_distance(1.0, 1.0 + math.pi) == pytest.approx(math.pi)
    assert angular_distance(-0.5, 0.5) == pytest.approx(1.0)


def test_target_lightness_range():
    assert target_lightness(0.0, 0.0, 0.0) == pytest.approx(0.0)
    assert target_lightness(1.0, 1.0, 0.3) == pytest.approx(100.0)
    # zero contrast flattens the curve
    assert target_lightness(0.0, 0.0, 0.5) == pytest.approx(target_lightness(1.0, 0.0, 0.5))
    ts = np.linspace(0.0, 1.0, 11)
    ls = [target_lightness(t, 0.7, 0.4) for t in ts]
    assert all(a < b for a, b in zip(ls, ls[1:]))


def test_quadratic_bezier_endpoints():
    b0 = LUVColor(0.0, 0.0, 0.0)
    b1 = LUVColor(50.0, 40.0, -10.0)
    b2 = LUVColor(100.0, 0.0, 0.0)
    assert quadratic_bezier(b0, b1, b2, 0.0) == b0
    assert quadratic_bezier(b0, b1, b2, 1.0) == b2
    mid = quadratic_bezier(b0, b1, b2, 0.5)
    np.testing.assert_allclose(mid.to_array(), [50.0, 20.0, -5.0])


def test_inverse_quadratic_bezier():
    # B(0.3) = 0.42 * 30 + 0.09 * 100 = 21.6
    assert inverse_quadratic_bezier(0.0, 30.0, 100.0, 21.6) == pytest.approx(0.3)
    assert inverse_quadratic_bezier(0.0, 30.0, 100.0, 0.0) == pytest.approx(0.0, abs=1e-12)
    assert inverse_quadratic_bezier(0.0, 30.0, 100.0, 100.0) == pytest.approx(1.0)


def test_inverse_quadratic_bezier_linear_fallback():
    assert inverse_quadratic_bezier(0.0, 50.0, 100.0, 25.0) == pytest.approx(0.25)
    assert inverse_quadratic_bezier(10.0, 10.0, 10.0, 10.0) == 0.0


def test_build_control_points():
    profile = LightnessProfile.build(4.0, 0.6, 0.15)
    assert profile.p0 == LUVColor(0.0, 0.0, 0.0)
    np.testing.assert_allclose(profile.p1.to_array(), most_saturated_in_gamut(4.0).to_array())
    expected_l = 0.85 * 100.0 + 0.15 * D65.bright_point.l
    assert profile.p2.l == pytest.approx(expected_l)
    np.testing.assert_allclose(profile.q1.to_array(),
                               0.5 * (profile.q0.to_array() + profile.q2.to_array()))


def test_zero_warmth_ends_at_white():
    profile = LightnessProfile.build(1.0, 0.8, 0.0)
    np.testing.assert_allclose(profile.p2.to_array(), [100.0, 0.0, 0.0], atol=1e-12)


def test_zero_saturation_is_gray():
    profile = LightnessProfile.build(2.0, 0.0, 0.0)
    for t in (0.0, 0.5, 1.0):
        c = profile.sample(t, 0.8, 0.5)
        assert c.chroma == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("hue", [0.0, 1.3, 2.8, 4.4, 5.9])
def test_sample_hits_target_lightness(hue):
    profile = LightnessProfile.build(hue, 0.6, 0.0)
    for t in np.linspace(0.0, 1.0, 9):
        c = profile.sample(t, 0.8, 0.5)
        assert c.l == pytest.approx(target_lightness(t, 0.8, 0.5), abs=1e-6)


def test_sample_many_matches_sample():
    profile = LightnessProfile.build(0.5, 0.7, 0.2)
    ts = [1.0, 0.5, 0.0]
    out = profile.sample_many(ts, 0.6, 0.7)
    assert out.shape == (3, 3)
    for row, t in zip(out, ts):
        np.testing.assert_array_equal(row, profile.sample(t, 0.6, 0.7).to_array())
