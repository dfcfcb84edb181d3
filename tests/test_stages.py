"""Tests for the individual recolor stages."""

import math

import numpy as np
import pytest

from labtint.color.sampler import DominantStats
from labtint.color.stages import (
    HueChromaMapping,
    apply_clarity,
    apply_depth,
    apply_finish,
    apply_glossy,
    apply_matte,
    apply_vibrance,
    column_positions,
    lift_lightness,
    pastel_factor,
    protection_mask,
    remap_hue_chroma,
)


@pytest.fixture
def lab_samples():
    """Random chromatic Lab values in a plausible range."""
    rng = np.random.default_rng(5)
    n = 500
    L = rng.uniform(5.0, 95.0, n)
    a = rng.uniform(-60.0, 60.0, n)
    b = rng.uniform(-60.0, 60.0, n)
    return L, a, b


class TestHueChromaMapping:
    """Test the rotation/scale derivation."""

    def test_rotation_to_target_hue(self):
        """d_hue is the angle from the dominant hue to the target hue."""
        stats = DominantStats(lightness=50, chroma=30, hue=0.0, n_samples=1)
        mapping = HueChromaMapping.from_stats((60.0, 0.0, 30.0), stats)
        assert mapping.d_hue == pytest.approx(math.pi / 2)
        assert mapping.chroma_scale == pytest.approx(1.0)

    def test_chroma_scale_exponent(self):
        """Scale is (target_C / dominant_C) ** 0.9."""
        stats = DominantStats(lightness=50, chroma=20, hue=0.0, n_samples=1)
        mapping = HueChromaMapping.from_stats((50.0, 40.0, 0.0), stats)
        assert mapping.chroma_scale == pytest.approx(2.0**0.9)

    @pytest.mark.parametrize("warm,degrees", [(50, 12.0), (-50, -12.0), (25, 6.0), (0, 0.0)])
    def test_warm_bias(self, warm, degrees):
        """warm maps linearly to +-12 degrees of extra rotation."""
        stats = DominantStats(lightness=50, chroma=20, hue=0.0, n_samples=1)
        mapping = HueChromaMapping.from_stats((50.0, 20.0, 0.0), stats, warm=warm)
        assert mapping.d_hue == pytest.approx(math.radians(degrees))

    def test_achromatic_target_keeps_chroma(self):
        """A gray target leaves the chroma scale at 1."""
        stats = DominantStats(lightness=50, chroma=20, hue=1.0, n_samples=1)
        assert HueChromaMapping.from_stats((50.0, 0.0, 0.0), stats).chroma_scale == 1.0

    def test_achromatic_dominant_keeps_chroma(self):
        """A zero dominant chroma leaves the chroma scale at 1."""
        stats = DominantStats(lightness=50, chroma=0.0, hue=0.0, n_samples=1)
        assert HueChromaMapping.from_stats((50.0, 30.0, 30.0), stats).chroma_scale == 1.0


class TestRemapHueChroma:
    """Test the (a, b) rotation and scaling."""

    def test_zero_vector_stays_zero(self):
        """Neutral pixels never acquire color."""
        a = np.zeros(10)
        b = np.zeros(10)
        mapping = HueChromaMapping(d_hue=1.234, chroma_scale=3.5)
        a2, b2 = remap_hue_chroma(a, b, mapping)
        np.testing.assert_array_equal(a2, 0.0)
        np.testing.assert_array_equal(b2, 0.0)

    def test_quarter_turn_and_scale(self):
        mapping = HueChromaMapping(d_hue=math.pi / 2, chroma_scale=2.0)
        a2, b2 = remap_hue_chroma(np.array([1.0]), np.array([0.0]), mapping)
        assert a2[0] == pytest.approx(0.0, abs=1e-12)
        assert b2[0] == pytest.approx(2.0)

    def test_chroma_scaled_uniformly(self, lab_samples):
        """Every pixel's chroma is multiplied by the same factor."""
        _, a, b = lab_samples
        mapping = HueChromaMapping(d_hue=0.7, chroma_scale=1.5)
        a2, b2 = remap_hue_chroma(a, b, mapping)
        np.testing.assert_allclose(np.hypot(a2, b2), 1.5 * np.hypot(a, b), rtol=1e-12)

    def test_inputs_not_modified(self, lab_samples):
        _, a, b = lab_samples
        a0, b0 = a.copy(), b.copy()
        remap_hue_chroma(a, b, HueChromaMapping(d_hue=0.3, chroma_scale=2.0))
        np.testing.assert_array_equal(a, a0)
        np.testing.assert_array_equal(b, b0)


class TestProtectionAndLift:
    """Test white protection and the lightness lift."""

    def test_protection_thresholds(self):
        """Protected iff L >= white_protect and chroma < 12."""
        L = np.array([94.0, 93.99, 97.0, 97.0, 99.0])
        a = np.array([11.9, 0.0, 12.0, 0.0, 3.0])
        b = np.array([0.0, 0.0, 0.0, 0.0, 4.0])
        mask = protection_mask(L, a, b, 94.0)
        np.testing.assert_array_equal(mask, [True, False, False, True, True])

    def test_no_lift(self):
        """A darker target never darkens the image."""
        L = np.array([10.0, 50.0, 90.0])
        np.testing.assert_array_equal(lift_lightness(L, 0.0, 94.0), L)

    def test_full_lift_below_rolloff(self):
        """Below white_protect - 8 the full 0.85 * lift is applied."""
        L = np.array([10.0, 40.0, 85.9])
        np.testing.assert_allclose(lift_lightness(L, 10.0, 94.0), L + 8.5)

    def test_rolloff_reaches_zero_at_white(self):
        """At L=100 the rolloff factor is zero."""
        assert lift_lightness(np.array([100.0]), 20.0, 94.0)[0] == pytest.approx(100.0)

    def test_lift_clamped(self):
        out = lift_lightness(np.array([0.0, 90.0, 99.0]), 100.0, 88.0)
        assert np.all(out <= 100.0)
        assert np.all(out >= 0.0)

    def test_lift_monotonic_in_amount(self, lab_samples):
        L, _, _ = lab_samples
        small = lift_lightness(L, 5.0, 94.0)
        large = lift_lightness(L, 15.0, 94.0)
        assert np.all(large >= small)
        assert np.all(small >= L)

    @pytest.mark.parametrize("target_l,expected", [(-5.0, 0.0), (0.0, 0.0), (42.0, 0.42), (120.0, 1.0)])
    def test_pastel_factor(self, target_l, expected):
        assert pastel_factor(target_l) == pytest.approx(expected)


class TestColumnPositions:
    """Test the glossy finish's horizontal coordinate."""

    def test_single_column_is_zero(self):
        """W == 1 yields zeros instead of dividing by zero."""
        np.testing.assert_array_equal(column_positions(1, 4), np.zeros(4))

    def test_row_major_layout(self):
        x = column_positions(3, 2)
        np.testing.assert_allclose(x, [0.0, 0.5, 1.0, 0.0, 0.5, 1.0])

    def test_empty(self):
        assert column_positions(0, 5).size == 0


class TestFinish:
    """Test the glossy and matte finishes."""

    def test_none_and_zero_amount_are_noops(self, lab_samples):
        L, a, b = lab_samples
        for finish, amount in [("none", 1.0), ("glossy", 0.0), ("matte", 0.0)]:
            L2, a2, b2 = apply_finish(L, a, b, None, finish, amount, 0.5)
            assert L2 is L and a2 is a and b2 is b

    def test_unknown_finish_raises(self, lab_samples):
        L, a, b = lab_samples
        with pytest.raises(ValueError, match="Unknown finish"):
            apply_finish(L, a, b, None, "satin", 0.5, 0.5)

    def test_glossy_dark_left_pixel_unchanged(self):
        """No sheen where L is low and x is left of 0.58."""
        L, a, b = apply_glossy(
            np.array([20.0]), np.array([10.0]), np.array([-5.0]), np.array([0.1]), 1.0, 0.5
        )
        assert L[0] == pytest.approx(20.0)
        assert a[0] == pytest.approx(10.0)
        assert b[0] == pytest.approx(-5.0)

    def test_glossy_brightens_and_preserves_hue(self, lab_samples):
        L, a, b = lab_samples
        x = np.linspace(0.0, 1.0, L.size)
        L2, a2, b2 = apply_glossy(L, a, b, x, 0.8, 0.6)

        assert np.all(L2 >= L - 1e-9)
        assert np.all(np.hypot(a2, b2) >= np.hypot(a, b) - 1e-9)
        hue_before = np.arctan2(b, a)
        hue_after = np.arctan2(b2, a2)
        np.testing.assert_allclose(np.cos(hue_after - hue_before), 1.0, atol=1e-9)

    def test_glossy_right_edge_sheen(self):
        """At x=1 the direction term alone gives sheen = 0.35 * amount."""
        L, a, b = apply_glossy(np.array([20.0]), np.array([0.0]), np.array([0.0]),
                               np.array([1.0]), 1.0, 0.0)
        assert L[0] == pytest.approx(20.0 + 28.0 * 0.35)
        assert math.hypot(a[0], b[0]) == pytest.approx(6.0 * 0.35)

    def test_glossy_none_x_matches_zero_x(self, lab_samples):
        L, a, b = lab_samples
        via_none = apply_finish(L, a, b, None, "glossy", 0.7, 0.5)
        via_zero = apply_glossy(L, a, b, np.zeros_like(L), 0.7, 0.5)
        for got, expected in zip(via_none, via_zero):
            np.testing.assert_allclose(got, expected)

    def test_matte_full_amount(self):
        """Shadows lift by 18%, highlights roll off, chroma damps to 65%."""
        L, a, b = apply_matte(np.array([0.0, 100.0]), np.array([10.0, 10.0]),
                              np.array([-20.0, 0.0]), 1.0)
        assert L[0] == pytest.approx(18.0)
        assert L[1] == pytest.approx(96.5)
        np.testing.assert_allclose(a, [6.5, 6.5])
        np.testing.assert_allclose(b, [-13.0, 0.0])


class TestVibranceAndDepth:
    """Test the midtone chroma boost and the lightness S-curve."""

    def test_vibrance_zero_amount(self, lab_samples):
        L, a, b = lab_samples
        a2, b2 = apply_vibrance(L, a, b, 0.0, 0.5)
        assert a2 is a and b2 is b

    def test_vibrance_midtone_multiplier(self):
        """At L=50 the window is 0.5 and the multiplier is 1 + amount*(0.7+0.6p)*0.5."""
        a2, b2 = apply_vibrance(np.array([50.0]), np.array([10.0]), np.array([4.0]), 1.0, 0.5)
        assert a2[0] == pytest.approx(15.0)
        assert b2[0] == pytest.approx(6.0)

    @pytest.mark.parametrize("L", [0.0, 10.0, 98.0, 100.0])
    def test_vibrance_ignores_extremes(self, L):
        """Deep shadows and bright highlights get no boost."""
        a2, b2 = apply_vibrance(np.array([L]), np.array([10.0]), np.array([4.0]), 1.0, 1.0)
        assert a2[0] == pytest.approx(10.0)
        assert b2[0] == pytest.approx(4.0)

    def test_depth_fixed_point(self):
        """L=50 is unchanged by any depth amount."""
        for amount in (0.1, 0.5, 1.0):
            assert apply_depth(np.array([50.0]), amount)[0] == 50.0

    def test_depth_s_curve(self):
        out = apply_depth(np.array([25.0, 75.0]), 1.0)
        assert out[0] < 25.0
        assert out[1] > 75.0

    def test_depth_zero_amount(self, lab_samples):
        L, _, _ = lab_samples
        assert apply_depth(L, 0.0) is L

    def test_depth_clamped(self):
        out = apply_depth(np.array([0.0, 100.0]), 1.0)
        assert 0.0 <= out[0] <= 100.0
        assert 0.0 <= out[1] <= 100.0


class TestClarity:
    """Test local contrast on the L* plane."""

    def test_uniform_plane_unchanged(self):
        plane = np.full((6, 6), 37.0, dtype=np.float32)
        np.testing.assert_allclose(apply_clarity(plane, 1.0), plane, atol=1e-4)

    def test_zero_amount_returns_input(self):
        plane = np.random.default_rng(1).random((4, 4)) * 100.0
        assert apply_clarity(plane, 0.0) is plane

    def test_edge_contrast_increases(self):
        """Pixels beside a step edge move away from each other."""
        plane = np.full((5, 10), 40.0, dtype=np.float32)
        plane[:, 5:] = 60.0
        out = apply_clarity(plane, 1.0)
        assert np.all(out[:, 4] < 40.0)
        assert np.all(out[:, 5] > 60.0)
        # Far from the edge nothing changes
        np.testing.assert_allclose(out[:, 0], 40.0, atol=1e-4)
        np.testing.assert_allclose(out[:, 9], 60.0, atol=1e-4)

    def test_clamped(self):
        plane = np.zeros((5, 5), dtype=np.float32)
        plane[2, 2] = 100.0
        out = apply_clarity(plane, 1.0)
        assert out.min() >= 0.0
        assert out.max() <= 100.0
