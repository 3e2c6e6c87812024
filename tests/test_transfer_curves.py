# -*- coding: utf-8 -*-
"""Tests for the transfer curve kernels and their dispatch."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lumen_types import GammaType
from transfer_curves import (
    ACES_CODE_CEILING, CURVES, HALF_FLOAT_MAX, TransferCurve, curve_pair,
    decode, decode_array, encode, encode_array, signed_pow,
)

# Working range including superblacks
WORKING_RANGE = np.concatenate([np.linspace(-0.1, 1.0, 111), np.geomspace(1.0, 64.0, 40)])
POSITIVE_RANGE = np.geomspace(1e-5, 64.0, 120)

NON_ACESCC = [g for g in GammaType if g is not GammaType.ACESCC]


class TestRoundTrip:
    @pytest.mark.parametrize("curve", NON_ACESCC, ids=lambda g: g.name)
    def test_decode_encode_identity(self, curve):
        restored = np.array([decode(encode(x, curve), curve) for x in WORKING_RANGE])
        assert_allclose(restored, WORKING_RANGE, atol=1e-4)

    def test_acescc_positive_range(self):
        restored = np.array([decode(encode(x, GammaType.ACESCC), GammaType.ACESCC)
                             for x in POSITIVE_RANGE])
        assert_allclose(restored, POSITIVE_RANGE, rtol=1e-6, atol=1e-9)

    @pytest.mark.parametrize("curve", list(GammaType), ids=lambda g: g.name)
    def test_encode_decode_identity_on_codes(self, curve):
        xs = POSITIVE_RANGE if curve is GammaType.ACESCC else WORKING_RANGE
        codes = np.array([encode(x, curve) for x in xs])
        again = np.array([encode(decode(y, curve), curve) for y in codes])
        assert_allclose(again, codes, atol=1e-4)


class TestSaturation:
    @pytest.mark.parametrize("curve", [GammaType.ACESCC, GammaType.ACESCCT])
    def test_decode_saturates_above_ceiling(self, curve):
        assert decode(ACES_CODE_CEILING + 0.01, curve) == HALF_FLOAT_MAX
        assert decode(1.5, curve) == HALF_FLOAT_MAX
        assert decode(10.0, curve) == HALF_FLOAT_MAX

    def test_ceiling_constant(self):
        assert ACES_CODE_CEILING == pytest.approx((math.log2(65504.0) + 9.72) / 17.52)
        assert HALF_FLOAT_MAX == 65504.0

    def test_acescc_floors_non_positive_input(self):
        floor = (math.log2(2.0 ** -16) + 9.72) / 17.52
        assert encode(0.0, GammaType.ACESCC) == pytest.approx(floor)
        assert encode(-1.0, GammaType.ACESCC) == pytest.approx(floor)
        assert encode(-1e6, GammaType.ACESCC) == pytest.approx(floor)


class TestGoldenValues:
    @pytest.mark.parametrize("curve, expected", [
        (GammaType.ACESCCT, 0.4135884),
        (GammaType.ACESCC, 0.4135884),
        (GammaType.SONY_SLOG3, 420.0 / 1023.0),
        (GammaType.ARRI_LOGC3, 0.391007),
        (GammaType.RED_LOG3G10, 1.0 / 3.0),
        (GammaType.PANASONIC_VLOG, 0.423312),
        (GammaType.DAVINCI_INTERMEDIATE, 0.336043),
    ], ids=lambda v: v.name if isinstance(v, GammaType) else None)
    def test_middle_grey(self, curve, expected):
        assert encode(0.18, curve) == pytest.approx(expected, abs=1e-4)

    @pytest.mark.parametrize("curve", [
        GammaType.REC709, GammaType.SRGB, GammaType.GAMMA_2_2,
        GammaType.GAMMA_2_4, GammaType.GAMMA_2_6, GammaType.LINEAR,
    ])
    def test_display_curves_pin_black_and_white(self, curve):
        assert encode(0.0, curve) == pytest.approx(0.0, abs=1e-12)
        assert encode(1.0, curve) == pytest.approx(1.0, abs=1e-9)
        assert decode(1.0, curve) == pytest.approx(1.0, abs=1e-9)

    def test_linear_is_identity(self):
        for v in (-3.5, 0.0, 0.18, 1e4):
            assert encode(v, GammaType.LINEAR) == v
            assert decode(v, GammaType.LINEAR) == v


class TestBreakpoints:
    @pytest.mark.parametrize(
        "curve", [g for g in GammaType if CURVES[g].linear_break is not None],
        ids=lambda g: g.name,
    )
    def test_continuous_at_break(self, curve):
        x0 = CURVES[curve].linear_break
        eps = 1e-9
        below = encode(x0 - eps, curve)
        above = encode(x0 + eps, curve)
        assert below == pytest.approx(above, abs=1e-5)

    @pytest.mark.parametrize(
        "curve", [g for g in GammaType if CURVES[g].linear_break is not None],
        ids=lambda g: g.name,
    )
    def test_code_grid_round_trip_across_break(self, curve):
        code_break = CURVES[curve].code_break
        codes = np.linspace(code_break - 2e-3, code_break + 2e-3, 81)
        again = np.array([encode(decode(y, curve), curve) for y in codes])
        assert_allclose(again, codes, atol=1e-5)

    def test_rec709_code_grid_round_trip(self):
        codes = np.linspace(0.0805, 0.0816, 23)
        again = np.array([encode(decode(y, "Rec.709"), "Rec.709") for y in codes])
        assert_allclose(again, codes, atol=1e-9)

    def test_rec709_break_is_continuous(self):
        x0 = CURVES[GammaType.REC709].linear_break
        assert 4.5 * x0 == pytest.approx(encode(x0 * (1 + 1e-12), GammaType.REC709), abs=1e-9)

    def test_code_break_property(self):
        record = curve_pair(GammaType.ACESCCT)
        assert record.code_break == pytest.approx(0.155251141552511, abs=1e-6)
        assert curve_pair(GammaType.GAMMA_2_4).code_break is None


class TestSignedPow:
    def test_odd_symmetry(self):
        assert signed_pow(-0.25, 0.5) == pytest.approx(-0.5)
        assert signed_pow(0.25, 0.5) == pytest.approx(0.5)
        assert signed_pow(0.0, 2.4) == 0.0

    @pytest.mark.parametrize("curve", [GammaType.GAMMA_2_2, GammaType.GAMMA_2_4, GammaType.GAMMA_2_6])
    def test_power_curves_are_finite_below_zero(self, curve):
        assert math.isfinite(encode(-0.5, curve))
        assert encode(-0.5, curve) == pytest.approx(-encode(0.5, curve))


class TestDispatch:
    def test_registry_covers_every_curve(self):
        assert set(CURVES) == set(GammaType)
        for gamma, record in CURVES.items():
            assert isinstance(record, TransferCurve)
            assert record.gamma is gamma

    def test_record_matches_dispatch(self):
        for gamma in GammaType:
            record = curve_pair(gamma)
            assert record.encode(0.3) == pytest.approx(encode(0.3, gamma))
            assert record.decode(0.3) == pytest.approx(decode(0.3, gamma))

    @pytest.mark.parametrize("selector", ["S-Log3", "sony_slog3", "SONY SLOG3", 4])
    def test_selector_coercion(self, selector):
        assert encode(0.18, selector) == encode(0.18, GammaType.SONY_SLOG3)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            encode(0.18, "Log-Z")

    def test_out_of_range_index_raises(self):
        with pytest.raises(ValueError):
            decode(0.5, 15)

    def test_bool_selector_raises(self):
        with pytest.raises(TypeError):
            encode(0.18, True)


class TestArrays:
    @pytest.mark.parametrize("curve", [GammaType.ARRI_LOGC4, GammaType.SRGB, GammaType.CANON_LOG3])
    def test_array_matches_scalar(self, curve):
        values = np.linspace(-0.05, 4.0, 24).reshape(2, 3, 4)
        encoded = encode_array(values, curve)
        assert encoded.shape == values.shape
        expected = np.array([encode(v, curve) for v in values.ravel()]).reshape(values.shape)
        assert_allclose(encoded, expected, rtol=0, atol=1e-12)
        assert_allclose(decode_array(encoded, curve), values, atol=1e-4)

    def test_array_accepts_lists_and_float32(self):
        out = encode_array(np.array([0.18, 1.0], dtype=np.float32), "Rec.709")
        assert out.dtype == np.float64
        assert out[1] == pytest.approx(1.0, abs=1e-6)
        assert_allclose(decode_array([0.0, 1.0], GammaType.LINEAR), [0.0, 1.0])
