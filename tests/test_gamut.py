# -*- coding: utf-8 -*-
"""Tests for the RGB <-> XYZ matrix tables."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lumen_gamut import (
    FROM_XYZ_ADAPTED, FROM_XYZ_DIRECT, PRIMARIES_XY, TO_XYZ_ADAPTED, TO_XYZ_DIRECT,
    WHITE_D65_XY, WHITE_XY, apply_matrix, bradford_matrix, conversion_matrix,
    convert_gamut, from_xyz, npm_from_chromaticities, to_xyz, xy_to_xyz,
)
from lumen_types import ColorSpacePrimaries

SPACES = list(ColorSpacePrimaries)
RGB_SPACES = [s for s in SPACES if s is not ColorSpacePrimaries.XYZ]


class TestTables:
    def test_shapes(self):
        for table in (TO_XYZ_DIRECT, FROM_XYZ_DIRECT, TO_XYZ_ADAPTED, FROM_XYZ_ADAPTED):
            assert table.shape == (len(SPACES), 3, 3)
            assert table.dtype == np.float64

    def test_tables_are_read_only(self):
        m = to_xyz(ColorSpacePrimaries.REC709)
        assert not m.flags.writeable
        with pytest.raises(ValueError):
            m[0, 0] = 0.0
        with pytest.raises(ValueError):
            FROM_XYZ_ADAPTED[0, 0, 0] = 1.0

    @pytest.mark.parametrize("adapted", [False, True])
    @pytest.mark.parametrize("space", SPACES, ids=lambda s: s.name)
    def test_round_trip_is_identity(self, space, adapted):
        product = from_xyz(space, adapted) @ to_xyz(space, adapted)
        assert_allclose(product, np.eye(3), atol=1e-4)

    @pytest.mark.parametrize("adapted", [False, True])
    def test_xyz_is_identity(self, adapted):
        assert_allclose(to_xyz(ColorSpacePrimaries.XYZ, adapted), np.eye(3))
        assert_allclose(from_xyz(ColorSpacePrimaries.XYZ, adapted), np.eye(3))

    def test_every_rgb_space_has_data(self):
        assert set(PRIMARIES_XY) == set(RGB_SPACES)
        assert set(WHITE_XY) == set(SPACES)


class TestKnownMatrices:
    def test_rec709_luminance_row(self):
        y_row = to_xyz(ColorSpacePrimaries.REC709)[1]
        assert_allclose(y_row, [0.2126, 0.7152, 0.0722], atol=1e-4)

    def test_ap0_matches_aces_reference(self):
        expected = np.array([
            [0.9525523959, 0.0000000000,  0.0000936786],
            [0.3439664498, 0.7281660966, -0.0721325464],
            [0.0000000000, 0.0000000000,  1.0088251844],
        ])
        assert_allclose(to_xyz(ColorSpacePrimaries.ACES_AP0), expected, atol=1e-5)

    def test_p3_variants_share_primaries_but_not_whites(self):
        dci = to_xyz(ColorSpacePrimaries.P3_DCI)
        d65 = to_xyz(ColorSpacePrimaries.P3_D65)
        assert not np.allclose(dci, d65)
        # A D65 gamut is left unchanged by adaptation
        assert_allclose(to_xyz(ColorSpacePrimaries.P3_D65, True), d65, atol=1e-12)


class TestWhitePoints:
    @pytest.mark.parametrize("space", RGB_SPACES, ids=lambda s: s.name)
    def test_direct_white_maps_to_native_white(self, space):
        white = to_xyz(space) @ np.ones(3)
        assert_allclose(white, xy_to_xyz(WHITE_XY[space]), atol=1e-9)

    @pytest.mark.parametrize("space", RGB_SPACES, ids=lambda s: s.name)
    def test_adapted_white_maps_to_d65(self, space):
        white = to_xyz(space, adapted=True) @ np.ones(3)
        assert_allclose(white, xy_to_xyz(WHITE_D65_XY), atol=1e-9)

    def test_adapted_neutral_survives_white_mismatch(self):
        # ACES white in AP0 lands on D65 white in Rec.709 only when adapted
        ones = np.ones(3)
        adapted = convert_gamut(ones, ColorSpacePrimaries.ACES_AP0,
                                ColorSpacePrimaries.REC709, adapted=True)
        direct = convert_gamut(ones, ColorSpacePrimaries.ACES_AP0,
                               ColorSpacePrimaries.REC709, adapted=False)
        assert_allclose(adapted, ones, atol=1e-9)
        assert not np.allclose(direct, ones, atol=1e-3)


class TestDerivation:
    def test_xy_to_xyz(self):
        assert_allclose(xy_to_xyz((0.3127, 0.3290)), [0.3127 / 0.3290, 1.0, 0.3583 / 0.3290])

    def test_xy_to_xyz_rejects_zero_y(self):
        with pytest.raises(ValueError, match="non-zero"):
            xy_to_xyz((0.3, 0.0))

    def test_npm_requires_three_primaries(self):
        with pytest.raises(ValueError, match="three primaries"):
            npm_from_chromaticities(((0.64, 0.33), (0.30, 0.60)), WHITE_D65_XY)

    def test_bradford_identity_for_equal_whites(self):
        d65 = xy_to_xyz(WHITE_D65_XY)
        assert_allclose(bradford_matrix(d65, d65), np.eye(3), atol=1e-12)

    def test_bradford_maps_source_white_to_destination(self):
        src = xy_to_xyz((0.32168, 0.33767))
        dst = xy_to_xyz(WHITE_D65_XY)
        assert_allclose(bradford_matrix(src, dst) @ src, dst, atol=1e-12)

    def test_bradford_is_cached(self):
        a = bradford_matrix((0.95047, 1.0, 1.08883), (0.96422, 1.0, 0.82521))
        b = bradford_matrix(np.array([0.95047, 1.0, 1.08883]), [0.96422, 1.0, 0.82521])
        assert a is b


class TestConversion:
    def test_same_space_is_identity(self):
        for space in SPACES:
            assert_allclose(conversion_matrix(space, space), np.eye(3), atol=1e-9)

    def test_round_trip_between_gamuts(self):
        rgb = np.array([[0.18, 0.18, 0.18], [1.2, 0.05, -0.02], [0.0, 0.4, 0.9]])
        there = convert_gamut(rgb, "S-Gamut3.Cine", "Rec.2020")
        back = convert_gamut(there, ColorSpacePrimaries.REC2020,
                             ColorSpacePrimaries.SONY_SGAMUT3_CINE)
        assert_allclose(back, rgb, atol=1e-9)

    def test_out_of_gamut_passes_through(self):
        green_2020 = np.array([0.0, 1.0, 0.0])
        out = convert_gamut(green_2020, ColorSpacePrimaries.REC2020, ColorSpacePrimaries.REC709)
        assert out[0] < 0.0 or out[2] < 0.0

    def test_two_step_matches_composite(self):
        rgb = np.array([0.3, 0.6, 0.1])
        composite = conversion_matrix("ARRI Wide Gamut 4", "P3-D65") @ rgb
        assert_allclose(convert_gamut(rgb, "ARRI Wide Gamut 4", "P3-D65"), composite, atol=1e-12)

    def test_apply_matrix_kernel(self):
        m = np.array(to_xyz(ColorSpacePrimaries.REC709))
        x, y, z = apply_matrix(m, 1.0, 1.0, 1.0)
        assert_allclose([x, y, z], m @ np.ones(3), atol=1e-12)

    def test_convert_rejects_bad_shape(self):
        with pytest.raises(ValueError, match="last dimension"):
            convert_gamut(np.zeros((2, 4)), "Rec.709", "Rec.2020")

    def test_selector_coercion(self):
        assert_allclose(to_xyz("rec2020"), to_xyz(ColorSpacePrimaries.REC2020))
        assert_allclose(from_xyz(12), from_xyz(ColorSpacePrimaries.REC709))
        with pytest.raises(ValueError):
            to_xyz("ProPhoto")
