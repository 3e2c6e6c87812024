# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Gamut Matrix Tables
===================
RGB <-> CIE XYZ matrices for every :class:`~lumen_types.ColorSpacePrimaries`.

The matrices are derived once at import from the published xy chromaticities
of each gamut (normalised primary matrix, SMPTE RP 177) and frozen as
read-only ``float64`` arrays.  Two complete tables exist per direction:

* **direct**: each gamut against its own reference white (ACES white for
  AP0/AP1/P3-D60, DCI white for P3-DCI, D65 for everything else);
* **adapted**: every RGB -> XYZ matrix is followed by a Bradford chromatic
  adaptation from the gamut's white to D65, so that a neutral in any gamut
  lands on the same XYZ white.

Convention:
    Matrices act on *column* vectors: ``xyz = M_to @ rgb`` and
    ``rgb = M_from @ xyz``.  A gamut conversion is always performed as these
    two sequential multiplies through XYZ; no clamping or normalisation is
    applied, so out-of-gamut and negative components pass through.

References:
    - SMPTE RP 177-1993 "Derivation of Basic Television Color Equations".
    - Lam, K. M. (1985). "Metamerism and colour constancy" (Bradford CAT).
    - ACES TB-2014-004, ARRI, Sony, RED, Panasonic, Canon and Blackmagic
      gamut white papers for the chromaticities below.
"""

import functools
from typing import Dict, Final, Sequence, Tuple, Union

import numpy as np
from numba import njit
from scipy import linalg

from lumen_types import ArrayFloat, ColorSpacePrimaries

__all__ = [
    "PRIMARIES_XY",
    "WHITE_XY",
    "WHITE_D65_XY",
    "WHITE_ACES_XY",
    "WHITE_DCI_XY",
    "M_BRADFORD",
    "TO_XYZ_DIRECT",
    "FROM_XYZ_DIRECT",
    "TO_XYZ_ADAPTED",
    "FROM_XYZ_ADAPTED",
    "xy_to_xyz",
    "npm_from_chromaticities",
    "bradford_matrix",
    "to_xyz",
    "from_xyz",
    "conversion_matrix",
    "convert_gamut",
    "apply_matrix",
]

SpaceSelector = Union[ColorSpacePrimaries, int, str]
Chromaticity = Tuple[float, float]

# =============================================================================
# 1. CHROMATICITY DATA
# =============================================================================

WHITE_D65_XY: Final[Chromaticity] = (0.3127, 0.3290)
WHITE_ACES_XY: Final[Chromaticity] = (0.32168, 0.33767)
WHITE_DCI_XY: Final[Chromaticity] = (0.314, 0.351)

_P3_PRIMARIES = ((0.680, 0.320), (0.265, 0.690), (0.150, 0.060))

# (red, green, blue) xy per gamut.  XYZ has no primaries of its own.
PRIMARIES_XY: Final[Dict[ColorSpacePrimaries, Tuple[Chromaticity, ...]]] = {
    ColorSpacePrimaries.ACES_AP0:           ((0.7347, 0.2653), (0.0000, 1.0000), (0.0001, -0.0770)),
    ColorSpacePrimaries.ACES_AP1:           ((0.713, 0.293), (0.165, 0.830), (0.128, 0.044)),
    ColorSpacePrimaries.DAVINCI_WIDE_GAMUT: ((0.8000, 0.3130), (0.1682, 0.9877), (0.0790, -0.1155)),
    ColorSpacePrimaries.ARRI_WIDE_GAMUT_3:  ((0.6840, 0.3130), (0.2210, 0.8480), (0.0861, -0.1020)),
    ColorSpacePrimaries.ARRI_WIDE_GAMUT_4:  ((0.7347, 0.2653), (0.1424, 0.8576), (0.0991, -0.0308)),
    ColorSpacePrimaries.SONY_SGAMUT3_CINE:  ((0.766, 0.275), (0.225, 0.800), (0.089, -0.087)),
    ColorSpacePrimaries.RED_WIDE_GAMUT_RGB: ((0.780308, 0.304253), (0.121595, 1.493994), (0.095612, -0.084589)),
    ColorSpacePrimaries.PANASONIC_VGAMUT:   ((0.730, 0.280), (0.165, 0.840), (0.100, -0.030)),
    ColorSpacePrimaries.CANON_CINEMA_GAMUT: ((0.740, 0.270), (0.170, 1.140), (0.080, -0.100)),
    ColorSpacePrimaries.P3_DCI:             _P3_PRIMARIES,
    ColorSpacePrimaries.P3_D60:             _P3_PRIMARIES,
    ColorSpacePrimaries.P3_D65:             _P3_PRIMARIES,
    ColorSpacePrimaries.REC709:             ((0.64, 0.33), (0.30, 0.60), (0.15, 0.06)),
    ColorSpacePrimaries.REC2020:            ((0.708, 0.292), (0.170, 0.797), (0.131, 0.046)),
}

_NON_D65_WHITES = {
    ColorSpacePrimaries.ACES_AP0: WHITE_ACES_XY,
    ColorSpacePrimaries.ACES_AP1: WHITE_ACES_XY,
    ColorSpacePrimaries.P3_DCI:   WHITE_DCI_XY,
    ColorSpacePrimaries.P3_D60:   WHITE_ACES_XY,
}

# Reference white per gamut (XYZ is listed as D65 but is never adapted)
WHITE_XY: Final[Dict[ColorSpacePrimaries, Chromaticity]] = {
    space: _NON_D65_WHITES.get(space, WHITE_D65_XY) for space in ColorSpacePrimaries
}

# Bradford cone-response matrix (column-vector form: lms = M @ xyz)
M_BRADFORD: Final[ArrayFloat] = np.array([
    [ 0.8951000,  0.2664000, -0.1614000],
    [-0.7502000,  1.7135000,  0.0367000],
    [ 0.0389000, -0.0685000,  1.0296000]
], dtype=np.float64)
M_BRADFORD.setflags(write=False)
_M_BRADFORD_INV: Final[ArrayFloat] = linalg.inv(M_BRADFORD)


# =============================================================================
# 2. DERIVATION
# =============================================================================

def xy_to_xyz(xy: Sequence[float]) -> ArrayFloat:
    """
    Chromaticity to XYZ tristimulus normalised to Y = 1.

    Args:
        xy: (x, y) pair, y != 0.

    Returns:
        (3,) array ``[x/y, 1, (1 - x - y)/y]``.
    """
    x, y = float(xy[0]), float(xy[1])
    if y == 0.0:
        raise ValueError(f"Chromaticity y must be non-zero, got {xy!r}")
    return np.array([x / y, 1.0, (1.0 - x - y) / y], dtype=np.float64)


def npm_from_chromaticities(primaries: Sequence[Sequence[float]],
                            white: Sequence[float]) -> ArrayFloat:
    """
    Normalised primary matrix (RGB -> XYZ) from xy chromaticities.

    The columns are the primaries' XYZ (at Y = 1) scaled so that
    RGB = (1, 1, 1) maps onto the white point at Y = 1.

    Args:
        primaries: ((xr, yr), (xg, yg), (xb, yb)).
        white: (xw, yw).

    Returns:
        3x3 matrix for column vectors.
    """
    if len(primaries) != 3:
        raise ValueError(f"Expected three primaries, got {len(primaries)}")
    P = np.column_stack([xy_to_xyz(p) for p in primaries])
    S = linalg.solve(P, xy_to_xyz(white))
    return P * S[np.newaxis, :]


def _to_hashable(obj: Union[ArrayFloat, Sequence[float]]) -> Tuple[float, ...]:
    if isinstance(obj, np.ndarray):
        return tuple(float(v) for v in obj.ravel())
    return tuple(float(v) for v in obj)


@functools.lru_cache(maxsize=16)
def _get_cached_bradford_matrix(src_white_tuple: Tuple[float, ...],
                                dst_white_tuple: Tuple[float, ...]) -> ArrayFloat:
    """
    Cached worker for the Bradford matrix.

    Derivation (column vectors):
    M_composite = M_inv @ diag(dst_lms / src_lms) @ M
    """
    src_lms = M_BRADFORD @ np.array(src_white_tuple, dtype=np.float64)
    dst_lms = M_BRADFORD @ np.array(dst_white_tuple, dtype=np.float64)

    # Prevent divide-by-zero for degenerate white points
    src_lms = np.where(np.abs(src_lms) < 1e-12, 1e-12, src_lms)
    M = _M_BRADFORD_INV @ np.diag(dst_lms / src_lms) @ M_BRADFORD
    M.setflags(write=False)
    return M


def bradford_matrix(src_white: Union[ArrayFloat, Sequence[float]],
                    dst_white: Union[ArrayFloat, Sequence[float]]) -> ArrayFloat:
    """
    Bradford chromatic adaptation matrix between two XYZ white points.

    Args:
        src_white: Source white (XYZ).
        dst_white: Destination white (XYZ).

    Returns:
        Read-only 3x3 matrix for column vectors.
    """
    return _get_cached_bradford_matrix(_to_hashable(src_white), _to_hashable(dst_white))


def _frozen(m: ArrayFloat) -> ArrayFloat:
    m = np.ascontiguousarray(m, dtype=np.float64)
    m.setflags(write=False)
    return m


def _build_tables() -> Tuple[ArrayFloat, ArrayFloat, ArrayFloat, ArrayFloat]:
    n = len(ColorSpacePrimaries)
    to_direct = np.empty((n, 3, 3), dtype=np.float64)
    to_adapted = np.empty((n, 3, 3), dtype=np.float64)
    d65 = xy_to_xyz(WHITE_D65_XY)

    for space in ColorSpacePrimaries:
        if space is ColorSpacePrimaries.XYZ:
            to_direct[space] = np.eye(3)
            to_adapted[space] = np.eye(3)
            continue
        white = xy_to_xyz(WHITE_XY[space])
        npm = npm_from_chromaticities(PRIMARIES_XY[space], WHITE_XY[space])
        to_direct[space] = npm
        to_adapted[space] = bradford_matrix(white, d65) @ npm

    from_direct = np.stack([linalg.inv(m) for m in to_direct])
    from_adapted = np.stack([linalg.inv(m) for m in to_adapted])
    return (_frozen(to_direct), _frozen(from_direct),
            _frozen(to_adapted), _frozen(from_adapted))


# (15, 3, 3) stacks indexed by ColorSpacePrimaries
TO_XYZ_DIRECT, FROM_XYZ_DIRECT, TO_XYZ_ADAPTED, FROM_XYZ_ADAPTED = _build_tables()


# =============================================================================
# 3. LOOKUP & APPLICATION
# =============================================================================

def to_xyz(space: SpaceSelector, adapted: bool = False) -> ArrayFloat:
    """RGB -> XYZ matrix for *space* from the direct or adapted table."""
    table = TO_XYZ_ADAPTED if adapted else TO_XYZ_DIRECT
    return table[ColorSpacePrimaries.coerce(space)]


def from_xyz(space: SpaceSelector, adapted: bool = False) -> ArrayFloat:
    """XYZ -> RGB matrix for *space* from the direct or adapted table."""
    table = FROM_XYZ_ADAPTED if adapted else FROM_XYZ_DIRECT
    return table[ColorSpacePrimaries.coerce(space)]


def conversion_matrix(src: SpaceSelector, dst: SpaceSelector,
                      adapted: bool = False) -> ArrayFloat:
    """
    Composite ``from_xyz(dst) @ to_xyz(src)``.

    Reference only: the pipeline never collapses the two multiplies.
    """
    return from_xyz(dst, adapted) @ to_xyz(src, adapted)


@njit(cache=True, fastmath=True)
def apply_matrix(m: ArrayFloat, r: float, g: float, b: float) -> Tuple[float, float, float]:
    """3x3 matrix times column vector (r, g, b)."""
    return (m[0, 0] * r + m[0, 1] * g + m[0, 2] * b,
            m[1, 0] * r + m[1, 1] * g + m[1, 2] * b,
            m[2, 0] * r + m[2, 1] * g + m[2, 2] * b)


def convert_gamut(rgb: ArrayFloat, src: SpaceSelector, dst: SpaceSelector,
                  adapted: bool = False) -> ArrayFloat:
    """
    Converts linear RGB between gamuts through XYZ.

    Args:
        rgb: Array with last dimension 3 (single pixel or any batch shape).
        src: Source gamut.
        dst: Destination gamut.
        adapted: Use the D65-adapted tables.

    Returns:
        Array of the same shape as *rgb*.
    """
    arr = np.asarray(rgb, dtype=np.float64)
    if arr.shape[-1] != 3:
        raise ValueError(f"Expected last dimension size 3, got {arr.shape[-1]}")
    xyz = arr @ to_xyz(src, adapted).T
    return xyz @ from_xyz(dst, adapted).T
