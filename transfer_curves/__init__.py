# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transfer curves
===============
Encode (scene-linear -> code value) and decode (code value -> scene-linear)
for every :class:`~lumen_types.GammaType`.

Two levels of API are provided:

* ``encode_value`` / ``decode_value`` are Numba kernels dispatching on the
  integer curve code.  Other kernels (OOTF, zones, the pixel pipeline) call
  these directly.
* ``encode`` / ``decode`` / ``encode_array`` / ``decode_array`` are the
  Python-facing wrappers.  They coerce the curve selector (member, index or
  name) and therefore raise for unknown curves; the kernels never raise.

Example:
    >>> from transfer_curves import decode, encode
    >>> round(decode(encode(0.18, "ACEScct"), "ACEScct"), 6)
    0.18
"""

from typing import Dict, Union

import numpy as np
from numba import njit

from lumen_types import ArrayFloat, GammaType

from .aces import (
    ACES_CODE_CEILING, ACESCC_LINEAR_BREAK, ACESCCT_LINEAR_BREAK,
    acescc_decode, acescc_encode, acescct_decode, acescct_encode,
)
from .arri import (
    LOGC3_LINEAR_BREAK, LOGC4_LINEAR_BREAK,
    logc3_decode, logc3_encode, logc4_decode, logc4_encode,
)
from .canon import CLOG3_LINEAR_BREAK, clog3_decode, clog3_encode
from .curve import HALF_FLOAT_MAX, TransferCurve, signed_pow
from .davinci import DAVINCI_LINEAR_BREAK, davinci_decode, davinci_encode
from .panasonic import VLOG_LINEAR_BREAK, vlog_decode, vlog_encode
from .red import LOG3G10_LINEAR_BREAK, log3g10_decode, log3g10_encode
from .sony import SLOG3_LINEAR_BREAK, slog3_decode, slog3_encode
from .video import (
    REC709_LINEAR_BREAK, SRGB_LINEAR_BREAK,
    gamma22_decode, gamma22_encode, gamma24_decode, gamma24_encode,
    gamma26_decode, gamma26_encode, linear_decode, linear_encode,
    rec709_decode, rec709_encode, srgb_decode, srgb_encode,
)

__all__ = [
    "GammaType",
    "CurveSelector",
    "TransferCurve",
    "CURVES",
    "HALF_FLOAT_MAX",
    "ACES_CODE_CEILING",
    "signed_pow",
    "curve_pair",
    "encode",
    "decode",
    "encode_array",
    "decode_array",
    "encode_value",
    "decode_value",
]

CurveSelector = Union[GammaType, int, str]

# Integer codes frozen into the dispatch kernels at compile time.
_ACESCC = int(GammaType.ACESCC)
_ACESCCT = int(GammaType.ACESCCT)
_LOGC3 = int(GammaType.ARRI_LOGC3)
_LOGC4 = int(GammaType.ARRI_LOGC4)
_SLOG3 = int(GammaType.SONY_SLOG3)
_LOG3G10 = int(GammaType.RED_LOG3G10)
_VLOG = int(GammaType.PANASONIC_VLOG)
_CLOG3 = int(GammaType.CANON_LOG3)
_DAVINCI = int(GammaType.DAVINCI_INTERMEDIATE)
_GAMMA22 = int(GammaType.GAMMA_2_2)
_GAMMA24 = int(GammaType.GAMMA_2_4)
_GAMMA26 = int(GammaType.GAMMA_2_6)
_REC709 = int(GammaType.REC709)
_SRGB = int(GammaType.SRGB)


CURVES: Dict[GammaType, TransferCurve] = {
    GammaType.ACESCC: TransferCurve(
        GammaType.ACESCC, acescc_encode, acescc_decode,
        linear_break=ACESCC_LINEAR_BREAK, ceiling=HALF_FLOAT_MAX),
    GammaType.ACESCCT: TransferCurve(
        GammaType.ACESCCT, acescct_encode, acescct_decode,
        linear_break=ACESCCT_LINEAR_BREAK, ceiling=HALF_FLOAT_MAX),
    GammaType.ARRI_LOGC3: TransferCurve(
        GammaType.ARRI_LOGC3, logc3_encode, logc3_decode,
        linear_break=LOGC3_LINEAR_BREAK),
    GammaType.ARRI_LOGC4: TransferCurve(
        GammaType.ARRI_LOGC4, logc4_encode, logc4_decode,
        linear_break=LOGC4_LINEAR_BREAK),
    GammaType.SONY_SLOG3: TransferCurve(
        GammaType.SONY_SLOG3, slog3_encode, slog3_decode,
        linear_break=SLOG3_LINEAR_BREAK),
    GammaType.RED_LOG3G10: TransferCurve(
        GammaType.RED_LOG3G10, log3g10_encode, log3g10_decode,
        linear_break=LOG3G10_LINEAR_BREAK),
    GammaType.PANASONIC_VLOG: TransferCurve(
        GammaType.PANASONIC_VLOG, vlog_encode, vlog_decode,
        linear_break=VLOG_LINEAR_BREAK),
    GammaType.CANON_LOG3: TransferCurve(
        GammaType.CANON_LOG3, clog3_encode, clog3_decode,
        linear_break=CLOG3_LINEAR_BREAK),
    GammaType.DAVINCI_INTERMEDIATE: TransferCurve(
        GammaType.DAVINCI_INTERMEDIATE, davinci_encode, davinci_decode,
        linear_break=DAVINCI_LINEAR_BREAK),
    GammaType.GAMMA_2_2: TransferCurve(
        GammaType.GAMMA_2_2, gamma22_encode, gamma22_decode),
    GammaType.GAMMA_2_4: TransferCurve(
        GammaType.GAMMA_2_4, gamma24_encode, gamma24_decode),
    GammaType.GAMMA_2_6: TransferCurve(
        GammaType.GAMMA_2_6, gamma26_encode, gamma26_decode),
    GammaType.LINEAR: TransferCurve(
        GammaType.LINEAR, linear_encode, linear_decode),
    GammaType.REC709: TransferCurve(
        GammaType.REC709, rec709_encode, rec709_decode,
        linear_break=REC709_LINEAR_BREAK),
    GammaType.SRGB: TransferCurve(
        GammaType.SRGB, srgb_encode, srgb_decode,
        linear_break=SRGB_LINEAR_BREAK),
}


# =============================================================================
# 1. DISPATCH KERNELS
# =============================================================================
# Unknown codes fall through to the identity so that a kernel can never
# raise mid-frame; the Python wrappers reject unknown curves up front.

@njit(cache=True, fastmath=True)
def encode_value(x: float, curve: int) -> float:
    """Scene-linear to code value for curve code *curve*."""
    if curve == _ACESCC:
        return acescc_encode(x)
    elif curve == _ACESCCT:
        return acescct_encode(x)
    elif curve == _LOGC3:
        return logc3_encode(x)
    elif curve == _LOGC4:
        return logc4_encode(x)
    elif curve == _SLOG3:
        return slog3_encode(x)
    elif curve == _LOG3G10:
        return log3g10_encode(x)
    elif curve == _VLOG:
        return vlog_encode(x)
    elif curve == _CLOG3:
        return clog3_encode(x)
    elif curve == _DAVINCI:
        return davinci_encode(x)
    elif curve == _GAMMA22:
        return gamma22_encode(x)
    elif curve == _GAMMA24:
        return gamma24_encode(x)
    elif curve == _GAMMA26:
        return gamma26_encode(x)
    elif curve == _REC709:
        return rec709_encode(x)
    elif curve == _SRGB:
        return srgb_encode(x)
    return linear_encode(x)


@njit(cache=True, fastmath=True)
def decode_value(y: float, curve: int) -> float:
    """Code value to scene-linear for curve code *curve*."""
    if curve == _ACESCC:
        return acescc_decode(y)
    elif curve == _ACESCCT:
        return acescct_decode(y)
    elif curve == _LOGC3:
        return logc3_decode(y)
    elif curve == _LOGC4:
        return logc4_decode(y)
    elif curve == _SLOG3:
        return slog3_decode(y)
    elif curve == _LOG3G10:
        return log3g10_decode(y)
    elif curve == _VLOG:
        return vlog_decode(y)
    elif curve == _CLOG3:
        return clog3_decode(y)
    elif curve == _DAVINCI:
        return davinci_decode(y)
    elif curve == _GAMMA22:
        return gamma22_decode(y)
    elif curve == _GAMMA24:
        return gamma24_decode(y)
    elif curve == _GAMMA26:
        return gamma26_decode(y)
    elif curve == _REC709:
        return rec709_decode(y)
    elif curve == _SRGB:
        return srgb_decode(y)
    return linear_decode(y)


@njit(cache=True, fastmath=True)
def _encode_array_kernel(values: ArrayFloat, curve: int) -> ArrayFloat:
    # Explicit loop over ravel() views, no boolean masks
    out = np.empty_like(values)
    values_flat = values.ravel()
    out_flat = out.ravel()
    for i in range(values.size):
        out_flat[i] = encode_value(values_flat[i], curve)
    return out


@njit(cache=True, fastmath=True)
def _decode_array_kernel(values: ArrayFloat, curve: int) -> ArrayFloat:
    out = np.empty_like(values)
    values_flat = values.ravel()
    out_flat = out.ravel()
    for i in range(values.size):
        out_flat[i] = decode_value(values_flat[i], curve)
    return out


# =============================================================================
# 2. PUBLIC API
# =============================================================================

def curve_pair(curve: CurveSelector) -> TransferCurve:
    """Returns the :class:`TransferCurve` record for *curve*."""
    return CURVES[GammaType.coerce(curve)]


def encode(linear: float, curve: CurveSelector) -> float:
    """
    Encodes one scene-linear value with *curve*.

    Args:
        linear: Scene-linear value (any real).
        curve: GammaType member, index or name.

    Returns:
        Code value.
    """
    return encode_value(float(linear), int(GammaType.coerce(curve)))


def decode(value: float, curve: CurveSelector) -> float:
    """
    Decodes one code value with *curve*.

    Args:
        value: Code value (any real).
        curve: GammaType member, index or name.

    Returns:
        Scene-linear value.
    """
    return decode_value(float(value), int(GammaType.coerce(curve)))


def encode_array(linear: ArrayFloat, curve: CurveSelector) -> ArrayFloat:
    """Element-wise :func:`encode` over an array of any shape."""
    arr = np.ascontiguousarray(linear, dtype=np.float64)
    return _encode_array_kernel(arr, int(GammaType.coerce(curve)))


def decode_array(values: ArrayFloat, curve: CurveSelector) -> ArrayFloat:
    """Element-wise :func:`decode` over an array of any shape."""
    arr = np.ascontiguousarray(values, dtype=np.float64)
    return _decode_array_kernel(arr, int(GammaType.coerce(curve)))
