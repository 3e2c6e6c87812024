# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: video.py — Display and broadcast curves.

  * Rec.709   ITU-R BT.709 OETF (the "video gamma").
  * sRGB      IEC 61966-2-1 piecewise display curve.
  * Gamma N   pure power laws (2.2, 2.4 / BT.1886, 2.6 / DCI).
  * Linear    identity.

Power segments use :func:`signed_pow`; the straight toes of Rec.709 and
sRGB already extend through zero so negative input stays on the line.
"""

from numba import njit

from .curve import signed_pow

__all__ = [
    "rec709_encode", "rec709_decode",
    "srgb_encode", "srgb_decode",
    "gamma22_encode", "gamma22_decode",
    "gamma24_encode", "gamma24_decode",
    "gamma26_encode", "gamma26_decode",
    "linear_encode", "linear_decode",
    "REC709_LINEAR_BREAK", "SRGB_LINEAR_BREAK",
]

# Continuous form of the BT.709 constants (1.099, 0.018 rounded)
_REC709_ALPHA: float = 1.09929682680944
REC709_LINEAR_BREAK: float = 0.018053968510807
_REC709_CODE_BREAK: float = 4.5 * REC709_LINEAR_BREAK
_REC709_BETA: float = _REC709_ALPHA - 1.0
_REC709_EXP: float = 0.45

SRGB_LINEAR_BREAK: float = 0.0031308
_SRGB_CODE_BREAK: float = 0.04045


@njit(cache=True, fastmath=True)
def rec709_encode(x: float) -> float:
    if x < REC709_LINEAR_BREAK:
        return 4.5 * x
    return _REC709_ALPHA * x ** _REC709_EXP - _REC709_BETA


@njit(cache=True, fastmath=True)
def rec709_decode(y: float) -> float:
    if y < _REC709_CODE_BREAK:
        return y / 4.5
    return ((y + _REC709_BETA) / _REC709_ALPHA) ** (1.0 / _REC709_EXP)


@njit(cache=True, fastmath=True)
def srgb_encode(x: float) -> float:
    # IEC 61966-2-1 defines the slope as exactly 12.92
    if x <= SRGB_LINEAR_BREAK:
        return 12.92 * x
    return 1.055 * (x ** (1.0 / 2.4)) - 0.055


@njit(cache=True, fastmath=True)
def srgb_decode(y: float) -> float:
    if y <= _SRGB_CODE_BREAK:
        return y / 12.92
    return ((y + 0.055) / 1.055) ** 2.4


@njit(cache=True, fastmath=True)
def gamma22_encode(x: float) -> float:
    return signed_pow(x, 1.0 / 2.2)


@njit(cache=True, fastmath=True)
def gamma22_decode(y: float) -> float:
    return signed_pow(y, 2.2)


@njit(cache=True, fastmath=True)
def gamma24_encode(x: float) -> float:
    return signed_pow(x, 1.0 / 2.4)


@njit(cache=True, fastmath=True)
def gamma24_decode(y: float) -> float:
    return signed_pow(y, 2.4)


@njit(cache=True, fastmath=True)
def gamma26_encode(x: float) -> float:
    return signed_pow(x, 1.0 / 2.6)


@njit(cache=True, fastmath=True)
def gamma26_decode(y: float) -> float:
    return signed_pow(y, 2.6)


@njit(cache=True, fastmath=True)
def linear_encode(x: float) -> float:
    return x


@njit(cache=True, fastmath=True)
def linear_decode(y: float) -> float:
    return y
