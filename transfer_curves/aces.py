# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: aces.py — ACEScc (S-2014-003) and ACEScct (S-2016-001).

Both share the pure log2 segment ``(log2(x) + 9.72) / 17.52``.  ACEScc
bends into a half-float-friendly toe below 2^-15 and floors non-positive
input; ACEScct replaces the toe with a straight line that meets the log
segment at x = 2^-7.  Both decodes saturate at 65504 above the code value
of the half-float maximum.
"""

import math

from numba import njit

from .curve import HALF_FLOAT_MAX

__all__ = [
    "acescc_encode", "acescc_decode",
    "acescct_encode", "acescct_decode",
    "ACESCC_LINEAR_BREAK", "ACESCCT_LINEAR_BREAK", "ACES_CODE_CEILING",
]

_LOG_OFFSET = 9.72
_LOG_SCALE = 17.52

ACESCC_LINEAR_BREAK: float = 2.0 ** -15
# Code value of the black floor, log2(2^-16) mapped through the log segment.
_ACESCC_FLOOR: float = (-16.0 + _LOG_OFFSET) / _LOG_SCALE
_ACESCC_CODE_BREAK: float = (-15.0 + _LOG_OFFSET) / _LOG_SCALE

ACES_CODE_CEILING: float = (math.log2(HALF_FLOAT_MAX) + _LOG_OFFSET) / _LOG_SCALE

ACESCCT_LINEAR_BREAK: float = 0.0078125
_ACESCCT_CODE_BREAK: float = 0.155251141552511
_ACESCCT_A: float = 10.5402377416545
_ACESCCT_B: float = 0.0729055341958355


@njit(cache=True, fastmath=True)
def acescc_encode(x: float) -> float:
    if x <= 0.0:
        return _ACESCC_FLOOR
    if x < ACESCC_LINEAR_BREAK:
        return (math.log2(2.0 ** -16 + x * 0.5) + _LOG_OFFSET) / _LOG_SCALE
    return (math.log2(x) + _LOG_OFFSET) / _LOG_SCALE


@njit(cache=True, fastmath=True)
def acescc_decode(y: float) -> float:
    if y < _ACESCC_CODE_BREAK:
        return (2.0 ** (y * _LOG_SCALE - _LOG_OFFSET) - 2.0 ** -16) * 2.0
    if y < ACES_CODE_CEILING:
        return 2.0 ** (y * _LOG_SCALE - _LOG_OFFSET)
    return HALF_FLOAT_MAX


@njit(cache=True, fastmath=True)
def acescct_encode(x: float) -> float:
    if x <= ACESCCT_LINEAR_BREAK:
        return _ACESCCT_A * x + _ACESCCT_B
    return (math.log2(x) + _LOG_OFFSET) / _LOG_SCALE


@njit(cache=True, fastmath=True)
def acescct_decode(y: float) -> float:
    if y <= _ACESCCT_CODE_BREAK:
        return (y - _ACESCCT_B) / _ACESCCT_A
    if y < ACES_CODE_CEILING:
        return 2.0 ** (y * _LOG_SCALE - _LOG_OFFSET)
    return HALF_FLOAT_MAX
