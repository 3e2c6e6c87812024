# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: arri.py — ARRI LogC3 (EI 800) and LogC4.

LogC3 constants are the published EI 800 parameter set.  LogC4 parameters
are derived from their defining expressions (ARRI LogC4 white paper,
2022) so that the linear toe meets the log2 segment with matching value and
slope at code value 0.
"""

import math

from numba import njit

__all__ = [
    "logc3_encode", "logc3_decode",
    "logc4_encode", "logc4_decode",
    "LOGC3_LINEAR_BREAK", "LOGC4_LINEAR_BREAK",
]

# --- LogC3, EI 800 ---
LOGC3_LINEAR_BREAK: float = 0.010591
_C3_A: float = 5.555556
_C3_B: float = 0.052272
_C3_C: float = 0.247190
_C3_D: float = 0.385537
_C3_E: float = 5.367655
_C3_F: float = 0.092809
_C3_CODE_BREAK: float = _C3_E * LOGC3_LINEAR_BREAK + _C3_F

# --- LogC4 ---
_C4_A: float = (2.0 ** 18 - 16.0) / 117.45
_C4_B: float = (1023.0 - 95.0) / 1023.0
_C4_C: float = 95.0 / 1023.0
_C4_S: float = (7.0 * math.log(2.0) * 2.0 ** (7.0 - 14.0 * _C4_C / _C4_B)) / (_C4_A * _C4_B)
_C4_T: float = (2.0 ** (14.0 * (-_C4_C / _C4_B) + 6.0) - 64.0) / _C4_A
LOGC4_LINEAR_BREAK: float = _C4_T


@njit(cache=True, fastmath=True)
def logc3_encode(x: float) -> float:
    if x > LOGC3_LINEAR_BREAK:
        return _C3_C * math.log10(_C3_A * x + _C3_B) + _C3_D
    return _C3_E * x + _C3_F


@njit(cache=True, fastmath=True)
def logc3_decode(y: float) -> float:
    if y > _C3_CODE_BREAK:
        return (10.0 ** ((y - _C3_D) / _C3_C) - _C3_B) / _C3_A
    return (y - _C3_F) / _C3_E


@njit(cache=True, fastmath=True)
def logc4_encode(x: float) -> float:
    if x >= _C4_T:
        return (math.log2(_C4_A * x + 64.0) - 6.0) / 14.0 * _C4_B + _C4_C
    return (x - _C4_T) / _C4_S


@njit(cache=True, fastmath=True)
def logc4_decode(y: float) -> float:
    if y >= 0.0:
        return (2.0 ** (14.0 * (y - _C4_C) / _C4_B + 6.0) - 64.0) / _C4_A
    return y * _C4_S + _C4_T
