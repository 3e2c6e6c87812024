# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: red.py — RED Log3G10 (version 2, with the 0.01 black offset).
"""

import math

from numba import njit

__all__ = ["log3g10_encode", "log3g10_decode", "LOG3G10_LINEAR_BREAK"]

_A: float = 0.224282
_B: float = 155.975327
_C: float = 0.01
_G: float = 15.1927

# Below -c the curve continues as a straight line through code value 0.
LOG3G10_LINEAR_BREAK: float = -_C


@njit(cache=True, fastmath=True)
def log3g10_encode(x: float) -> float:
    x = x + _C
    if x < 0.0:
        return x * _G
    return _A * math.log10(x * _B + 1.0)


@njit(cache=True, fastmath=True)
def log3g10_decode(y: float) -> float:
    if y < 0.0:
        return y / _G - _C
    return (10.0 ** (y / _A) - 1.0) / _B - _C
