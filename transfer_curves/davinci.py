# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: davinci.py — DaVinci Intermediate (Blackmagic Design, 2020).
"""

import math

from numba import njit

__all__ = ["davinci_encode", "davinci_decode", "DAVINCI_LINEAR_BREAK"]

_A: float = 0.0075
_B: float = 7.0
_C: float = 0.07329248
_M: float = 10.44426855
DAVINCI_LINEAR_BREAK: float = 0.00262409
_LOG_CUT: float = 0.02740668


@njit(cache=True, fastmath=True)
def davinci_encode(x: float) -> float:
    if x <= DAVINCI_LINEAR_BREAK:
        return x * _M
    return (math.log2(x + _A) + _B) * _C


@njit(cache=True, fastmath=True)
def davinci_decode(y: float) -> float:
    if y <= _LOG_CUT:
        return y / _M
    return 2.0 ** (y / _C - _B) - _A
