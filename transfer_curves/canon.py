# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: canon.py — Canon Log 3.

Canon Log 3 is the only curve here with *three* segments: a mirrored log
branch for superblacks, a short straight line through black and the
positive log branch.  The line meets both log branches at |x| = 0.014.
"""

import math

from numba import njit

__all__ = ["clog3_encode", "clog3_decode", "CLOG3_LINEAR_BREAK"]

CLOG3_LINEAR_BREAK: float = 0.014
_LOG_GAIN: float = 0.36726845
_LOG_SCALE: float = 14.98325
_NEG_OFFSET: float = 0.12783901
_POS_OFFSET: float = 0.12240537
_LIN_SLOPE: float = 1.9754798
_LIN_OFFSET: float = 0.12512219
_CODE_LOW: float = 0.097465473
_CODE_HIGH: float = 0.15277891


@njit(cache=True, fastmath=True)
def clog3_encode(x: float) -> float:
    if x < -CLOG3_LINEAR_BREAK:
        return -_LOG_GAIN * math.log10(-x * _LOG_SCALE + 1.0) + _NEG_OFFSET
    if x <= CLOG3_LINEAR_BREAK:
        return _LIN_SLOPE * x + _LIN_OFFSET
    return _LOG_GAIN * math.log10(x * _LOG_SCALE + 1.0) + _POS_OFFSET


@njit(cache=True, fastmath=True)
def clog3_decode(y: float) -> float:
    if y < _CODE_LOW:
        return -(10.0 ** ((_NEG_OFFSET - y) / _LOG_GAIN) - 1.0) / _LOG_SCALE
    if y <= _CODE_HIGH:
        return (y - _LIN_OFFSET) / _LIN_SLOPE
    return (10.0 ** ((y - _POS_OFFSET) / _LOG_GAIN) - 1.0) / _LOG_SCALE
