# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: panasonic.py — Panasonic V-Log.
"""

import math

from numba import njit

__all__ = ["vlog_encode", "vlog_decode", "VLOG_LINEAR_BREAK"]

VLOG_LINEAR_BREAK: float = 0.01
_CODE_BREAK: float = 0.181
_B: float = 0.00873
_C: float = 0.241514
_D: float = 0.598206


@njit(cache=True, fastmath=True)
def vlog_encode(x: float) -> float:
    if x < VLOG_LINEAR_BREAK:
        return 5.6 * x + 0.125
    return _C * math.log10(x + _B) + _D


@njit(cache=True, fastmath=True)
def vlog_decode(y: float) -> float:
    if y < _CODE_BREAK:
        return (y - 0.125) / 5.6
    return 10.0 ** ((y - _D) / _C) - _B
