# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: sony.py — Sony S-Log3.

Expressed on 10-bit code values (black 95, 18% grey 420) and normalised by
1023, as in Sony's S-Log3 technical summary.
"""

import math

from numba import njit

__all__ = ["slog3_encode", "slog3_decode", "SLOG3_LINEAR_BREAK"]

SLOG3_LINEAR_BREAK: float = 0.01125000
_CV_BREAK: float = 171.2102946929
_CV_BLACK: float = 95.0
_CV_GREY: float = 420.0
_CV_PER_DECADE: float = 261.5


@njit(cache=True, fastmath=True)
def slog3_encode(x: float) -> float:
    if x >= SLOG3_LINEAR_BREAK:
        return (_CV_GREY + math.log10((x + 0.01) / (0.18 + 0.01)) * _CV_PER_DECADE) / 1023.0
    return (x * (_CV_BREAK - _CV_BLACK) / SLOG3_LINEAR_BREAK + _CV_BLACK) / 1023.0


@njit(cache=True, fastmath=True)
def slog3_decode(y: float) -> float:
    if y >= _CV_BREAK / 1023.0:
        return 10.0 ** ((y * 1023.0 - _CV_GREY) / _CV_PER_DECADE) * (0.18 + 0.01) - 0.01
    return (y * 1023.0 - _CV_BLACK) * SLOG3_LINEAR_BREAK / (_CV_BREAK - _CV_BLACK)
