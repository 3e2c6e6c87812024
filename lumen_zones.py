# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Exposure Zones
==============
False-colour exposure classification.

A pixel is decoded to linear light, reduced to Rec.709 luminance and
expressed in stops relative to 18% middle grey.  The stop value is
quantised (half stops within +/-1 stop of grey, whole stops outside) and
clamped to [-7, +7], giving the seventeen buckets of :data:`ZONE_STOPS`,
each painted with one colour of :data:`ZONE_PALETTE`.

A reference chart can be drawn along the bottom of the frame: the strip is
split into 60 vertical segments, segment ``i`` standing for stop
``(i - 30) / 4``, quantised and coloured with the same rules.
"""

import math
from typing import Final, Tuple

import numpy as np
from numba import njit

from lumen_operators import ootf_inverse_rgb, tone_map_rgb
from lumen_types import ArrayFloat, GammaType, PixelColor
from transfer_curves import CurveSelector, decode_value

__all__ = [
    "MIDDLE_GREY",
    "LUMINANCE_FLOOR",
    "STOP_LIMIT",
    "CHART_SEGMENTS",
    "DISPLAY_INPUT_NITS",
    "DISPLAY_OUTPUT_NITS",
    "ZONE_STOPS",
    "ZONE_PALETTE",
    "luminance",
    "stops_from_middle_grey",
    "quantize_stop",
    "zone_index",
    "zone_color",
    "chart_stop",
    "chart_rgb",
    "chart_color",
    "in_chart",
    "classify_rgb",
    "classify",
]

MIDDLE_GREY: Final[float] = 0.18
LUMINANCE_FLOOR: Final[float] = 1e-10
STOP_LIMIT: Final[float] = 7.0
CHART_SEGMENTS: Final[int] = 60

# Display-referred input is expanded from SDR white to the PQ ceiling
DISPLAY_INPUT_NITS: Final[float] = 100.0
DISPLAY_OUTPUT_NITS: Final[float] = 10000.0

# Rec.709 luma weights
_KR: Final[float] = 0.2126
_KG: Final[float] = 0.7152
_KB: Final[float] = 0.0722

ZONE_STOPS: Final[Tuple[float, ...]] = (
    7.0, 6.0, 5.0, 4.0, 3.0, 2.0, 1.0, 0.5, 0.0,
    -0.5, -1.0, -2.0, -3.0, -4.0, -5.0, -6.0, -7.0,
)

# One colour per entry of ZONE_STOPS, from clipped white down to near black.
ZONE_PALETTE: Final[ArrayFloat] = np.array([
    [1.000, 1.000, 1.000],   # +7  clipped
    [1.000, 0.753, 0.796],   # +6  pink
    [1.000, 0.000, 0.000],   # +5  red
    [1.000, 0.502, 0.000],   # +4  orange
    [1.000, 1.000, 0.000],   # +3  yellow
    [0.502, 1.000, 0.000],   # +2  chartreuse
    [0.000, 0.800, 0.000],   # +1  green
    [0.753, 0.753, 0.753],   # +0.5 light grey
    [0.502, 0.502, 0.502],   #  0  middle grey
    [0.376, 0.376, 0.376],   # -0.5 dark grey
    [0.000, 0.502, 0.502],   # -1  teal
    [0.000, 0.502, 1.000],   # -2  azure
    [0.000, 0.000, 1.000],   # -3  blue
    [0.294, 0.000, 0.510],   # -4  indigo
    [0.502, 0.000, 0.502],   # -5  purple
    [0.200, 0.000, 0.200],   # -6  deep purple
    [0.050, 0.050, 0.050],   # -7  crushed
], dtype=np.float64)
ZONE_PALETTE.setflags(write=False)


# =============================================================================
# 1. SCALAR KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def luminance(r: float, g: float, b: float) -> float:
    """Rec.709 relative luminance."""
    return _KR * r + _KG * g + _KB * b


@njit(cache=True, fastmath=True)
def stops_from_middle_grey(lum: float) -> float:
    """``log2(lum / 0.18)`` with lum floored at 1e-10."""
    if lum < LUMINANCE_FLOOR:
        lum = LUMINANCE_FLOOR
    return math.log2(lum / MIDDLE_GREY)


@njit(cache=True, fastmath=True)
def quantize_stop(stops: float) -> float:
    """
    Nearest half stop within one stop of grey, nearest whole stop beyond.
    Ties round up.  Result clamped to [-7, +7].
    """
    if abs(stops) <= 1.0:
        q = math.floor(stops * 2.0 + 0.5) / 2.0
    else:
        q = math.floor(stops + 0.5)
    if q > STOP_LIMIT:
        return STOP_LIMIT
    if q < -STOP_LIMIT:
        return -STOP_LIMIT
    return q


@njit(cache=True, fastmath=True)
def zone_index(stop: float) -> int:
    """Row of :data:`ZONE_PALETTE` for a quantised stop."""
    if stop > 1.0:
        idx = int(STOP_LIMIT - stop)
    elif stop >= -1.0:
        idx = 6 + int((1.0 - stop) * 2.0)
    else:
        idx = 10 + int(-1.0 - stop)
    if idx < 0:
        return 0
    if idx > 16:
        return 16
    return idx


@njit(cache=True, fastmath=True)
def _palette_rgb(stop: float) -> Tuple[float, float, float]:
    i = zone_index(quantize_stop(stop))
    return (ZONE_PALETTE[i, 0], ZONE_PALETTE[i, 1], ZONE_PALETTE[i, 2])


@njit(cache=True, fastmath=True)
def chart_stop(x: float, width: float) -> float:
    """Stop represented by the chart segment under column *x*."""
    if width <= 0.0:
        segment = 0
    else:
        segment = int(math.floor(x / width * CHART_SEGMENTS))
    if segment < 0:
        segment = 0
    elif segment > CHART_SEGMENTS - 1:
        segment = CHART_SEGMENTS - 1
    return (segment - 30) / 4.0


@njit(cache=True, fastmath=True)
def chart_rgb(x: float, width: float) -> Tuple[float, float, float]:
    return _palette_rgb(chart_stop(x, width))


@njit(cache=True, fastmath=True)
def in_chart(y: float, height: float, chart_width_percent: float) -> bool:
    """True when row *y* (from the top) lies in the bottom chart strip."""
    return y >= height * (1.0 - chart_width_percent / 100.0)


@njit(cache=True, fastmath=True)
def classify_rgb(r: float, g: float, b: float,
                 input_gamma: int, is_display_referred: bool) -> Tuple[float, float, float]:
    """Palette colour for one encoded pixel."""
    r = decode_value(r, input_gamma)
    g = decode_value(g, input_gamma)
    b = decode_value(b, input_gamma)
    if is_display_referred:
        r, g, b = ootf_inverse_rgb(r, g, b)
        r, g, b = tone_map_rgb(r, g, b, DISPLAY_INPUT_NITS, DISPLAY_OUTPUT_NITS)
    return _palette_rgb(stops_from_middle_grey(luminance(r, g, b)))


# =============================================================================
# 2. PUBLIC API
# =============================================================================

def zone_color(stop: float) -> PixelColor:
    """Palette colour for an (unquantised) stop value."""
    return _palette_rgb(float(stop))


def chart_color(x: float, width: float) -> PixelColor:
    """
    Chart colour for column *x* of a frame *width* pixels wide.

    Independent of pixel content; only the column matters.
    """
    return chart_rgb(float(x), float(width))


def classify(rgb: PixelColor, input_gamma: CurveSelector = GammaType.LINEAR,
             is_display_referred: bool = False) -> PixelColor:
    """
    Exposure zone colour for one pixel.

    Args:
        rgb: Encoded (r, g, b) triple.
        input_gamma: Curve the pixel is encoded with (member, index or name).
        is_display_referred: Treat the decoded value as display light:
            undo the OOTF and expand 100 -> 10000 nits before measuring.

    Returns:
        Palette colour (r, g, b).
    """
    r, g, b = (float(c) for c in rgb)
    return classify_rgb(r, g, b, int(GammaType.coerce(input_gamma)),
                        bool(is_display_referred))
