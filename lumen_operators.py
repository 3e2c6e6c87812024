# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Photometric Operators
=====================
Per-pixel operators applied in linear light around the gamut step:

1. **OOTF emulation** - the BT.709 camera curve read back as a 2.4 display
   gamma (forward), and its mirror (inverse).  The curve-pair mismatch is
   the OOTF; it is not replaced by a closed-form system gamma.
2. **Tone mapping** - highlight roll-off ``f(x) = a*x / (x + b)`` between
   two white levels in nits, pinned so that the 9-nit adaptation level is
   left unchanged and the input white lands on the output white.
3. **Saturation compression** - root roll-off of the HSV-style chroma
   above a threshold, preserving the max channel.

Each operator is a scalar Numba kernel on ``(r, g, b)`` returning a tuple
(these are what the pixel pipeline composes) plus an array-facing wrapper
accepting ``(3,)``, ``(N, 3)`` or ``(H, W, 3)`` input.

The kernels never raise: negative input, black pixels and equal white
points are all handled by clamping or by skipping the stage.
"""

import functools
from typing import Any, Callable, Final, Tuple

import numpy as np
from numba import njit

from lumen_types import ArrayFloat, GammaType
from transfer_curves import decode_value, encode_value

__all__ = [
    "TONE_MAP_ADAPTATION_NITS",
    "handle_shapes",
    "ootf_forward_rgb",
    "ootf_inverse_rgb",
    "tone_map_channel",
    "tone_map_rgb",
    "chroma_rgb",
    "compress_saturation_rgb",
    "apply_forward_ootf",
    "apply_inverse_ootf",
    "tone_map",
    "chroma",
    "compress_saturation",
]

# Scene adaptation level in nits; the roll-off maps it onto itself.
TONE_MAP_ADAPTATION_NITS: Final[float] = 9.0
_NITS_SCALE: Final[float] = 100.0
_K: Final[float] = TONE_MAP_ADAPTATION_NITS / _NITS_SCALE

_REC709: Final[int] = int(GammaType.REC709)
_GAMMA24: Final[int] = int(GammaType.GAMMA_2_4)


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and restore the caller's shape.

    Args:
        func: Function taking a C-contiguous float64 (N, 3) array.

    Returns:
        The wrapped function.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
        - If input is (H, W, 3), returns (H, W, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim == 0 or arr.shape[-1] != 3:
            got = arr.shape[-1] if arr.ndim else "a scalar"
            raise ValueError(f"Expected last dimension size 3, got {got}")

        flat = np.ascontiguousarray(arr.reshape(-1, 3))
        res = func(flat, *args, **kwargs)
        return res.reshape(arr.shape)
    return wrapper


# =============================================================================
# 2. SCALAR KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=True)
def ootf_forward_rgb(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Scene light to display light: Rec.709 encode, gamma 2.4 decode."""
    return (decode_value(encode_value(r, _REC709), _GAMMA24),
            decode_value(encode_value(g, _REC709), _GAMMA24),
            decode_value(encode_value(b, _REC709), _GAMMA24))


@njit(cache=True, fastmath=True)
def ootf_inverse_rgb(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Display light to scene light: gamma 2.4 encode, Rec.709 decode."""
    return (decode_value(encode_value(r, _GAMMA24), _REC709),
            decode_value(encode_value(g, _GAMMA24), _REC709),
            decode_value(encode_value(b, _GAMMA24), _REC709))


@njit(cache=True, fastmath=True)
def tone_map_channel(x: float, max_input_nits: float, max_output_nits: float) -> float:
    """
    Highlight roll-off of one linear channel.

    With ``Wi = in/100``, ``Wo = out/100`` and ``k = 0.09``:
    ``b = (Wo - k) / (1 - Wo/Wi)``, ``a = Wo * (Wi + b) / Wi``, so that
    ``f(Wi) = Wo`` and ``f(k) = k``.  Input is clamped to [0, Wi] and the
    result to [0, Wo]; equal whites skip the curve.
    """
    wi = max_input_nits / _NITS_SCALE
    wo = max_output_nits / _NITS_SCALE

    if x < 0.0:
        x = 0.0
    elif x > wi:
        x = wi

    if wi != wo:
        b = (wo - _K) / (1.0 - wo / wi)
        a = wo * (wi + b) / wi
        x = a * x / (x + b)

    if x < 0.0:
        return 0.0
    if x > wo:
        return wo
    return x


@njit(cache=True, fastmath=True)
def tone_map_rgb(r: float, g: float, b: float,
                 max_input_nits: float, max_output_nits: float) -> Tuple[float, float, float]:
    return (tone_map_channel(r, max_input_nits, max_output_nits),
            tone_map_channel(g, max_input_nits, max_output_nits),
            tone_map_channel(b, max_input_nits, max_output_nits))


@njit(cache=True, fastmath=True)
def chroma_rgb(r: float, g: float, b: float) -> float:
    """``(max - min) / max``; zero when the max channel is not positive."""
    mx = max(r, g, b)
    if mx <= 0.0:
        return 0.0
    return (mx - min(r, g, b)) / mx


@njit(cache=True, fastmath=True)
def compress_saturation_rgb(r: float, g: float, b: float,
                            knee: float, saturation_max: float) -> Tuple[float, float, float]:
    """
    Root roll-off of chroma above ``saturation_max``.

    Excess ``d = (c - t) / (1 - t)`` is compressed to
    ``t + (1 - t) * d / (1 + d**knee) ** (1/knee)``, which is continuous at
    the threshold and stays below 1.  Channels are scaled towards the max
    channel, which is left untouched.
    """
    c = chroma_rgb(r, g, b)
    t = saturation_max
    if c < t or c <= 0.0:
        return (r, g, b)

    if t >= 1.0:
        c_new = min(c, 1.0)
    else:
        d = (c - t) / (1.0 - t)
        c_new = t + (1.0 - t) * d / (1.0 + d ** knee) ** (1.0 / knee)

    s = c_new / c
    m = max(r, g, b)
    return (m + s * (r - m), m + s * (g - m), m + s * (b - m))


# =============================================================================
# 3. BATCH LOOPS
# =============================================================================

@njit(cache=True, fastmath=True)
def _batch_ootf(rgb: ArrayFloat, forward: bool) -> ArrayFloat:
    out = np.empty_like(rgb)
    for i in range(rgb.shape[0]):
        if forward:
            r, g, b = ootf_forward_rgb(rgb[i, 0], rgb[i, 1], rgb[i, 2])
        else:
            r, g, b = ootf_inverse_rgb(rgb[i, 0], rgb[i, 1], rgb[i, 2])
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b
    return out


@njit(cache=True, fastmath=True)
def _batch_tone_map(rgb: ArrayFloat, max_input_nits: float, max_output_nits: float) -> ArrayFloat:
    out = np.empty_like(rgb)
    for i in range(rgb.shape[0]):
        r, g, b = tone_map_rgb(rgb[i, 0], rgb[i, 1], rgb[i, 2],
                               max_input_nits, max_output_nits)
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b
    return out


@njit(cache=True, fastmath=True)
def _batch_compress_saturation(rgb: ArrayFloat, knee: float, saturation_max: float) -> ArrayFloat:
    out = np.empty_like(rgb)
    for i in range(rgb.shape[0]):
        r, g, b = compress_saturation_rgb(rgb[i, 0], rgb[i, 1], rgb[i, 2],
                                          knee, saturation_max)
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b
    return out


@njit(cache=True, fastmath=True)
def _batch_chroma(rgb: ArrayFloat) -> ArrayFloat:
    out = np.empty(rgb.shape[0], dtype=np.float64)
    for i in range(rgb.shape[0]):
        out[i] = chroma_rgb(rgb[i, 0], rgb[i, 1], rgb[i, 2])
    return out


# =============================================================================
# 4. PUBLIC API
# =============================================================================

@handle_shapes
def apply_forward_ootf(linear_rgb: ArrayFloat) -> ArrayFloat:
    """Forward OOTF (scene -> display light) per channel."""
    return _batch_ootf(linear_rgb, True)


@handle_shapes
def apply_inverse_ootf(linear_rgb: ArrayFloat) -> ArrayFloat:
    """Inverse OOTF (display -> scene light) per channel."""
    return _batch_ootf(linear_rgb, False)


@handle_shapes
def tone_map(linear_rgb: ArrayFloat, max_input_nits: float, max_output_nits: float) -> ArrayFloat:
    """
    Highlight roll-off from *max_input_nits* to *max_output_nits*.

    Args:
        linear_rgb: Linear RGB, last dimension 3.
        max_input_nits: Input white level in nits (100 nits = 1.0).
        max_output_nits: Output white level in nits.

    Returns:
        Tone-mapped RGB in ``[0, max_output_nits / 100]``.
    """
    return _batch_tone_map(linear_rgb, float(max_input_nits), float(max_output_nits))


@handle_shapes
def compress_saturation(rgb: ArrayFloat, knee: float, saturation_max: float) -> ArrayFloat:
    """
    Chroma compression above *saturation_max* with roll-off hardness *knee*.

    Args:
        rgb: Linear RGB, last dimension 3.
        knee: Roll-off exponent (> 1; 2 gives a square-root roll-off).
        saturation_max: Chroma threshold in [0, 1] below which pixels pass.

    Returns:
        RGB with chroma bounded by 1 and the max channel preserved.
    """
    return _batch_compress_saturation(rgb, float(knee), float(saturation_max))


def chroma(rgb: ArrayFloat) -> Any:
    """HSV-style chroma of each pixel; a float for a single pixel."""
    arr = np.asarray(rgb, dtype=np.float64)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected last dimension size 3, got {arr.shape[-1] if arr.ndim else 'a scalar'}")
    res = _batch_chroma(np.ascontiguousarray(arr.reshape(-1, 3))).reshape(arr.shape[:-1])
    if arr.ndim == 1:
        return float(res)
    return res
