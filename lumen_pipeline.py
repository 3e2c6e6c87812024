# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Pixel Pipeline
==============
Composes the transfer curves, gamut tables and photometric operators into
one per-pixel transform, in the step order selected by the configuration:

    SIMPLE  decode -> [OOTF^-1] -> direct matrix -> [OOTF] -> encode
    FULL    decode -> [OOTF^-1] -> [tone map] -> matrix (direct or adapted)
            -> [saturation] -> [OOTF] -> encode
    ZONE    chart colour inside the chart strip, otherwise the exposure
            zone colour; never reaches the matrix or encode stages

The matrix step is always two sequential 3x3 multiplies through XYZ.

Everything a pixel needs is resolved when the :class:`PixelPipeline` is
built (enum codes, matrices, flags), so the compiled kernel only ever sees
plain numbers and arrays.  The kernel is stateless; :meth:`PixelPipeline.apply`
fans whole images out across rows with ``prange``.
"""

from typing import Optional, Tuple

import numpy as np
from numba import njit, prange

from lumen_config import PipelineConfig
from lumen_gamut import apply_matrix, from_xyz, to_xyz
from lumen_operators import (
    compress_saturation_rgb, ootf_forward_rgb, ootf_inverse_rgb, tone_map_rgb,
)
from lumen_types import ArrayFloat, PipelineVariant, PixelColor
from lumen_zones import chart_rgb, classify_rgb, in_chart
from transfer_curves import decode_value, encode_value

__all__ = ["PixelPipeline", "transform"]

_FULL = int(PipelineVariant.FULL)
_ZONE = int(PipelineVariant.ZONE)


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _transform_pixel(r: float, g: float, b: float,
                     x: float, y: float, width: float, height: float,
                     variant: int, input_gamma: int, output_gamma: int,
                     m_in: ArrayFloat, m_out: ArrayFloat,
                     inverse_ootf: bool, forward_ootf: bool,
                     tone_mapping: bool, max_input_nits: float, max_output_nits: float,
                     saturation: bool, knee: float, saturation_max: float,
                     show_chart: bool, chart_width_percent: float,
                     is_display_referred: bool) -> Tuple[float, float, float]:
    if variant == _ZONE:
        if show_chart and in_chart(y, height, chart_width_percent):
            return chart_rgb(x, width)
        return classify_rgb(r, g, b, input_gamma, is_display_referred)

    full = variant == _FULL

    r = decode_value(r, input_gamma)
    g = decode_value(g, input_gamma)
    b = decode_value(b, input_gamma)

    if inverse_ootf:
        r, g, b = ootf_inverse_rgb(r, g, b)

    if full and tone_mapping:
        r, g, b = tone_map_rgb(r, g, b, max_input_nits, max_output_nits)

    # RGB -> XYZ -> RGB
    r, g, b = apply_matrix(m_in, r, g, b)
    r, g, b = apply_matrix(m_out, r, g, b)

    if full and saturation:
        r, g, b = compress_saturation_rgb(r, g, b, knee, saturation_max)

    if forward_ootf:
        r, g, b = ootf_forward_rgb(r, g, b)

    return (encode_value(r, output_gamma),
            encode_value(g, output_gamma),
            encode_value(b, output_gamma))


@njit(cache=True, fastmath=True, parallel=True)
def _transform_image(image: ArrayFloat,
                     variant: int, input_gamma: int, output_gamma: int,
                     m_in: ArrayFloat, m_out: ArrayFloat,
                     inverse_ootf: bool, forward_ootf: bool,
                     tone_mapping: bool, max_input_nits: float, max_output_nits: float,
                     saturation: bool, knee: float, saturation_max: float,
                     show_chart: bool, chart_width_percent: float,
                     is_display_referred: bool) -> ArrayFloat:
    """Rows in parallel; column and row index feed the chart geometry."""
    height = image.shape[0]
    width = image.shape[1]
    out = np.empty_like(image)
    for i in prange(height):
        for j in range(width):
            r, g, b = _transform_pixel(
                image[i, j, 0], image[i, j, 1], image[i, j, 2],
                float(j), float(i), float(width), float(height),
                variant, input_gamma, output_gamma, m_in, m_out,
                inverse_ootf, forward_ootf,
                tone_mapping, max_input_nits, max_output_nits,
                saturation, knee, saturation_max,
                show_chart, chart_width_percent, is_display_referred,
            )
            out[i, j, 0] = r
            out[i, j, 1] = g
            out[i, j, 2] = b
    return out


# =============================================================================
# 2. PIPELINE
# =============================================================================

class PixelPipeline:
    """
    A configured, stateless pixel transform.

    Args:
        config: The pipeline configuration (defaults to the identity
            configuration: linear Rec.709 in and out, SIMPLE variant).

    Example:
        >>> cfg = PipelineConfig(input_gamma="S-Log3", output_gamma="Rec.709",
        ...                      input_color_space="S-Gamut3.Cine")
        >>> PixelPipeline(cfg).transform((0.41, 0.41, 0.41))
    """

    __slots__ = ("config", "_kernel_args")

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        if config is None:
            config = PipelineConfig()
        elif not isinstance(config, PipelineConfig):
            raise TypeError(
                f"config must be a PipelineConfig, got {type(config).__name__}"
            )
        self.config = config

        # SIMPLE always reads the direct table
        adapted = (config.variant is PipelineVariant.FULL
                   and config.white_point_adaptation_enabled)
        m_in = np.array(to_xyz(config.input_color_space, adapted), dtype=np.float64)
        m_out = np.array(from_xyz(config.output_color_space, adapted), dtype=np.float64)

        self._kernel_args = (
            int(config.variant), int(config.input_gamma), int(config.output_gamma),
            m_in, m_out,
            config.apply_inverse_ootf, config.apply_forward_ootf,
            config.tone_mapping_enabled, config.max_input_nits, config.max_output_nits,
            config.saturation_compression_enabled, config.knee, config.saturation_max,
            config.show_chart, config.chart_width_percent, config.is_display_referred,
        )

    def __repr__(self) -> str:
        return f"PixelPipeline({self.config!r})"

    def transform(self, rgb: PixelColor, x: float = 0, y: float = 0,
                  width: float = 1, height: float = 1) -> PixelColor:
        """
        Transforms one pixel.

        Args:
            rgb: Encoded (r, g, b) triple; any real values.
            x: Column of the pixel (chart only).
            y: Row of the pixel, counted from the top (chart only).
            width: Frame width in pixels (chart only).
            height: Frame height in pixels (chart only).

        Returns:
            The transformed (r, g, b) triple, or a palette colour for ZONE.
        """
        r, g, b = rgb
        return _transform_pixel(float(r), float(g), float(b),
                                float(x), float(y), float(width), float(height),
                                *self._kernel_args)

    def apply(self, image: ArrayFloat) -> ArrayFloat:
        """
        Transforms a whole image.

        Args:
            image: ``(3,)`` single pixel, ``(N, 3)`` treated as one row of
                N pixels, or ``(H, W, 3)``.

        Returns:
            float64 array of the input shape.
        """
        arr = np.asarray(image, dtype=np.float64)
        if arr.ndim == 0 or arr.shape[-1] != 3:
            got = arr.shape[-1] if arr.ndim else "a scalar"
            raise ValueError(f"Expected last dimension size 3, got {got}")
        if arr.ndim > 3:
            raise ValueError(f"Expected at most 3 dimensions, got {arr.ndim}")

        # (3,) -> (1, 1, 3); (N, 3) -> (1, N, 3)
        frame = np.ascontiguousarray(arr.reshape((1,) * (3 - arr.ndim) + arr.shape))
        res = _transform_image(frame, *self._kernel_args)
        return res.reshape(arr.shape)


def transform(rgb: PixelColor, config: PipelineConfig, x: float = 0, y: float = 0,
              width: float = 1, height: float = 1) -> PixelColor:
    """One-shot :meth:`PixelPipeline.transform`."""
    return PixelPipeline(config).transform(rgb, x, y, width, height)
