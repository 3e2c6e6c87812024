# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: lumen_types.py — Closed option sets shared by every stage.

The enums are plain ``IntEnum`` so that their integer values can be handed
straight to the Numba kernels, which dispatch on ``int`` codes.  Each enum
also knows how to *coerce* the looser inputs a host or a config file may
hand us (an integer index, the member name, or the display label).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple, TypeAlias, Union

import numpy as np
import numpy.typing as npt

__all__ = [
    "ArrayFloat",
    "PixelColor",
    "CoercibleEnum",
    "GammaType",
    "ColorSpacePrimaries",
    "PipelineVariant",
    "CURVE_LABELS",
    "PRIMARIES_LABELS",
]

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
ArrayFloat: TypeAlias = npt.NDArray[np.floating]
PixelColor: TypeAlias = Tuple[float, float, float]


def _normalise_key(text: str) -> str:
    """Folds a user supplied name so that 'S-Log3', 's_log3', 'SLOG 3' match."""
    return "".join(ch for ch in text.upper() if ch.isalnum())


class CoercibleEnum(IntEnum):
    """IntEnum with tolerant lookup by index, member name or display label."""

    @classmethod
    def _labels(cls) -> Dict["CoercibleEnum", str]:
        return {}

    @property
    def label(self) -> str:
        """Human readable name (falls back to the member name)."""
        return self._labels().get(self, self.name)

    @classmethod
    def coerce(cls, value: Union["CoercibleEnum", int, str]):
        """
        Resolve *value* to a member of this enum.

        Args:
            value: A member, its integer index, its name or its label.

        Raises:
            TypeError: If *value* is not an int, str or member.
            ValueError: If no member matches.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, CoercibleEnum):
            raise TypeError(
                f"{cls.__name__} cannot be selected by {type(value).__name__}.{value.name}"
            )
        # bool is an int subclass; a flag is never a valid selector
        if isinstance(value, bool):
            raise TypeError(f"{cls.__name__} cannot be selected by a bool")
        if isinstance(value, (int, np.integer)):
            try:
                return cls(int(value))
            except ValueError:
                raise ValueError(
                    f"{value} is not a valid {cls.__name__} index "
                    f"(expected 0..{len(cls) - 1})"
                ) from None
        if isinstance(value, str):
            key = _normalise_key(value)
            for member in cls:
                if key in (_normalise_key(member.name), _normalise_key(member.label)):
                    return member
            raise ValueError(f"Unknown {cls.__name__}: {value!r}")
        raise TypeError(
            f"{cls.__name__} must be given as a member, int or str, "
            f"got {type(value).__name__}"
        )


# ---------------------------------------------------------------------------
# 1.  Transfer functions
# ---------------------------------------------------------------------------
class GammaType(CoercibleEnum):
    """The fifteen encode/decode curves understood by the engine."""
    ACESCC               = 0
    ACESCCT              = 1
    ARRI_LOGC3           = 2
    ARRI_LOGC4           = 3
    SONY_SLOG3           = 4
    RED_LOG3G10          = 5
    PANASONIC_VLOG       = 6
    CANON_LOG3           = 7
    DAVINCI_INTERMEDIATE = 8
    GAMMA_2_2            = 9
    GAMMA_2_4            = 10
    GAMMA_2_6            = 11
    LINEAR               = 12
    REC709               = 13
    SRGB                 = 14

    @classmethod
    def _labels(cls) -> Dict["CoercibleEnum", str]:
        return CURVE_LABELS


# ---------------------------------------------------------------------------
# 2.  RGB primaries
# ---------------------------------------------------------------------------
class ColorSpacePrimaries(CoercibleEnum):
    """The fifteen RGB gamuts the matrix tables are built for."""
    ACES_AP0             = 0
    ACES_AP1             = 1
    DAVINCI_WIDE_GAMUT   = 2
    ARRI_WIDE_GAMUT_3    = 3
    ARRI_WIDE_GAMUT_4    = 4
    SONY_SGAMUT3_CINE    = 5
    RED_WIDE_GAMUT_RGB   = 6
    PANASONIC_VGAMUT     = 7
    CANON_CINEMA_GAMUT   = 8
    P3_DCI               = 9
    P3_D60               = 10
    P3_D65               = 11
    REC709               = 12
    REC2020              = 13
    XYZ                  = 14

    @classmethod
    def _labels(cls) -> Dict["CoercibleEnum", str]:
        return PRIMARIES_LABELS


# ---------------------------------------------------------------------------
# 3.  Orchestration variants
# ---------------------------------------------------------------------------
class PipelineVariant(CoercibleEnum):
    """
    Step orders offered by the pixel pipeline.

        SIMPLE  decode, [OOTF^-1], matrix, [OOTF], encode
        FULL    as SIMPLE plus tone map, saturation and adapted matrices
        ZONE    exposure false colour (short-circuits before the matrix)
    """
    SIMPLE = 0
    FULL   = 1
    ZONE   = 2


CURVE_LABELS: Dict[GammaType, str] = {
    GammaType.ACESCC:               "ACEScc",
    GammaType.ACESCCT:              "ACEScct",
    GammaType.ARRI_LOGC3:           "ARRI LogC3",
    GammaType.ARRI_LOGC4:           "ARRI LogC4",
    GammaType.SONY_SLOG3:           "S-Log3",
    GammaType.RED_LOG3G10:          "Log3G10",
    GammaType.PANASONIC_VLOG:       "V-Log",
    GammaType.CANON_LOG3:           "Canon Log 3",
    GammaType.DAVINCI_INTERMEDIATE: "DaVinci Intermediate",
    GammaType.GAMMA_2_2:            "Gamma 2.2",
    GammaType.GAMMA_2_4:            "Gamma 2.4",
    GammaType.GAMMA_2_6:            "Gamma 2.6",
    GammaType.LINEAR:               "Linear",
    GammaType.REC709:               "Rec.709",
    GammaType.SRGB:                 "sRGB",
}

PRIMARIES_LABELS: Dict[ColorSpacePrimaries, str] = {
    ColorSpacePrimaries.ACES_AP0:           "ACES AP0",
    ColorSpacePrimaries.ACES_AP1:           "ACES AP1",
    ColorSpacePrimaries.DAVINCI_WIDE_GAMUT: "DaVinci Wide Gamut",
    ColorSpacePrimaries.ARRI_WIDE_GAMUT_3:  "ARRI Wide Gamut 3",
    ColorSpacePrimaries.ARRI_WIDE_GAMUT_4:  "ARRI Wide Gamut 4",
    ColorSpacePrimaries.SONY_SGAMUT3_CINE:  "S-Gamut3.Cine",
    ColorSpacePrimaries.RED_WIDE_GAMUT_RGB: "REDWideGamutRGB",
    ColorSpacePrimaries.PANASONIC_VGAMUT:   "V-Gamut",
    ColorSpacePrimaries.CANON_CINEMA_GAMUT: "Canon Cinema Gamut",
    ColorSpacePrimaries.P3_DCI:             "P3-DCI",
    ColorSpacePrimaries.P3_D60:             "P3-D60",
    ColorSpacePrimaries.P3_D65:             "P3-D65",
    ColorSpacePrimaries.REC709:             "Rec.709",
    ColorSpacePrimaries.REC2020:            "Rec.2020",
    ColorSpacePrimaries.XYZ:                "CIE XYZ",
}
