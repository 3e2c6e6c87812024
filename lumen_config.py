# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: lumen_config.py — Validated, immutable pipeline configuration.

All host parameters are coerced and checked once, when the configuration is
built.  The per-pixel kernels can then trust every value they are handed
and never need to raise.

Construction mirrors the hybrid parameter API of the optical models:

    PipelineConfig(input_gamma="S-Log3", output_gamma="Rec.709")
    PipelineConfig.from_params({"variant": "FULL", "knee": 2.0}, knee=3.0)

Enum fields accept a member, its integer index, its name or its display
label.  Bad values raise ``ValueError`` / ``TypeError``; settings that are
legal but have no effect are reported with a ``UserWarning``.
"""

from __future__ import annotations

import dataclasses
import math
import warnings
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from lumen_operators import TONE_MAP_ADAPTATION_NITS
from lumen_types import ColorSpacePrimaries, GammaType, PipelineVariant

__all__ = ["PipelineConfig"]

ConfigValue = Union[bool, int, float, str, GammaType, ColorSpacePrimaries, PipelineVariant]

_ENUM_FIELDS = {
    "variant":            PipelineVariant,
    "input_gamma":        GammaType,
    "output_gamma":       GammaType,
    "input_color_space":  ColorSpacePrimaries,
    "output_color_space": ColorSpacePrimaries,
}

_BOOL_FIELDS = (
    "apply_inverse_ootf",
    "apply_forward_ootf",
    "tone_mapping_enabled",
    "saturation_compression_enabled",
    "white_point_adaptation_enabled",
    "show_chart",
    "is_display_referred",
)

_FLOAT_FIELDS = (
    "max_input_nits",
    "max_output_nits",
    "knee",
    "saturation_max",
    "chart_width_percent",
)

# Options only the FULL step order reads
_FULL_ONLY_FLAGS = (
    "tone_mapping_enabled",
    "saturation_compression_enabled",
    "white_point_adaptation_enabled",
)

# ZONE measures the decoded input and never reaches the grading steps
_INERT_FLAGS = {
    PipelineVariant.SIMPLE: _FULL_ONLY_FLAGS,
    PipelineVariant.ZONE: ("apply_inverse_ootf", "apply_forward_ootf") + _FULL_ONLY_FLAGS,
}


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    raise TypeError(f"{name} must be a bool, got {type(value).__name__}")


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


@dataclass(slots=True, frozen=True)
class PipelineConfig:
    """
    Everything one pixel evaluation reads.

    Attributes:
        variant: Step order (SIMPLE, FULL or ZONE).
        input_gamma: Curve used to decode the incoming pixel.
        output_gamma: Curve used to encode the result.
        input_color_space: Gamut of the incoming pixel.
        output_color_space: Gamut of the result.
        apply_inverse_ootf: Undo the display OOTF after decoding.
        apply_forward_ootf: Apply the display OOTF before encoding.
        tone_mapping_enabled: Roll highlights off from input to output white.
        max_input_nits: Input white level in nits (> 9).
        max_output_nits: Output white level in nits (> 9).
        saturation_compression_enabled: Compress chroma above the threshold.
        knee: Roll-off exponent of the chroma compression (> 1).
        saturation_max: Chroma threshold in [0, 1].
        white_point_adaptation_enabled: Use the D65-adapted matrix table.
        show_chart: Draw the zone reference chart (ZONE only).
        chart_width_percent: Height of the chart strip in percent of frame.
        is_display_referred: Classify zones on display light (ZONE only).
    """
    variant:                        PipelineVariant     = PipelineVariant.SIMPLE
    input_gamma:                    GammaType           = GammaType.LINEAR
    output_gamma:                   GammaType           = GammaType.LINEAR
    input_color_space:              ColorSpacePrimaries = ColorSpacePrimaries.REC709
    output_color_space:             ColorSpacePrimaries = ColorSpacePrimaries.REC709
    apply_inverse_ootf:             bool                = False
    apply_forward_ootf:             bool                = False
    tone_mapping_enabled:           bool                = False
    max_input_nits:                 float               = 1000.0
    max_output_nits:                float               = 100.0
    saturation_compression_enabled: bool                = False
    knee:                           float               = 2.0
    saturation_max:                 float               = 0.8
    white_point_adaptation_enabled: bool                = False
    show_chart:                     bool                = False
    chart_width_percent:            float               = 10.0
    is_display_referred:            bool                = False

    def __post_init__(self) -> None:
        # frozen: coerced values go in through object.__setattr__
        for name, enum_cls in _ENUM_FIELDS.items():
            object.__setattr__(self, name, enum_cls.coerce(getattr(self, name)))
        for name in _BOOL_FIELDS:
            object.__setattr__(self, name, _as_bool(name, getattr(self, name)))
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, _as_float(name, getattr(self, name)))

        self._validate_ranges()
        self._warn_inert_settings()

    def _validate_ranges(self) -> None:
        for name in ("max_input_nits", "max_output_nits"):
            nits = getattr(self, name)
            if nits <= TONE_MAP_ADAPTATION_NITS:
                raise ValueError(
                    f"{name} must exceed the {TONE_MAP_ADAPTATION_NITS:g}-nit "
                    f"adaptation level, got {nits}"
                )
        if self.knee <= 1.0:
            raise ValueError(f"knee must be > 1, got {self.knee}")
        if not 0.0 <= self.saturation_max <= 1.0:
            raise ValueError(f"saturation_max must lie in [0, 1], got {self.saturation_max}")
        if not 0.0 <= self.chart_width_percent <= 100.0:
            raise ValueError(
                f"chart_width_percent must lie in [0, 100], got {self.chart_width_percent}"
            )

    def _warn_inert_settings(self) -> None:
        if (self.tone_mapping_enabled
                and self.variant is PipelineVariant.FULL
                and self.max_input_nits == self.max_output_nits):
            warnings.warn(
                f"Tone mapping is enabled but input and output white are both "
                f"{self.max_input_nits:g} nits; only clamping will be applied.",
                UserWarning, stacklevel=4,
            )
        ignored = [name for name in _INERT_FLAGS.get(self.variant, ())
                   if getattr(self, name)]
        if ignored:
            warnings.warn(
                f"{', '.join(ignored)} ignored by the {self.variant.name} variant; "
                f"select FULL to apply them.",
                UserWarning, stacklevel=4,
            )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def _check_keys(cls, keys) -> None:
        unknown = sorted(set(keys) - set(cls.field_names()))
        if unknown:
            raise ValueError(f"Unknown PipelineConfig option(s): {', '.join(unknown)}")

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, ConfigValue]] = None,
                    **kwargs: ConfigValue) -> PipelineConfig:
        """
        Builds a configuration from a parameter dict and/or keywords.

        Args:
            params: Option dictionary (e.g. loaded from a config file).
            **kwargs: Individual options (override params dict).

        Example:
            PipelineConfig.from_params({"variant": "FULL"}, knee=3.0)
        """
        merged = {**(params or {}), **kwargs}
        cls._check_keys(merged)
        return cls(**merged)

    def replace(self, **changes: ConfigValue) -> PipelineConfig:
        """Validated copy with *changes* applied."""
        self._check_keys(changes)
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Union[bool, float, str]]:
        """Plain snapshot; enum options are given by member name."""
        out: Dict[str, Union[bool, float, str]] = {}
        for name in self.field_names():
            value = getattr(self, name)
            out[name] = value.name if name in _ENUM_FIELDS else value
        return out
