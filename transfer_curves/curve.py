# -*- coding: utf-8 -*-
"""
Lumen: Photometric transforms for the colour grading pipeline
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: curve.py — Shared primitives and the TransferCurve record.

Every curve family module exposes a pair of scalar Numba kernels
``<name>_encode(linear) -> code`` and ``<name>_decode(code) -> linear``.
The kernels are total over the reals: log segments are only entered on the
side of the breakpoint where their argument is positive, and power segments
go through :func:`signed_pow`.

The :class:`TransferCurve` record bundles one kernel pair with the location
of its breakpoint so that curves can be exercised and checked in isolation.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from numba import njit

from lumen_types import GammaType

__all__ = ["signed_pow", "TransferCurve", "HALF_FLOAT_MAX"]

# Largest finite IEEE half float; the ACES log decodes saturate here.
HALF_FLOAT_MAX: float = 65504.0


@njit(cache=True, fastmath=True)
def signed_pow(base: float, exponent: float) -> float:
    """
    Sign-preserving power: ``sign(base) * |base| ** exponent``.

    Keeps superblack (negative) code values on an odd-symmetric extension
    of the power law instead of producing NaN.
    """
    if base < 0.0:
        return -((-base) ** exponent)
    return base ** exponent


@dataclass(slots=True, frozen=True)
class TransferCurve:
    """
    One encode/decode pair.

    Attributes:
        gamma: The enum member this record implements.
        encode_kernel: Scalar Numba kernel, scene-linear to code value.
        decode_kernel: Scalar Numba kernel, code value to scene-linear.
        linear_break: Linear-light breakpoint between the toe and the
            log/power segment (None for single-segment curves).
        ceiling: Linear value the decode saturates at, if any.
    """
    gamma:         GammaType
    encode_kernel: Callable[[float], float]
    decode_kernel: Callable[[float], float]
    linear_break:  Optional[float] = None
    ceiling:       Optional[float] = None

    @property
    def code_break(self) -> Optional[float]:
        """Code value at the breakpoint (encode of ``linear_break``)."""
        if self.linear_break is None:
            return None
        return self.encode_kernel(self.linear_break)

    def encode(self, linear: float) -> float:
        return self.encode_kernel(float(linear))

    def decode(self, code: float) -> float:
        return self.decode_kernel(float(code))

