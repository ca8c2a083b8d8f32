# -*- coding: utf-8 -*-
"""
Tinct: Perceptual colormaps for scientific visualization
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

sRGB Gamut Boundary Solver
==========================
Finds, for an LCh(uv) hue, the most saturated color that the sRGB cube can
still display.

The six cube corners red, yellow, green, cyan, blue and magenta split the
hue circle into six sectors. Inside a sector the boundary color has one
linear channel fixed at 0, one fixed at 1 and one free channel. Requiring
the Luv hue of that color to equal the target hue gives

    -sin(h) * (u' - u'n) + cos(h) * (v' - v'n) = 0

and after multiplying out the u'/v' denominator the equation is linear in
the free channel, so the boundary point follows in closed form.

Reference:
    M. Wijffelaars, R. Vliegen, J.J. van Wijk, E.-J. van der Linden (2008).
    "Generating Color Palettes using Intuitive Parameters".
    Computer Graphics Forum 27(3).
"""

import bisect
import math
from enum import Enum
from typing import Final, Tuple

import numpy as np

from tinct_colorengine import (
    D65,
    M_LINEAR_TO_XYZ_T,
    ArrayFloat,
    ColorScienceConstants,
    ColorSpaceEngine,
    LUVColor,
    normalize_hue,
)

__all__ = [
    "GamutSector",
    "most_saturated_in_gamut",
    "max_saturation_at",
]


class GamutSector(Enum):
    """
    The six hue sectors of the sRGB cube surface.

    Each value is ``(unknown, zero, one)``: the index of the linear RGB
    channel that is solved for, the channel fixed at 0 and the channel
    fixed at 1.
    """
    MAGENTA_RED = (2, 1, 0)
    RED_YELLOW = (1, 2, 0)
    YELLOW_GREEN = (0, 2, 1)
    GREEN_CYAN = (2, 0, 1)
    CYAN_BLUE = (1, 0, 2)
    BLUE_MAGENTA = (0, 1, 2)

    @property
    def unknown(self) -> int:
        return self.value[0]

    @property
    def zero(self) -> int:
        return self.value[1]

    @property
    def one(self) -> int:
        return self.value[2]

    @classmethod
    def for_hue(cls, hue: float, constants: ColorScienceConstants = D65) -> "GamutSector":
        """Bucket a hue into its sector; hue is normalized first."""
        idx = bisect.bisect_right(constants.corner_hues, normalize_hue(hue))
        return _SECTOR_ORDER[idx]

    @staticmethod
    def coefficients(hue: float, constants: ColorScienceConstants = D65) -> ArrayFloat:
        """
        Per-channel coefficients q of the hue equation sum(q[c] * rgb[c]) = 0.

        For channel c with XYZ column (X_c, Y_c, Z_c):
            q[c] = T * (X_c + 15 Y_c + 3 Z_c) - (4 alpha X_c + 9 beta Y_c)
        with alpha = -sin(h), beta = cos(h), T = alpha u'n + beta v'n.
        """
        alpha = -math.sin(hue)
        beta = math.cos(hue)
        T = alpha * constants.u_prime_n + beta * constants.v_prime_n
        X_c = M_LINEAR_TO_XYZ_T[:, 0]
        Y_c = M_LINEAR_TO_XYZ_T[:, 1]
        Z_c = M_LINEAR_TO_XYZ_T[:, 2]
        return T * (X_c + 15.0 * Y_c + 3.0 * Z_c) - (4.0 * alpha * X_c + 9.0 * beta * Y_c)

    def solve(self, hue: float, constants: ColorScienceConstants = D65) -> ArrayFloat:
        """Linear RGB point on this sector's cube face with the given hue."""
        q = self.coefficients(hue, constants)
        rgb = np.zeros(3, dtype=np.float64)
        rgb[self.one] = 1.0
        rgb[self.unknown] = min(max(-q[self.one] / q[self.unknown], 0.0), 1.0)
        return rgb


# Sector for each insertion index into the ascending corner hues. Hues below
# red and at/above magenta both fall between magenta and red.
_SECTOR_ORDER: Final[Tuple[GamutSector, ...]] = (
    GamutSector.MAGENTA_RED,
    GamutSector.RED_YELLOW,
    GamutSector.YELLOW_GREEN,
    GamutSector.GREEN_CYAN,
    GamutSector.CYAN_BLUE,
    GamutSector.BLUE_MAGENTA,
    GamutSector.MAGENTA_RED,
)


def most_saturated_in_gamut(hue: float, constants: ColorScienceConstants = D65) -> LUVColor:
    """
    Most saturated displayable color for an LCh(uv) hue.

    Args:
        hue: Hue angle in radians, any value (normalized modulo 2*pi).
        constants: White-point constants.

    Returns:
        The boundary color in Luv. Its linear RGB has one channel at 0
        and one at 1.
    """
    h = normalize_hue(hue)
    rgb = GamutSector.for_hue(h, constants).solve(h, constants)
    return LUVColor.from_array(ColorSpaceEngine.linear_to_luv(rgb, illuminant=constants.white))


def max_saturation_at(lightness: float, hue: float, constants: ColorScienceConstants = D65) -> float:
    """
    Approximate maximum saturation at a given lightness and hue.

    The gamut boundary is modelled by two straight segments in saturation
    space: from black to the most saturated color, and from there to
    white. Callers are calibrated against this model, so it stays a two
    segment approximation.
    """
    pmid = most_saturated_in_gamut(hue, constants)
    pend = LUVColor(100.0 if lightness > pmid.l else 0.0, 0.0, 0.0)
    alpha = (pend.l - lightness) / (pend.l - pmid.l)
    pends = pend.saturation
    return alpha * (pmid.saturation - pends) + pends
