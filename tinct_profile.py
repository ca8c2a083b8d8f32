# -*- coding: utf-8 -*-
"""
Tinct: Perceptual colormaps for scientific visualization
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Bezier Lightness / Chroma Profiles
==================================
A profile describes how a one-hue colormap travels through Luv as its
lightness rises from black to the bright end:

    p0 (black)  ->  p1 (most saturated in gamut)  ->  p2 (bright end)

The bright end is pulled toward the yellow bright point by ``warmth``.
The outer control points are blended toward ``p1`` by ``saturation``
(q0, q2) and ``q1`` is their midpoint, which gives two quadratic Bezier
segments (p0, q0, q1) and (q1, q2, p2).

Sampling does not walk the Bezier parameter directly. A target lightness
is computed first from an exponential easing curve, and the Bezier
parameter that reaches it is found by inverting the lightness component
of the curve. Equal steps in ``t`` therefore give the intended lightness
steps.
"""

import math
from dataclasses import dataclass
from typing import Final, Sequence

import numpy as np

from tinct_colorengine import (
    D65,
    TWO_PI,
    ArrayFloat,
    ColorScienceConstants,
    LUVColor,
    lch_chroma,
    normalize_hue,
)
from tinct_gamut import max_saturation_at, most_saturated_in_gamut

__all__ = [
    "LightnessProfile",
    "angular_distance",
    "inverse_quadratic_bezier",
    "mix_hue",
    "quadratic_bezier",
    "target_lightness",
]

# Below this |b0 - 2 b1 + b2| the lightness curve is treated as linear.
_LINEAR_TOLERANCE: Final[float] = 1e-6


def mix_hue(alpha: float, h0: float, h1: float) -> float:
    """
    Move from h0 toward h1 by fraction alpha.

    The hue difference is folded with a truncating remainder, so it lands
    in [-pi, pi) only when h1 - h0 > -pi. That is the shorter arc, except
    when h0 lies more than pi past h1: then the mix runs straight down to
    h1 instead of wrapping through 0. Generated colormaps depend on this
    for hues above ``bright_hue + pi``.
    """
    h0 = normalize_hue(h0)
    h1 = normalize_hue(h1)
    delta = math.fmod(math.pi + h1 - h0, TWO_PI) - math.pi
    return normalize_hue(h0 + alpha * delta)


def angular_distance(h0: float, h1: float) -> float:
    """Absolute hue difference in [0, pi]."""
    t = abs(normalize_hue(h1) - normalize_hue(h0))
    return t if t < math.pi else TWO_PI - t


def target_lightness(t: float, contrast: float, brightness: float) -> float:
    """
    Desired Luv lightness at position t in [0, 1].

    ``contrast`` sets how much of the exponential curve the map spans,
    ``brightness`` shifts where on the curve it starts.
    """
    return 125.0 - 125.0 * 0.2 ** ((1.0 - contrast) * brightness + t * contrast)


def quadratic_bezier(b0: LUVColor, b1: LUVColor, b2: LUVColor, t: float) -> LUVColor:
    a = (1.0 - t) * (1.0 - t)
    b = 2.0 * (1.0 - t) * t
    c = t * t
    return b0.scale(a).add(b1.scale(b)).add(b2.scale(c))


def inverse_quadratic_bezier(b0: float, b1: float, b2: float, v: float) -> float:
    """
    Parameter u at which the scalar quadratic Bezier (b0, b1, b2) equals v.

    Takes the root that lies on an increasing curve. A negative
    discriminant (v beyond the curve's range) is clamped to zero, which
    returns the vertex.
    """
    a = b0 - 2.0 * b1 + b2
    if abs(a) < _LINEAR_TOLERANCE:
        slope = 2.0 * (b1 - b0)
        if slope == 0.0:
            return 0.0
        return (v - b0) / slope
    disc = max(b1 * b1 - b0 * b2 + a * v, 0.0)
    return (b0 - b1 + math.sqrt(disc)) / a


@dataclass(slots=True, frozen=True)
class LightnessProfile:
    """Control points of a one-hue lightness profile."""
    p0: LUVColor
    p1: LUVColor
    p2: LUVColor
    q0: LUVColor
    q1: LUVColor
    q2: LUVColor

    @classmethod
    def build(
        cls,
        hue: float,
        saturation: float,
        warmth: float,
        constants: ColorScienceConstants = D65,
    ) -> "LightnessProfile":
        """
        Build the control points for a hue.

        Args:
            hue: Hue of the most saturated point, radians.
            saturation: Blend of the ends toward the most saturated point.
            warmth: Pull of the bright end toward the yellow bright point.
            constants: White-point constants.
        """
        hue = normalize_hue(hue)
        pb = constants.bright_point

        p0 = LUVColor.from_lch(0.0, 0.0, hue)
        p1 = most_saturated_in_gamut(hue, constants)

        p2l = (1.0 - warmth) * 100.0 + warmth * pb.l
        p2h = mix_hue(warmth, hue, constants.bright_hue)
        p2s = min(max_saturation_at(p2l, p2h, constants),
                  warmth * saturation * constants.bright_saturation)
        p2 = LUVColor.from_lch(p2l, lch_chroma(p2l, p2s), p2h)

        q0 = p0.lerp(p1, saturation)
        q2 = p2.lerp(p1, saturation)
        q1 = q0.add(q2).scale(0.5)
        return cls(p0=p0, p1=p1, p2=p2, q0=q0, q1=q1, q2=q2)

    def parameter_for_lightness(self, lightness: float) -> float:
        """Global parameter T in [0, 1] of the piecewise curve, split at q1."""
        if lightness <= self.q1.l:
            return 0.5 * inverse_quadratic_bezier(self.p0.l, self.q0.l, self.q1.l, lightness)
        return 0.5 * inverse_quadratic_bezier(self.q1.l, self.q2.l, self.p2.l, lightness) + 0.5

    def evaluate(self, T: float) -> LUVColor:
        if T <= 0.5:
            return quadratic_bezier(self.p0, self.q0, self.q1, 2.0 * T)
        return quadratic_bezier(self.q1, self.q2, self.p2, 2.0 * (T - 0.5))

    def sample(self, t: float, contrast: float, brightness: float) -> LUVColor:
        """Color at position t, spaced by :func:`target_lightness`."""
        return self.evaluate(self.parameter_for_lightness(target_lightness(t, contrast, brightness)))

    def sample_many(self, ts: Sequence[float], contrast: float, brightness: float) -> ArrayFloat:
        """Vector of samples as an (N, 3) Luv array."""
        out = np.empty((len(ts), 3), dtype=np.float64)
        for i, t in enumerate(ts):
            c = self.sample(t, contrast, brightness)
            out[i] = (c.l, c.u, c.v)
        return out
