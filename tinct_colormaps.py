# -*- coding: utf-8 -*-
"""
Tinct: Perceptual colormaps for scientific visualization
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colormap Generators
===================
Four families of colormaps, each returned as a :class:`ColorMap` of ``n``
sRGB byte triples (entry 0 first):

    sequential   one hue, dark to bright
    diverging    two hues meeting at a bright neutral center
    qualitative  distinct categorical colors around the hue circle
    cubehelix    Green's helix around the gray diagonal of the RGB cube

The first three are the Brewer-like schemes of Wijffelaars et al. and are
designed in Luv on top of :class:`tinct_profile.LightnessProfile`.
CubeHelix works directly in RGB and is the only family that reports how
many entries had to be clipped into the gamut.

Front-ends normally go through :func:`generate`, which fills in the
per-method defaults and dispatches by method name.

All angles are radians. Unit parameters (contrast, saturation,
brightness, warmth) must be in [0, 1]; violations raise
:class:`ColorMapParameterError`.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Final, Optional, Tuple

import numpy as np
import numpy.typing as npt

from tinct_about import __version__
from tinct_colorengine import (
    D65,
    TWO_PI,
    ArrayFloat,
    ColorScienceConstants,
    ColorSpaceEngine,
    GamutMapping,
    LUVColor,
    lch_chroma,
    normalize_hue,
    quantize_srgb,
)
from tinct_gamut import max_saturation_at
from tinct_profile import LightnessProfile, angular_distance

__all__ = [
    "__version__",
    "ColorMap",
    "ColorMapMethod",
    "ColorMapParameterError",
    "METHODS",
    "cubehelix",
    "default_contrast_for_small_n",
    "diverging",
    "diverging_luv",
    "generate",
    "qualitative",
    "qualitative_luv",
    "sequential",
    "sequential_luv",
]

logger = logging.getLogger(__name__)

# Diverging maps up to this size get a distinct neutral center swatch.
_DISCRETE_MAX_N: Final[int] = 9

# Green (2011) cubehelix basis: rgb = f + amp * (cos * COS + sin * SIN).
_CUBEHELIX_COS: Final[ArrayFloat] = np.array([-0.14861, -0.29227, 1.97294], dtype=np.float64)
_CUBEHELIX_SIN: Final[ArrayFloat] = np.array([1.78277, -0.90649, 0.0], dtype=np.float64)

_BREWER_REFERENCE: Final[str] = (
    "M. Wijffelaars, R. Vliegen, J.J. van Wijk, E.-J. van der Linden. "
    "Generating Color Palettes using Intuitive Parameters. "
    "Computer Graphics Forum 27(3), May 2008."
)
_CUBEHELIX_REFERENCE: Final[str] = (
    "D. A. Green. A colour scheme for the display of astronomical intensity "
    "images. Bulletin of the Astronomical Society of India 39(2), June 2011."
)


class ColorMapParameterError(ValueError):
    """A colormap parameter is missing, unknown or outside its range."""


# ---------------------------------------------------------------------------
# 1.  Result type
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True, eq=False)
class ColorMap:
    """
    A generated colormap.

    Attributes:
        method: Name of the generating method.
        colors: (n, 3) uint8 sRGB array, entry 0 first.
        clipped: Number of entries clamped into the gamut, for methods
            that track it (CubeHelix); None otherwise.
    """
    method: str
    colors: npt.NDArray[np.uint8]
    clipped: Optional[int] = None

    @property
    def n(self) -> int:
        return int(self.colors.shape[0])

    def to_bytes(self) -> bytes:
        """``3 * n`` bytes, R, G, B per entry."""
        return np.ascontiguousarray(self.colors, dtype=np.uint8).tobytes()

    def to_float(self) -> ArrayFloat:
        """Colors as sRGB floats in [0, 1]."""
        return self.colors.astype(np.float64) / 255.0


# ---------------------------------------------------------------------------
# 2.  Parameter validation
# ---------------------------------------------------------------------------
def _check_count(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ColorMapParameterError(f"n must be an integer, got {type(n).__name__}")
    if n < 2:
        raise ColorMapParameterError(f"n must be at least 2, got {n}")
    return int(n)


def _check_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise ColorMapParameterError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise ColorMapParameterError(f"{name} must be finite, got {value!r}")
    return value


def _check_range(name: str, value: float, lo: float, hi: float) -> float:
    value = _check_finite(name, value)
    if not lo <= value <= hi:
        raise ColorMapParameterError(f"{name} must be in [{lo:g}, {hi:g}], got {value!r}")
    return value


def _check_unit(name: str, value: float) -> float:
    return _check_range(name, value, 0.0, 1.0)


def _to_colors(luv: ArrayFloat, constants: ColorScienceConstants) -> npt.NDArray[np.uint8]:
    srgb = ColorSpaceEngine.luv_to_srgb(luv, illuminant=constants.white)
    return quantize_srgb(srgb)


# ---------------------------------------------------------------------------
# 3.  Sequential
# ---------------------------------------------------------------------------
def default_contrast_for_small_n(n: int) -> float:
    """Contrast that keeps small sequential/diverging maps from looking muddy."""
    return min(0.88, 0.34 + 0.06 * n)


def sequential_luv(
    n: int,
    hue: float,
    contrast: float,
    saturation: float,
    brightness: float,
    warmth: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ArrayFloat:
    """Luv samples of :func:`sequential`, before conversion to sRGB."""
    n = _check_count(n)
    hue = normalize_hue(_check_finite("hue", hue))
    contrast = _check_unit("contrast", contrast)
    saturation = _check_unit("saturation", saturation)
    brightness = _check_unit("brightness", brightness)
    warmth = _check_unit("warmth", warmth)

    profile = LightnessProfile.build(hue, saturation, warmth, constants)
    ts = [(n - 1 - i) / (n - 1.0) for i in range(n)]
    return profile.sample_many(ts, contrast, brightness)


def sequential(
    n: int,
    hue: float,
    contrast: float,
    saturation: float,
    brightness: float,
    warmth: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ColorMap:
    """
    Sequential Brewer-like colormap.

    Entry 0 is the bright end, entry n-1 the dark end.

    Args:
        n: Number of entries, at least 2.
        hue: Hue of the most saturated point, radians.
        contrast: Span of the lightness curve, [0, 1].
        saturation: Colorfulness, [0, 1].
        brightness: Shift of the lightness curve, [0, 1].
        warmth: Pull of the bright end toward yellow, [0, 1].
        constants: White-point constants.
    """
    luv = sequential_luv(n, hue, contrast, saturation, brightness, warmth, constants=constants)
    colors = _to_colors(luv, constants)
    logger.debug("sequential colormap: n=%d hue=%.4f", n, hue)
    return ColorMap("sequential", colors)


# ---------------------------------------------------------------------------
# 4.  Diverging
# ---------------------------------------------------------------------------
def _neutral_center(
    n: int,
    left: LightnessProfile,
    right: LightnessProfile,
    contrast: float,
    brightness: float,
    warmth: float,
    constants: ColorScienceConstants,
) -> LUVColor:
    """Middle entry of an odd-sized diverging map."""
    c0 = left.sample(1.0, contrast, brightness)
    c1 = right.sample(1.0, contrast, brightness)
    if n > _DISCRETE_MAX_N:
        # continuous maps: an extra neutral swatch would read as a seam
        return c0.add(c1).scale(0.5)
    sn = 0.5 * (c0.saturation + c1.saturation) * warmth
    l = 0.5 * (c0.l + c1.l)
    hue = constants.bright_hue
    chroma = lch_chroma(l, min(max_saturation_at(l, hue, constants), sn))
    return LUVColor.from_lch(l, chroma, hue)


def diverging_luv(
    n: int,
    hue: float,
    divergence: float,
    contrast: float,
    saturation: float,
    brightness: float,
    warmth: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ArrayFloat:
    """Luv samples of :func:`diverging`, before conversion to sRGB."""
    n = _check_count(n)
    hue = normalize_hue(_check_finite("hue", hue))
    divergence = _check_finite("divergence", divergence)
    contrast = _check_unit("contrast", contrast)
    saturation = _check_unit("saturation", saturation)
    brightness = _check_unit("brightness", brightness)
    warmth = _check_unit("warmth", warmth)

    left = LightnessProfile.build(hue, saturation, warmth, constants)
    right = LightnessProfile.build(normalize_hue(hue + divergence), saturation, warmth, constants)

    half = n // 2
    center = None
    if n % 2 == 1:
        center = _neutral_center(n, left, right, contrast, brightness, warmth, constants)

    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        if center is not None and i == half:
            c = center
        else:
            t = i / (n - 1.0)
            if i < half:
                c = left.sample(2.0 * t, contrast, brightness)
            else:
                c = right.sample(2.0 * (1.0 - t), contrast, brightness)
        out[i] = (c.l, c.u, c.v)
    return out


def diverging(
    n: int,
    hue: float,
    divergence: float,
    contrast: float,
    saturation: float,
    brightness: float,
    warmth: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ColorMap:
    """
    Diverging Brewer-like colormap.

    The first half runs from the dark end of ``hue`` to the bright center,
    the second half back down to the dark end of ``hue + divergence``.

    Args:
        n: Number of entries, at least 2.
        hue: Hue of the first half, radians.
        divergence: Hue offset of the second half, radians.
        contrast, saturation, brightness, warmth: As for :func:`sequential`.
        constants: White-point constants.
    """
    luv = diverging_luv(n, hue, divergence, contrast, saturation, brightness, warmth,
                        constants=constants)
    colors = _to_colors(luv, constants)
    logger.debug("diverging colormap: n=%d hue=%.4f divergence=%.4f", n, hue, divergence)
    return ColorMap("diverging", colors)


# ---------------------------------------------------------------------------
# 5.  Qualitative
# ---------------------------------------------------------------------------
def qualitative_luv(
    n: int,
    hue: float,
    divergence: float,
    contrast: float,
    saturation: float,
    brightness: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ArrayFloat:
    """Luv samples of :func:`qualitative`, before conversion to sRGB."""
    n = _check_count(n)
    hue = normalize_hue(_check_finite("hue", hue))
    divergence = _check_finite("divergence", divergence)
    contrast = _check_unit("contrast", contrast)
    saturation = _check_unit("saturation", saturation)
    brightness = _check_unit("brightness", brightness)

    eps = hue / TWO_PI
    r = divergence / TWO_PI
    yellow_hue = constants.bright_hue
    l0 = brightness * constants.bright_point.l
    l1 = (1.0 - contrast) * l0
    s_cap = saturation * constants.red_saturation

    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        t = i / (n - 1.0)
        ch = normalize_hue(TWO_PI * (eps + t * r))
        # hues near yellow, the brightest one, lose the least lightness
        alpha = angular_distance(ch, yellow_hue) / math.pi
        cl = (1.0 - alpha) * l0 + alpha * l1
        cs = min(max_saturation_at(cl, ch, constants), s_cap)
        c = LUVColor.from_lch(cl, lch_chroma(cl, cs), ch)
        out[i] = (c.l, c.u, c.v)
    return out


def qualitative(
    n: int,
    hue: float,
    divergence: float,
    contrast: float,
    saturation: float,
    brightness: float,
    *,
    constants: ColorScienceConstants = D65,
) -> ColorMap:
    """
    Qualitative Brewer-like colormap of distinct categorical colors.

    Args:
        n: Number of entries, at least 2.
        hue: Hue of the first color, radians.
        divergence: Hue range covered by the colors, radians.
        contrast: Lightness drop for hues far from yellow, [0, 1].
        saturation: Colorfulness, [0, 1].
        brightness: Lightness of colors at the yellow hue, [0, 1].
        constants: White-point constants.
    """
    luv = qualitative_luv(n, hue, divergence, contrast, saturation, brightness,
                          constants=constants)
    colors = _to_colors(luv, constants)
    logger.debug("qualitative colormap: n=%d hue=%.4f divergence=%.4f", n, hue, divergence)
    return ColorMap("qualitative", colors)


# ---------------------------------------------------------------------------
# 6.  CubeHelix
# ---------------------------------------------------------------------------
def cubehelix(
    n: int,
    hue: float,
    rotations: float,
    saturation: float,
    gamma: float,
) -> ColorMap:
    """
    CubeHelix colormap (Green 2011).

    A helix around the black-white diagonal of the RGB cube. Colors that
    leave the cube are clamped channel-wise; ``ColorMap.clipped`` counts
    them.

    Args:
        n: Number of entries, at least 2.
        hue: Start angle of the helix, radians.
        rotations: Number of turns, may be negative.
        saturation: Helix amplitude, [0, 2].
        gamma: Exponent applied to the gray ramp, > 0.
    """
    n = _check_count(n)
    hue = normalize_hue(_check_finite("hue", hue))
    rotations = _check_finite("rotations", rotations)
    saturation = _check_range("saturation", saturation, 0.0, 2.0)
    gamma = _check_finite("gamma", gamma)
    if gamma <= 0.0:
        raise ColorMapParameterError(f"gamma must be > 0, got {gamma!r}")

    fract = np.arange(n, dtype=np.float64) / (n - 1.0)
    angle = TWO_PI * (hue / 3.0 + 1.0 + rotations * fract)
    fract = fract ** gamma
    amp = saturation * fract * (1.0 - fract) / 2.0

    basis = (np.cos(angle)[:, None] * _CUBEHELIX_COS
             + np.sin(angle)[:, None] * _CUBEHELIX_SIN)
    rgb = fract[:, None] + amp[:, None] * basis

    rgb, clipped = GamutMapping.clip_counted(rgb)
    # truncated, unlike the Luv families
    colors = np.floor(rgb * 255.0).astype(np.uint8)
    logger.debug("cubehelix colormap: n=%d, %d clipped", n, clipped)
    return ColorMap("cubehelix", colors, clipped=clipped)


# ---------------------------------------------------------------------------
# 7.  Method registry
# ---------------------------------------------------------------------------
_DEFAULT_DIVERGENCE: Final[float] = TWO_PI * 2.0 / 3.0


def _sequential_defaults(n: int) -> Dict[str, float]:
    return {
        "hue": 0.0,
        "contrast": default_contrast_for_small_n(n),
        "saturation": 0.6,
        "brightness": 0.75,
        "warmth": 0.15,
    }


def _diverging_defaults(n: int) -> Dict[str, float]:
    defaults = _sequential_defaults(n)
    defaults["divergence"] = _DEFAULT_DIVERGENCE
    return defaults


def _qualitative_defaults(n: int) -> Dict[str, float]:
    return {
        "hue": 0.0,
        "divergence": _DEFAULT_DIVERGENCE,
        "contrast": 0.5,
        "saturation": 0.5,
        "brightness": 1.0,
    }


def _cubehelix_defaults(n: int) -> Dict[str, float]:
    return {
        "hue": 0.5,
        "rotations": -1.5,
        "saturation": 1.2,
        "gamma": 1.0,
    }


@dataclass(slots=True, frozen=True)
class ColorMapMethod:
    """A named colormap method with its parameters and defaults."""
    name: str
    generator: Callable[..., ColorMap]
    parameters: Tuple[str, ...]
    default_factory: Callable[[int], Dict[str, float]]
    reference: str

    def defaults(self, n: int) -> Dict[str, float]:
        """Default parameter values for a map of ``n`` entries."""
        return dict(self.default_factory(_check_count(n)))


METHODS: Final[Dict[str, ColorMapMethod]] = {
    m.name: m for m in (
        ColorMapMethod(
            "sequential", sequential,
            ("hue", "contrast", "saturation", "brightness", "warmth"),
            _sequential_defaults, _BREWER_REFERENCE,
        ),
        ColorMapMethod(
            "diverging", diverging,
            ("hue", "divergence", "contrast", "saturation", "brightness", "warmth"),
            _diverging_defaults, _BREWER_REFERENCE,
        ),
        ColorMapMethod(
            "qualitative", qualitative,
            ("hue", "divergence", "contrast", "saturation", "brightness"),
            _qualitative_defaults, _BREWER_REFERENCE,
        ),
        ColorMapMethod(
            "cubehelix", cubehelix,
            ("hue", "rotations", "saturation", "gamma"),
            _cubehelix_defaults, _CUBEHELIX_REFERENCE,
        ),
    )
}


def generate(method: str, n: int, **params: float) -> ColorMap:
    """
    Generate a colormap by method name.

    Parameters not given are taken from the method's defaults for ``n``.

    Raises:
        ColorMapParameterError: Unknown method or parameter name, or an
            invalid value.
    """
    try:
        entry = METHODS[method]
    except KeyError:
        raise ColorMapParameterError(
            f"Unknown colormap method {method!r}, expected one of {sorted(METHODS)}"
        ) from None

    unknown = sorted(set(params) - set(entry.parameters))
    if unknown:
        raise ColorMapParameterError(
            f"Unknown parameter(s) {unknown} for {method!r}, expected {list(entry.parameters)}"
        )

    values = entry.defaults(n)
    values.update(params)
    return entry.generator(n, **values)
