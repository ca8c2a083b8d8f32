# -*- coding: utf-8 -*-
"""
Tinct: Perceptual colormaps for scientific visualization
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Space Engine
==================
Conversion layer for the colormap generators. Every colormap is designed
in CIELUV / LCh(uv) and delivered as gamma-encoded sRGB, so this module
covers exactly that chain:

    sRGB <-> linear RGB <-> XYZ <-> Luv <-> LCh(uv)

Conventions:
    - D65 white everywhere unless another white point is passed in.
    - Linear RGB and sRGB values are in [0, 1].
    - XYZ is unnormalized, Y of the white point is 100.
    - Luv lightness is in [0, 100].
    - Hue angles are radians in [0, 2*pi).

Batch transforms are static methods on :class:`ColorSpaceEngine`. Each has
a shape-safe public wrapper (``@handle_shapes``: accepts (3,) or (N, 3))
and an internal ``_raw`` fast path that assumes validated (N, 3) float64
input. Transfer functions run in Numba kernels; ``set_strict_ieee`` swaps
them for ``fastmath=False`` variants.

Single colors inside the profile builder are handled as :class:`LUVColor`
values, and the white-point dependent constants used by the gamut solver
and the generators live in an immutable :class:`ColorScienceConstants`.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
"""

import functools
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Final, Sequence, Tuple, TypeAlias, Union

import numpy as np
import numpy.typing as npt
from numba import njit

logger = logging.getLogger(__name__)

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "TWO_PI",
    "XYZ_SCALE",
    "REF_WHITE_D65",
    "LUV_EPSILON",
    "LUV_KAPPA",
    "SATURATION_EPSILON",
    "M_LINEAR_TO_XYZ_T",
    "M_XYZ_TO_LINEAR_T",
    "D65",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Decorators ---
    "handle_shapes",

    # --- Scalar helpers ---
    "normalize_hue",
    "lch_saturation",
    "lch_chroma",
    "quantize_srgb",

    # --- Classes ---
    "LUVColor",
    "ColorSpaceEngine",
    "GamutMapping",
    "ColorScienceConstants",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]

# --- Constants & Pre-Transposed Matrices ---

TWO_PI: Final[float] = 2.0 * math.pi

# XYZ is kept in the classic 0..100 range.
XYZ_SCALE: Final[float] = 100.0

# Standard Illuminant D65 (Y=100)
REF_WHITE_D65: Final[ArrayFloat] = np.array([95.047, 100.000, 108.883], dtype=np.float64)

# Linear sRGB -> XYZ, the 4-digit coefficients of IEC 61966-2-1.
# The gamut solver derives its sector equations from these entries, so the
# reverse matrix is the numerical inverse rather than the separately
# rounded published one. Round trips are then exact to float precision.
_M_LINEAR_TO_XYZ_BASE = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505]
], dtype=np.float64)
M_LINEAR_TO_XYZ_T: Final[ArrayFloat] = (_M_LINEAR_TO_XYZ_BASE * XYZ_SCALE).T.copy()
M_XYZ_TO_LINEAR_T: Final[ArrayFloat] = np.linalg.inv(_M_LINEAR_TO_XYZ_BASE * XYZ_SCALE).T.copy()

# --- Exact Rational Math Constants ---
# CIE 1976: below (6/29)^3 the lightness function is the linear segment
# L = kappa * Y/Yn. The two branches meet at L = 8.
_LUV_DELTA: Final[float] = 6.0 / 29.0
LUV_EPSILON: Final[float] = _LUV_DELTA * _LUV_DELTA * _LUV_DELTA  # ~0.008856
LUV_KAPPA: Final[float] = (29.0 * 29.0 * 29.0) / (3.0 * 3.0 * 3.0)  # ~903.296
_LUV_L_KNEE: Final[float] = 8.0

# Lower bound for the lightness in chroma / lightness.
SATURATION_EPSILON: Final[float] = 1e-8


# --- Runtime Configuration ---
# When True, the transfer-function kernels use fastmath=False variants
# that preserve strict IEEE 754 semantics.
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    Affects the sRGB gamma curve and the Luv lightness function, which are
    the only transcendental steps in the conversion chain.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)
    logger.debug("strict IEEE kernels %s", "on" if _STRICT_IEEE else "off")


# =============================================================================
# 1. DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to contiguous float64 (N, 3).

    1D inputs (single colors) are treated as a batch of one internally.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr), dtype=np.float64)

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected shape (3,) or (N, 3), got {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. LOW-LEVEL MATH KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=True)
def _fast_gamma_srgb(linear: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB OETF (Gamma Correction).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()

    for i in range(linear.size):
        v = linear_flat[i]
        if v <= 0.0031308:
            out_flat[i] = 12.92 * v
        else:
            out_flat[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out

@njit(cache=True, fastmath=True)
def _fast_inverse_gamma_srgb(srgb: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB EOTF (Inverse Gamma).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()

    for i in range(srgb.size):
        v = srgb_flat[i]
        if v <= 0.04045:
            out_flat[i] = v / 12.92
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
    return out

@njit(cache=True, fastmath=True)
def _fast_luv_lightness(y_ratio: ArrayFloat) -> ArrayFloat:
    """
    CIE 1976 lightness L* from the relative luminance Y/Yn.

    Near black the cube root is replaced by the linear segment so that the
    derivative stays finite.
    """
    out = np.empty_like(y_ratio)
    y_flat = y_ratio.ravel()
    out_flat = out.ravel()

    for i in range(y_ratio.size):
        v = y_flat[i]
        if v <= LUV_EPSILON:
            out_flat[i] = LUV_KAPPA * v
        else:
            out_flat[i] = 116.0 * (v ** (1.0 / 3.0)) - 16.0
    return out

@njit(cache=True, fastmath=True)
def _fast_luv_lightness_inv(lightness: ArrayFloat) -> ArrayFloat:
    """Relative luminance Y/Yn from L*; inverse of ``_fast_luv_lightness``."""
    out = np.empty_like(lightness)
    l_flat = lightness.ravel()
    out_flat = out.ravel()

    for i in range(lightness.size):
        v = l_flat[i]
        if v <= _LUV_L_KNEE:
            out_flat[i] = v / LUV_KAPPA
        else:
            t = (v + 16.0) / 116.0
            out_flat[i] = t * t * t
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False)
def _fast_gamma_srgb_strict(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF (strict IEEE 754)."""
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = linear_flat[i]
        if v <= 0.0031308:
            out_flat[i] = 12.92 * v
        else:
            out_flat[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out

@njit(cache=True, fastmath=False)
def _fast_inverse_gamma_srgb_strict(srgb: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF (strict IEEE 754)."""
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()
    for i in range(srgb.size):
        v = srgb_flat[i]
        if v <= 0.04045:
            out_flat[i] = v / 12.92
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
    return out

@njit(cache=True, fastmath=False)
def _fast_luv_lightness_strict(y_ratio: ArrayFloat) -> ArrayFloat:
    """Luv L*(Y/Yn) (strict IEEE 754)."""
    out = np.empty_like(y_ratio)
    y_flat = y_ratio.ravel()
    out_flat = out.ravel()
    for i in range(y_ratio.size):
        v = y_flat[i]
        if v <= LUV_EPSILON:
            out_flat[i] = LUV_KAPPA * v
        else:
            out_flat[i] = 116.0 * (v ** (1.0 / 3.0)) - 16.0
    return out

@njit(cache=True, fastmath=False)
def _fast_luv_lightness_inv_strict(lightness: ArrayFloat) -> ArrayFloat:
    """Luv Y/Yn(L*) (strict IEEE 754)."""
    out = np.empty_like(lightness)
    l_flat = lightness.ravel()
    out_flat = out.ravel()
    for i in range(lightness.size):
        v = l_flat[i]
        if v <= _LUV_L_KNEE:
            out_flat[i] = v / LUV_KAPPA
        else:
            t = (v + 16.0) / 116.0
            out_flat[i] = t * t * t
    return out


# --- Kernel dispatchers ---

def _gamma_srgb(linear: ArrayFloat) -> ArrayFloat:
    """Dispatch sRGB OETF to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_gamma_srgb_strict(linear)
    return _fast_gamma_srgb(linear)

def _inverse_gamma_srgb(srgb: ArrayFloat) -> ArrayFloat:
    """Dispatch sRGB EOTF to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_inverse_gamma_srgb_strict(srgb)
    return _fast_inverse_gamma_srgb(srgb)

def _luv_lightness(y_ratio: ArrayFloat) -> ArrayFloat:
    """Dispatch Luv lightness to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_luv_lightness_strict(y_ratio)
    return _fast_luv_lightness(y_ratio)

def _luv_lightness_inv(lightness: ArrayFloat) -> ArrayFloat:
    """Dispatch inverse Luv lightness to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_luv_lightness_inv_strict(lightness)
    return _fast_luv_lightness_inv(lightness)

@njit(cache=True, fastmath=True)
def _xyz_to_uv_prime(xyz_arr: ArrayFloat) -> ArrayFloat:
    """
    Calculates CIE 1976 u', v' chromaticity coordinates from XYZ.

    Formulas:
        u' = 4X / (X + 15Y + 3Z)
        v' = 9Y / (X + 15Y + 3Z)

    The denominator only vanishes for black, which maps to (0, 0).
    """
    out = np.zeros((xyz_arr.shape[0], 2), dtype=np.float64)
    X = xyz_arr[:, 0]
    Y = xyz_arr[:, 1]
    Z = xyz_arr[:, 2]

    denom = X + 15.0 * Y + 3.0 * Z

    for i in range(denom.shape[0]):
        d = denom[i]
        if d > 1e-12:
            inv_d = 1.0 / d
            out[i, 0] = 4.0 * X[i] * inv_d
            out[i, 1] = 9.0 * Y[i] * inv_d
    return out

@njit(cache=True, fastmath=True)
def _luv_to_lch_kernel(luv: ArrayFloat) -> ArrayFloat:
    """
    Low-level kernel for Luv -> LCh(uv), hue in radians [0, 2*pi).
    Input shape (N, 3), Output shape (N, 3).
    """
    n = luv.shape[0]
    lch = np.empty_like(luv)

    for i in range(n):
        L, u, v = luv[i, 0], luv[i, 1], luv[i, 2]
        h = np.arctan2(v, u)
        if h < 0.0:
            h += TWO_PI
        if h >= TWO_PI:
            h -= TWO_PI
        lch[i, 0] = L
        lch[i, 1] = np.hypot(u, v)
        lch[i, 2] = h
    return lch

@njit(cache=True, fastmath=True)
def _lch_to_luv_kernel(lch: ArrayFloat) -> ArrayFloat:
    """
    Low-level kernel for LCh(uv) -> Luv, hue in radians.
    Input shape (N, 3), Output shape (N, 3).
    """
    n = lch.shape[0]
    luv = np.empty_like(lch)

    for i in range(n):
        L, C, h = lch[i, 0], lch[i, 1], lch[i, 2]
        luv[i, 0] = L
        luv[i, 1] = C * np.cos(h)
        luv[i, 2] = C * np.sin(h)
    return luv


def _white_uv_prime(white: ArrayFloat) -> Tuple[float, float]:
    """u', v' of a white point given as XYZ triple."""
    uv = _xyz_to_uv_prime(np.ascontiguousarray(np.atleast_2d(white), dtype=np.float64))
    return float(uv[0, 0]), float(uv[0, 1])


# =============================================================================
# 3. SCALAR HELPERS & LUV VALUE TYPE
# =============================================================================

def normalize_hue(h: float) -> float:
    """Normalize a hue angle (radians) into [0, 2*pi)."""
    h = float(h) % TWO_PI
    # float modulo can round up to the divisor itself
    if h >= TWO_PI:
        return 0.0
    return h

def lch_saturation(l: float, c: float) -> float:
    """Saturation s = C / L, guarded against blow-up near black."""
    return c / max(l, SATURATION_EPSILON)

def lch_chroma(l: float, s: float) -> float:
    """Chroma for a given lightness and saturation."""
    return s * l

def quantize_srgb(srgb: ArrayFloat) -> npt.NDArray[np.uint8]:
    """Quantize sRGB values in [0, 1] to bytes, rounding half away from zero."""
    clipped = np.clip(np.asarray(srgb, dtype=np.float64), 0.0, 1.0)
    return np.floor(clipped * 255.0 + 0.5).astype(np.uint8)


@dataclass(slots=True, frozen=True)
class LUVColor:
    """
    A single CIELUV color.

    Arithmetic is plain linear combination through the named operations
    ``add`` and ``scale``. Blending two Luv colors may pass through
    non-physical colors; the Bezier control points rely on exactly that.
    """
    l: float
    u: float
    v: float

    def add(self, other: "LUVColor") -> "LUVColor":
        return LUVColor(self.l + other.l, self.u + other.u, self.v + other.v)

    def scale(self, k: float) -> "LUVColor":
        return LUVColor(k * self.l, k * self.u, k * self.v)

    def lerp(self, other: "LUVColor", alpha: float) -> "LUVColor":
        """``(1 - alpha) * self + alpha * other``."""
        return self.scale(1.0 - alpha).add(other.scale(alpha))

    @property
    def chroma(self) -> float:
        return math.hypot(self.u, self.v)

    @property
    def hue(self) -> float:
        return normalize_hue(math.atan2(self.v, self.u))

    @property
    def saturation(self) -> float:
        return lch_saturation(self.l, self.chroma)

    def to_array(self) -> ArrayFloat:
        return np.array([self.l, self.u, self.v], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Union[ArrayFloat, Sequence[float]]) -> "LUVColor":
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def from_lch(cls, l: float, c: float, h: float) -> "LUVColor":
        return cls(l, c * math.cos(h), c * math.sin(h))


# =============================================================================
# 4. COLOR SPACE ENGINE
# =============================================================================

class ColorSpaceEngine:
    """Static utility class for the sRGB / XYZ / Luv / LCh transforms."""

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, 3) float64)
    # =====================================================================

    @staticmethod
    def _srgb_to_linear_raw(srgb_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """Raw sRGB → linear RGB."""
        if clip:
            srgb_array = np.clip(srgb_array, 0.0, 1.0)
        return _inverse_gamma_srgb(srgb_array)

    @staticmethod
    def _linear_to_srgb_raw(linear_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """Raw linear RGB → sRGB."""
        if clip:
            linear_array = np.clip(linear_array, 0.0, 1.0)
        return _gamma_srgb(linear_array)

    @staticmethod
    def _linear_to_xyz_raw(linear_array: ArrayFloat) -> ArrayFloat:
        """Raw linear RGB → XYZ (Y in 0..100)."""
        return np.dot(linear_array, M_LINEAR_TO_XYZ_T)

    @staticmethod
    def _xyz_to_linear_raw(xyz_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """Raw XYZ → linear RGB, clamped to the sRGB cube unless ``clip=False``."""
        linear = np.dot(xyz_array, M_XYZ_TO_LINEAR_T)
        if clip:
            linear = np.clip(linear, 0.0, 1.0)
        return linear

    @staticmethod
    def _xyz_to_luv_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Raw XYZ → Luv."""
        white = np.asarray(illuminant, dtype=np.float64)
        u_n, v_n = _white_uv_prime(white)
        uv_prime = _xyz_to_uv_prime(xyz_array)

        L = _luv_lightness(np.ascontiguousarray(xyz_array[:, 1] / white[1]))

        out = np.empty_like(xyz_array)
        out[:, 0] = L
        out[:, 1] = 13.0 * L * (uv_prime[:, 0] - u_n)
        out[:, 2] = 13.0 * L * (uv_prime[:, 1] - v_n)
        return out

    @staticmethod
    def _luv_to_xyz_raw(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Raw Luv → XYZ. Zero lightness maps to black."""
        white = np.asarray(illuminant, dtype=np.float64)
        u_n, v_n = _white_uv_prime(white)
        L, u, v = luv_array[:, 0], luv_array[:, 1], luv_array[:, 2]

        mask = L > 1e-12
        u_prime = np.full_like(L, u_n)
        v_prime = np.full_like(L, v_n)

        if np.any(mask):
            inv_13L = 1.0 / (13.0 * L[mask])
            u_prime[mask] = (u[mask] * inv_13L) + u_n
            v_prime[mask] = (v[mask] * inv_13L) + v_n

        Y = _luv_lightness_inv(np.ascontiguousarray(L)) * white[1]

        X = np.zeros_like(Y)
        Z = np.zeros_like(Y)

        mask_v = (v_prime > 1e-12) & mask
        if np.any(mask_v):
            Y_valid = Y[mask_v]
            up, vp = u_prime[mask_v], v_prime[mask_v]
            inv_4vp = 1.0 / (4.0 * vp)
            X[mask_v] = Y_valid * 9.0 * up * inv_4vp
            Z[mask_v] = Y_valid * (12.0 - 3.0 * up - 20.0 * vp) * inv_4vp

        out = np.empty_like(luv_array)
        out[:, 0] = X
        out[:, 1] = np.where(mask, Y, 0.0)
        out[:, 2] = Z
        return out

    @staticmethod
    def _luv_to_lch_raw(luv_array: ArrayFloat) -> ArrayFloat:
        """Raw Luv → LCh(uv)."""
        return _luv_to_lch_kernel(luv_array)

    @staticmethod
    def _lch_to_luv_raw(lch_array: ArrayFloat) -> ArrayFloat:
        """Raw LCh(uv) → Luv."""
        return _lch_to_luv_kernel(lch_array)

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def srgb_to_linear(srgb_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """
        Decodes gamma-encoded sRGB [0..1] to linear RGB [0..1].

        Args:
            srgb_array: Input sRGB data, shape (N, 3) or (3,).
            clip: If True (default), clamps input to [0, 1] first.
        """
        return ColorSpaceEngine._srgb_to_linear_raw(srgb_array, clip)

    @staticmethod
    @handle_shapes
    def linear_to_srgb(linear_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """
        Encodes linear RGB [0..1] to gamma-encoded sRGB [0..1].

        Args:
            linear_array: Input linear RGB, shape (N, 3) or (3,).
            clip: If True (default), clamps input to [0, 1] first.
        """
        return ColorSpaceEngine._linear_to_srgb_raw(linear_array, clip)

    @staticmethod
    @handle_shapes
    def linear_to_xyz(linear_array: ArrayFloat) -> ArrayFloat:
        """Converts linear RGB [0..1] to XYZ (D65, Y in 0..100)."""
        return ColorSpaceEngine._linear_to_xyz_raw(linear_array)

    @staticmethod
    @handle_shapes
    def xyz_to_linear(xyz_array: ArrayFloat, clip: bool = True) -> ArrayFloat:
        """
        Converts XYZ (Y in 0..100) to linear RGB.

        Colors outside the sRGB cube are clamped channel-wise, never
        wrapped. Pass ``clip=False`` to inspect the raw values, e.g. to
        count out-of-gamut colors with :meth:`GamutMapping.clip_counted`.
        """
        return ColorSpaceEngine._xyz_to_linear_raw(xyz_array, clip)

    @staticmethod
    @handle_shapes
    def xyz_to_luv(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to CIE 1976 L*u*v*.

        Args:
            xyz_array: Input XYZ (Y in 0..100).
            illuminant: Reference white XYZ (Y = 100).

        Returns:
            Luv array with L in [0, 100].
        """
        return ColorSpaceEngine._xyz_to_luv_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def luv_to_xyz(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Converts CIE 1976 L*u*v* back to XYZ (Y in 0..100)."""
        return ColorSpaceEngine._luv_to_xyz_raw(luv_array, illuminant)

    @staticmethod
    @handle_shapes
    def luv_to_lch(luv_array: ArrayFloat) -> ArrayFloat:
        """Converts Luv to cylindrical LCh(uv). Hue in radians [0, 2*pi)."""
        return ColorSpaceEngine._luv_to_lch_raw(luv_array)

    @staticmethod
    @handle_shapes
    def lch_to_luv(lch_array: ArrayFloat) -> ArrayFloat:
        """Converts LCh(uv) (hue in radians) to Luv."""
        return ColorSpaceEngine._lch_to_luv_raw(lch_array)

    # =====================================================================
    #  Convenience Pipelines
    # =====================================================================

    @staticmethod
    @handle_shapes
    def linear_to_luv(linear_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        xyz = ColorSpaceEngine._linear_to_xyz_raw(linear_array)
        return ColorSpaceEngine._xyz_to_luv_raw(xyz, illuminant)

    @staticmethod
    @handle_shapes
    def luv_to_linear(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65,
                      clip: bool = True) -> ArrayFloat:
        xyz = ColorSpaceEngine._luv_to_xyz_raw(luv_array, illuminant)
        return ColorSpaceEngine._xyz_to_linear_raw(xyz, clip)

    @staticmethod
    @handle_shapes
    def srgb_to_luv(srgb_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        linear = ColorSpaceEngine._srgb_to_linear_raw(srgb_array)
        xyz = ColorSpaceEngine._linear_to_xyz_raw(linear)
        return ColorSpaceEngine._xyz_to_luv_raw(xyz, illuminant)

    @staticmethod
    @handle_shapes
    def luv_to_srgb(luv_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        xyz = ColorSpaceEngine._luv_to_xyz_raw(luv_array, illuminant)
        linear = ColorSpaceEngine._xyz_to_linear_raw(xyz)
        return ColorSpaceEngine._linear_to_srgb_raw(linear, clip=False)

    @staticmethod
    @handle_shapes
    def srgb_to_lch(srgb_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        luv = ColorSpaceEngine.srgb_to_luv(srgb_array, illuminant)
        return ColorSpaceEngine._luv_to_lch_raw(luv)

    @staticmethod
    @handle_shapes
    def lch_to_srgb(lch_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        luv = ColorSpaceEngine._lch_to_luv_raw(lch_array)
        return ColorSpaceEngine.luv_to_srgb(luv, illuminant)


# =============================================================================
# 5. GAMUT CLIPPING
# =============================================================================

class GamutMapping:
    @staticmethod
    @handle_shapes
    def clip_absolute(rgb: ArrayFloat) -> ArrayFloat:
        """Hard clip to [0, 1]."""
        return np.clip(rgb, 0.0, 1.0)

    @staticmethod
    def clip_counted(rgb: ArrayFloat) -> Tuple[ArrayFloat, int]:
        """
        Hard clip to [0, 1] and report how many colors needed it.

        A color counts once no matter how many of its channels were
        clamped.

        Returns:
            (clipped (N, 3) array, number of clipped rows)
        """
        arr = np.ascontiguousarray(np.atleast_2d(rgb), dtype=np.float64)
        if arr.shape[-1] != 3:
            raise ValueError(f"Expected last dimension size 3, got {arr.shape[-1]}")
        outside = np.any((arr < 0.0) | (arr > 1.0), axis=-1)
        return np.clip(arr, 0.0, 1.0), int(np.count_nonzero(outside))


# =============================================================================
# 6. COLOR SCIENCE CONSTANTS
# =============================================================================

# sRGB cube corners in hue order: red, yellow, green, cyan, blue, magenta.
_CORNERS_LINEAR: Final[ArrayFloat] = np.array([
    [1.0, 0.0, 0.0],
    [1.0, 1.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 1.0, 1.0],
    [0.0, 0.0, 1.0],
    [1.0, 0.0, 1.0],
], dtype=np.float64)

_YELLOW_LINEAR: Final[ArrayFloat] = np.array([1.0, 1.0, 0.0], dtype=np.float64)
_RED_LINEAR: Final[ArrayFloat] = np.array([1.0, 0.0, 0.0], dtype=np.float64)


def _to_hashable(obj: Union[ArrayFloat, Sequence[float]]) -> Tuple[float, ...]:
    """Helper to ensure inputs are hashable tuples for caching."""
    return tuple(float(x) for x in np.asarray(obj, dtype=np.float64).ravel())


@dataclass(slots=True, frozen=True)
class ColorScienceConstants:
    """
    White-point dependent constants shared by the gamut solver and the
    colormap generators.

    Attributes:
        white: Reference white XYZ (Y = 100).
        u_prime_n, v_prime_n: CIE 1976 chromaticity of the white.
        corner_hues: LCh(uv) hues of red, yellow, green, cyan, blue and
            magenta, ascending. They bound the six gamut sectors.
        bright_point: Pure yellow in Luv, the warm extreme.
        bright_hue: Hue of the bright point.
        bright_saturation: Saturation of the bright point.
        red_saturation: Saturation of pure red, the most saturated corner.
    """
    white: Tuple[float, float, float]
    u_prime_n: float
    v_prime_n: float
    corner_hues: Tuple[float, float, float, float, float, float]
    bright_point: LUVColor
    bright_hue: float
    bright_saturation: float
    red_saturation: float

    @property
    def white_array(self) -> ArrayFloat:
        return np.array(self.white, dtype=np.float64)

    @classmethod
    def from_white_point(cls, white: Union[ArrayFloat, Sequence[float]]) -> "ColorScienceConstants":
        """
        Build (or fetch from cache) the constants for a white point.

        Raises:
            ValueError: If the white point is not an XYZ triple or the
                corner hues it produces are not in ascending order.
        """
        key = _to_hashable(white)
        if len(key) != 3:
            raise ValueError(f"White point must be an XYZ triple, got {len(key)} values")
        return _constants_for_white(key)


@functools.lru_cache(maxsize=8)
def _constants_for_white(white_tuple: Tuple[float, ...]) -> ColorScienceConstants:
    """Cached worker for :meth:`ColorScienceConstants.from_white_point`."""
    white = np.array(white_tuple, dtype=np.float64)
    u_n, v_n = _white_uv_prime(white)

    corner_lch = ColorSpaceEngine.luv_to_lch(
        ColorSpaceEngine.linear_to_luv(_CORNERS_LINEAR, illuminant=white)
    )
    corner_hues = tuple(float(h) for h in corner_lch[:, 2])
    if any(b <= a for a, b in zip(corner_hues, corner_hues[1:])):
        raise ValueError(
            f"White point {white_tuple} gives non-ascending corner hues {corner_hues}"
        )

    bright = LUVColor.from_array(ColorSpaceEngine.linear_to_luv(_YELLOW_LINEAR, illuminant=white))
    red = LUVColor.from_array(ColorSpaceEngine.linear_to_luv(_RED_LINEAR, illuminant=white))
    logger.debug("white point %s: bright hue %.6f, corner hues %s",
                 white_tuple, bright.hue, [round(h, 6) for h in corner_hues])

    return ColorScienceConstants(
        white=(white_tuple[0], white_tuple[1], white_tuple[2]),
        u_prime_n=u_n,
        v_prime_n=v_n,
        corner_hues=corner_hues,
        bright_point=bright,
        bright_hue=bright.hue,
        bright_saturation=bright.saturation,
        red_saturation=red.saturation,
    )


# Built at import so that concurrent callers never race on initialization.
D65: Final[ColorScienceConstants] = ColorScienceConstants.from_white_point(REF_WHITE_D65)
