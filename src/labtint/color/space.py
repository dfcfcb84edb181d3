"""NumPy-based sRGB <-> linear <-> CIE Lab conversions (D65).

All functions accept Python floats or NumPy arrays of any shape and
broadcast elementwise. Scalar inputs come back as NumPy scalars.
"""

from __future__ import annotations

import logging
import re

import numpy as np

from labtint.constants import (
    LAB_EPSILON,
    LAB_KAPPA_SLOPE,
    LAB_OFFSET,
    LINEAR_SRGB_CUTOFF,
    RGB_TO_XYZ,
    SRGB_GAMMA,
    SRGB_LINEAR_CUTOFF,
    WHITE_X,
    WHITE_Y,
    WHITE_Z,
    XYZ_TO_RGB,
)
from labtint.types import FloatOrArray, LabTriple

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

BLACK_HEX = "#000000"


# =============================================================================
# Transfer functions
# =============================================================================


def srgb_to_linear(u: FloatOrArray) -> FloatOrArray:
    """Decode sRGB gamma.

    :param u: sRGB channel value(s) in [0, 1]
    :returns: Linear-light value(s)
    """
    u = np.asarray(u, dtype=np.float64)
    curve = ((np.maximum(u, 0.0) + 0.055) / 1.055) ** SRGB_GAMMA
    return np.where(u <= SRGB_LINEAR_CUTOFF, u / 12.92, curve)[()]


def linear_to_srgb(u: FloatOrArray) -> FloatOrArray:
    """Encode sRGB gamma (no clamping).

    :param u: Linear-light value(s)
    :returns: sRGB channel value(s)
    """
    u = np.asarray(u, dtype=np.float64)
    curve = 1.055 * np.maximum(u, 0.0) ** (1.0 / SRGB_GAMMA) - 0.055
    return np.where(u <= LINEAR_SRGB_CUTOFF, 12.92 * u, curve)[()]


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > LAB_EPSILON, np.cbrt(t), LAB_KAPPA_SLOPE * t + LAB_OFFSET)


def _lab_f_inv(t: np.ndarray) -> np.ndarray:
    t3 = t * t * t
    return np.where(t3 > LAB_EPSILON, t3, (t - LAB_OFFSET) / LAB_KAPPA_SLOPE)


# =============================================================================
# Lab conversion
# =============================================================================


def rgb_to_lab(r: FloatOrArray, g: FloatOrArray, b: FloatOrArray) -> LabTriple:
    """Convert sRGB [0, 1] to CIE Lab.

    :param r: Red channel value(s) in [0, 1]
    :param g: Green channel value(s) in [0, 1]
    :param b: Blue channel value(s) in [0, 1]
    :returns: Tuple of (L, a, b); L in [0, 100]

    Example:
        >>> L, a, b = rgb_to_lab(1.0, 1.0, 1.0)
        >>> round(float(L), 3)
        100.0
    """
    rl = srgb_to_linear(r)
    gl = srgb_to_linear(g)
    bl = srgb_to_linear(b)

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = RGB_TO_XYZ
    x = (m00 * rl + m01 * gl + m02 * bl) / WHITE_X
    y = (m10 * rl + m11 * gl + m12 * bl) / WHITE_Y
    z = (m20 * rl + m21 * gl + m22 * bl) / WHITE_Z

    fx = _lab_f(np.asarray(x))
    fy = _lab_f(np.asarray(y))
    fz = _lab_f(np.asarray(z))

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b_star = 200.0 * (fy - fz)
    return L[()], a[()], b_star[()]


def lab_to_rgb(L: FloatOrArray, a: FloatOrArray, b: FloatOrArray) -> LabTriple:
    """Convert CIE Lab to sRGB, clamped to [0, 1].

    Exact inverse of :func:`rgb_to_lab` for in-gamut colors.

    :param L: Lightness value(s)
    :param a: Green-red value(s)
    :param b: Blue-yellow value(s)
    :returns: Tuple of (r, g, b) in [0, 1]
    """
    L = np.asarray(L, dtype=np.float64)
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    fy = (L + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0

    x = _lab_f_inv(fx) * WHITE_X
    y = _lab_f_inv(fy) * WHITE_Y
    z = _lab_f_inv(fz) * WHITE_Z

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = XYZ_TO_RGB
    rl = m00 * x + m01 * y + m02 * z
    gl = m10 * x + m11 * y + m12 * z
    bl = m20 * x + m21 * y + m22 * z

    r = np.clip(linear_to_srgb(rl), 0.0, 1.0)
    g = np.clip(linear_to_srgb(gl), 0.0, 1.0)
    b_out = np.clip(linear_to_srgb(bl), 0.0, 1.0)
    return r[()], g[()], b_out[()]


# =============================================================================
# Hex parsing
# =============================================================================


def parse_hex(value: object) -> tuple[int, int, int] | None:
    """Parse a ``#rrggbb`` literal.

    The leading ``#`` is optional, case is ignored and surrounding
    whitespace is stripped. Anything else is malformed.

    :param value: Candidate hex string
    :returns: (r, g, b) bytes, or None if malformed
    """
    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def normalize_hex(value: object) -> str:
    """Canonicalize to lowercase ``#rrggbb``; malformed input becomes black."""
    rgb = parse_hex(value)
    if rgb is None:
        logger.warning("[ColorSpace] Malformed hex color %r, using %s", value, BLACK_HEX)
        return BLACK_HEX
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def hex_to_lab(value: object) -> LabTriple:
    """Convert a ``#rrggbb`` literal to Lab.

    Malformed input resolves to black, i.e. ``(0.0, 0.0, 0.0)``.

    :param value: Hex color string
    :returns: Tuple of (L, a, b) as Python floats
    """
    rgb = parse_hex(value)
    if rgb is None:
        return 0.0, 0.0, 0.0
    L, a, b = rgb_to_lab(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)
    return float(L), float(a), float(b)


# =============================================================================
# Helpers
# =============================================================================


def smoothstep(edge0: float, edge1: float, x: FloatOrArray) -> FloatOrArray:
    """Hermite step: 0 below ``edge0``, 1 above ``edge1``, ``t²(3-2t)`` between."""
    t = np.clip((np.asarray(x, dtype=np.float64) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return (t * t * (3.0 - 2.0 * t))[()]
