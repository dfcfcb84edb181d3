"""Numba-optimized kernels for RGBA8 <-> Lab conversion, compositing and blurs.

The scalar math mirrors :mod:`labtint.color.space` exactly; the kernels only
exist so full-resolution passes run data-parallel without Python overhead.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from labtint.color.space import srgb_to_linear
from labtint.constants import LAB_EPSILON, LAB_KAPPA_SLOPE, LAB_OFFSET, WHITE_X, WHITE_Z

logger = logging.getLogger(__name__)

# 8-bit sRGB code value -> linear light
SRGB8_TO_LINEAR_LUT: NDArray[np.float64] = np.asarray(
    srgb_to_linear(np.arange(256, dtype=np.float64) / 255.0), dtype=np.float64
)


# =============================================================================
# Scalar helpers
# =============================================================================


@njit(fastmath=True, cache=True, nogil=True)
def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return LAB_KAPPA_SLOPE * t + LAB_OFFSET


@njit(fastmath=True, cache=True, nogil=True)
def _lab_f_inv(t: float) -> float:
    t3 = t * t * t
    if t3 > LAB_EPSILON:
        return t3
    return (t - LAB_OFFSET) / LAB_KAPPA_SLOPE


@njit(fastmath=True, cache=True, nogil=True)
def _linear_to_srgb_clamped(u: float) -> float:
    if u <= 0.0031308:
        v = 12.92 * u
    else:
        v = 1.055 * u ** (1.0 / 2.4) - 0.055
    return min(1.0, max(0.0, v))


@njit(fastmath=True, cache=True, nogil=True)
def _to_byte(v: float) -> np.uint8:
    q = int(v * 255.0 + 0.5)
    return np.uint8(min(255, max(0, q)))


# =============================================================================
# Conversion kernels
# =============================================================================


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def srgb8_to_lab_numba(
    pixels: NDArray[np.uint8],
    lut: NDArray[np.float64],
    L_out: NDArray[np.float32],
    a_out: NDArray[np.float32],
    b_out: NDArray[np.float32],
) -> None:
    """Convert RGBA8 pixels to Lab planes (alpha ignored).

    :param pixels: Interleaved RGBA8 [N, 4]
    :param lut: 8-bit sRGB to linear lookup table [256]
    :param L_out: Output lightness [N]
    :param a_out: Output a* [N]
    :param b_out: Output b* [N]
    """
    N = pixels.shape[0]
    for i in prange(N):
        r = lut[pixels[i, 0]]
        g = lut[pixels[i, 1]]
        b = lut[pixels[i, 2]]

        x = (0.4124564 * r + 0.3575761 * g + 0.1804375 * b) / WHITE_X
        y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
        z = (0.0193339 * r + 0.1191920 * g + 0.9503041 * b) / WHITE_Z

        fx = _lab_f(x)
        fy = _lab_f(y)
        fz = _lab_f(z)

        L_out[i] = 116.0 * fy - 16.0
        a_out[i] = 500.0 * (fx - fy)
        b_out[i] = 200.0 * (fy - fz)


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def lab_to_srgb8_blend_numba(
    L: NDArray[np.float32],
    a: NDArray[np.float32],
    b: NDArray[np.float32],
    src: NDArray[np.uint8],
    strength: float,
    out: NDArray[np.uint8],
) -> None:
    """Convert Lab planes back to RGBA8, blending with the source.

    Per channel: ``out = orig + (new - orig) * strength``, rounded half up.
    Alpha is copied from ``src`` unchanged.

    :param L: Lightness [N]
    :param a: a* [N]
    :param b: b* [N]
    :param src: Source RGBA8 [N, 4]
    :param strength: Blend factor in [0, 1]
    :param out: Output RGBA8 [N, 4]
    """
    N = src.shape[0]
    for i in prange(N):
        fy = (L[i] + 16.0) / 116.0
        fx = fy + a[i] / 500.0
        fz = fy - b[i] / 200.0

        x = _lab_f_inv(fx) * WHITE_X
        y = _lab_f_inv(fy)
        z = _lab_f_inv(fz) * WHITE_Z

        rn = _linear_to_srgb_clamped(3.2404542 * x - 1.5371385 * y - 0.4985314 * z)
        gn = _linear_to_srgb_clamped(-0.9692660 * x + 1.8760108 * y + 0.0415560 * z)
        bn = _linear_to_srgb_clamped(0.0556434 * x - 0.2040259 * y + 1.0572252 * z)

        r0 = src[i, 0] / 255.0
        g0 = src[i, 1] / 255.0
        b0 = src[i, 2] / 255.0

        out[i, 0] = _to_byte(r0 + (rn - r0) * strength)
        out[i, 1] = _to_byte(g0 + (gn - g0) * strength)
        out[i, 2] = _to_byte(b0 + (bn - b0) * strength)
        out[i, 3] = src[i, 3]


# =============================================================================
# Separable box blur (edge-clamped)
# =============================================================================


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def box_blur_rows_numba(
    src: NDArray[np.float32],
    radius: int,
    out: NDArray[np.float32],
) -> None:
    """Horizontal box blur of a [H, W] plane, sampling clamped at the edges.

    :param src: Input plane [H, W]
    :param radius: Blur radius in pixels
    :param out: Output plane [H, W]
    """
    H, W = src.shape
    count = 2 * radius + 1
    for y in prange(H):
        for x in range(W):
            total = 0.0
            for k in range(-radius, radius + 1):
                xx = min(W - 1, max(0, x + k))
                total += src[y, xx]
            out[y, x] = total / count


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def box_blur_cols_numba(
    src: NDArray[np.float32],
    radius: int,
    out: NDArray[np.float32],
) -> None:
    """Vertical box blur of a [H, W] plane, sampling clamped at the edges.

    :param src: Input plane [H, W]
    :param radius: Blur radius in pixels
    :param out: Output plane [H, W]
    """
    H, W = src.shape
    count = 2 * radius + 1
    for x in prange(W):
        for y in range(H):
            total = 0.0
            for k in range(-radius, radius + 1):
                yy = min(H - 1, max(0, y + k))
                total += src[yy, x]
            out[y, x] = total / count


def warmup_color_kernels() -> None:
    """Warm up Numba JIT compilation for the conversion and blur kernels.

    Called on module import to avoid first-call overhead.
    """
    pixels = np.random.randint(0, 256, size=(64, 4)).astype(np.uint8)
    L = np.empty(64, dtype=np.float32)
    a = np.empty(64, dtype=np.float32)
    b = np.empty(64, dtype=np.float32)
    out = np.empty_like(pixels)

    srgb8_to_lab_numba(pixels, SRGB8_TO_LINEAR_LUT, L, a, b)
    lab_to_srgb8_blend_numba(L, a, b, pixels, 1.0, out)

    plane = L.reshape(8, 8)
    tmp = np.empty_like(plane)
    blur = np.empty_like(plane)
    box_blur_rows_numba(plane, 2, tmp)
    box_blur_cols_numba(tmp, 2, blur)

    logger.debug("Color Numba kernels warmed up")


# Warmup on import
warmup_color_kernels()
