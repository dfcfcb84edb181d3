"""Recolor stages operating on Lab values.

Each stage is a pure function over NumPy arrays (any shape, broadcast
elementwise) and returns new arrays; inputs are never modified. The
pipeline applies them in this order:

1. Hue/chroma remap toward the target
2. Lightness lift toward the target, rolled off near protected whites
3. Finish (glossy sheen or matte)
4. Vibrance (midtone chroma boost)
5. Depth (S-curve on L*)
6. Clarity (local contrast on the full L* plane)

White protection (:func:`protection_mask`) decides which pixels skip
stages 1-5.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from labtint.color.kernels import box_blur_cols_numba, box_blur_rows_numba
from labtint.color.sampler import DominantStats
from labtint.color.space import smoothstep
from labtint.constants import (
    CHROMA_EPSILON,
    CHROMA_EXPONENT,
    CLARITY_GAIN,
    CLARITY_RADIUS,
    LIFT_GAIN,
    LIFT_ROLLOFF_SPAN,
    PROTECT_CHROMA,
    WARM_MAX_DEGREES,
    WARM_RANGE,
)
from labtint.types import LabTriple

Plane = NDArray[np.floating]


# =============================================================================
# Hue/chroma remap
# =============================================================================


@dataclass(frozen=True)
class HueChromaMapping:
    """Rotation and scale steering the dominant color onto the target.

    Attributes:
        d_hue: Hue rotation in radians (includes the warm/cool bias)
        chroma_scale: Chroma multiplier; 1.0 when either chroma is ~0
    """

    d_hue: float = 0.0
    chroma_scale: float = 1.0

    @classmethod
    def from_stats(
        cls, target_lab: LabTriple, stats: DominantStats, warm: float = 0.0
    ) -> HueChromaMapping:
        """Compute the mapping from the target color and dominant stats.

        :param target_lab: Target color (L, a, b)
        :param stats: Dominant color of the source
        :param warm: Hue bias in -50..50 (maps linearly to +-12 degrees)
        :returns: HueChromaMapping
        """
        _, ta, tb = target_lab
        target_hue = math.atan2(tb, ta)
        target_chroma = math.hypot(ta, tb)

        d_hue = target_hue - stats.hue
        d_hue += (warm / WARM_RANGE) * math.radians(WARM_MAX_DEGREES)

        if target_chroma > CHROMA_EPSILON and stats.chroma > CHROMA_EPSILON:
            chroma_scale = (target_chroma / stats.chroma) ** CHROMA_EXPONENT
        else:
            chroma_scale = 1.0

        return cls(d_hue=d_hue, chroma_scale=chroma_scale)


def remap_hue_chroma(a: Plane, b: Plane, mapping: HueChromaMapping) -> tuple[Plane, Plane]:
    """Rotate each (a, b) vector by ``d_hue`` and scale it by ``chroma_scale``.

    A zero vector stays zero, so neutral grays never acquire color.

    :param a: a* values
    :param b: b* values
    :param mapping: Rotation and scale
    :returns: Tuple of (a, b)
    """
    cos_h = math.cos(mapping.d_hue)
    sin_h = math.sin(mapping.d_hue)

    a_out = a * cos_h - b * sin_h
    b_out = a * sin_h + b * cos_h
    if mapping.chroma_scale != 1.0:
        a_out = a_out * mapping.chroma_scale
        b_out = b_out * mapping.chroma_scale
    return a_out, b_out


# =============================================================================
# White protection and lightness lift
# =============================================================================


def protection_mask(L: Plane, a: Plane, b: Plane, white_protect: float) -> NDArray[np.bool_]:
    """Pixels at or above ``white_protect`` with chroma below 12.

    :param L: Lightness values
    :param a: a* values
    :param b: b* values
    :param white_protect: L* threshold (88-99)
    :returns: Boolean mask, True where the pixel is left untouched
    """
    return (L >= white_protect) & (np.hypot(a, b) < PROTECT_CHROMA)


def lift_lightness(L: Plane, lift: float, white_protect: float) -> Plane:
    """Pull lightness up by ``0.85 * lift``, fading out toward white.

    The pull is scaled by ``1 - smoothstep(white_protect - 8, 100, L)`` so
    it reaches zero smoothly before the protection threshold.

    :param L: Lightness values
    :param lift: ``max(0, target_L - dominant_L)``
    :param white_protect: L* threshold (88-99)
    :returns: Lifted lightness in [0, 100]
    """
    if lift <= 0.0:
        return L.copy()
    rolloff = 1.0 - smoothstep(white_protect - LIFT_ROLLOFF_SPAN, 100.0, L)
    return np.clip(L + LIFT_GAIN * lift * rolloff, 0.0, 100.0)


def pastel_factor(target_l: float) -> float:
    """Target lightness as a [0, 1] weight; lighter targets get more boost."""
    return min(1.0, max(0.0, target_l / 100.0))


# =============================================================================
# Finish
# =============================================================================


def column_positions(width: int, height: int) -> NDArray[np.float32]:
    """Normalized column position of each pixel in row-major order.

    :param width: Image width
    :param height: Image height
    :returns: Array [W*H] with ``column / (W - 1)``; zeros when ``W == 1``
    """
    if width <= 1:
        return np.zeros(width * height, dtype=np.float32)
    row = np.arange(width, dtype=np.float32) / np.float32(width - 1)
    return np.tile(row, height)


def apply_glossy(
    L: Plane, a: Plane, b: Plane, x: Plane, amount: float, pastel: float
) -> tuple[Plane, Plane, Plane]:
    """Specular sheen: brightens highlights and the right-hand side, boosts chroma.

    :param L: Lightness values
    :param a: a* values
    :param b: b* values
    :param x: Normalized column position of each pixel [0, 1]
    :param amount: Finish strength in [0, 1]
    :param pastel: Target lightness weight from :func:`pastel_factor`
    :returns: Tuple of (L, a, b)
    """
    bright = smoothstep(0.60, 0.98, L / 100.0)
    direction = smoothstep(0.58, 1.00, x) ** 1.1
    sheen = np.clip((0.85 * bright + 0.35 * direction) * amount, 0.0, 1.0)

    L_out = np.clip(L + 28.0 * sheen, 0.0, 100.0)

    C = np.hypot(a, b)
    hue = np.arctan2(b, a)
    C_out = C * (1.0 + 0.55 * sheen) * (1.0 + 0.50 * sheen * pastel) + 6.0 * sheen
    return L_out, C_out * np.cos(hue), C_out * np.sin(hue)


def apply_matte(L: Plane, a: Plane, b: Plane, amount: float) -> tuple[Plane, Plane, Plane]:
    """Lift shadows, roll off highlights above 0.75 and damp chroma.

    :param L: Lightness values
    :param a: a* values
    :param b: b* values
    :param amount: Finish strength in [0, 1]
    :returns: Tuple of (L, a, b)
    """
    Ln = L / 100.0
    lifted = Ln + 0.18 * amount * (1.0 - Ln)
    rolled = lifted - 0.14 * amount * np.maximum(0.0, lifted - 0.75)
    damp = 1.0 - 0.35 * amount
    return np.clip(rolled * 100.0, 0.0, 100.0), a * damp, b * damp


def apply_finish(
    L: Plane,
    a: Plane,
    b: Plane,
    x: Plane | None,
    finish: str,
    amount: float,
    pastel: float,
) -> tuple[Plane, Plane, Plane]:
    """Dispatch to the glossy or matte finish; no-op for ``none`` or zero amount.

    ``x`` (column positions) is only read by the glossy finish; None is
    treated as column 0 for every pixel.
    """
    if amount <= 0.0 or finish == "none":
        return L, a, b
    if finish == "glossy":
        if x is None:
            x = np.zeros_like(L)
        return apply_glossy(L, a, b, x, amount, pastel)
    if finish == "matte":
        return apply_matte(L, a, b, amount)
    raise ValueError(f"Unknown finish '{finish}'. Valid: none, glossy, matte")


# =============================================================================
# Vibrance / depth
# =============================================================================


def apply_vibrance(
    L: Plane, a: Plane, b: Plane, amount: float, pastel: float
) -> tuple[Plane, Plane]:
    """Boost chroma in a midtone window, hue preserved.

    ``mid = smoothstep(0.12, 0.88, Ln) * (1 - smoothstep(0.65, 0.97, Ln))``
    is zero in deep shadows and bright highlights.

    :returns: Tuple of (a, b)
    """
    if amount <= 0.0:
        return a, b
    Ln = L / 100.0
    mid = smoothstep(0.12, 0.88, Ln) * (1.0 - smoothstep(0.65, 0.97, Ln))
    mult = 1.0 + amount * (0.7 + 0.6 * pastel) * mid
    return a * mult, b * mult


def apply_depth(L: Plane, amount: float) -> Plane:
    """S-curve on L*: L=50 is fixed, shadows darken, highlights brighten."""
    if amount <= 0.0:
        return L
    Ln = L / 100.0
    t = Ln - 0.5
    return np.clip((Ln + amount * (t - t * t * t)) * 100.0, 0.0, 100.0)


# =============================================================================
# Clarity
# =============================================================================


def box_blur(plane: Plane, radius: int = CLARITY_RADIUS) -> NDArray[np.float32]:
    """Separable box blur with edge-clamped sampling.

    Horizontal pass first, then a vertical pass over its result. Cost is
    O(W*H*radius) per axis.

    :param plane: Input plane [H, W]
    :param radius: Blur radius in pixels
    :returns: Blurred plane [H, W] (float32)
    """
    src = np.ascontiguousarray(plane, dtype=np.float32)
    if src.size == 0:
        return src.copy()
    tmp = np.empty_like(src)
    out = np.empty_like(src)
    box_blur_rows_numba(src, radius, tmp)
    box_blur_cols_numba(tmp, radius, out)
    return out


def apply_clarity(plane: Plane, amount: float, radius: int = CLARITY_RADIUS) -> Plane:
    """Unsharp-mask local contrast on a full [H, W] L* plane.

    ``L + 0.9 * amount * (L - blur(L))``, clamped to [0, 100].
    """
    if amount <= 0.0:
        return plane
    high_pass = plane - box_blur(plane, radius)
    return np.clip(plane + CLARITY_GAIN * amount * high_pass, 0.0, 100.0)
