"""
Recolor pipeline: RGBA8 raster in, recolored RGBA8 raster out.

The work splits into two phases:

- :func:`analyze_source` depends only on the source image: Lab conversion
  of every pixel and dominant color sampling.
- :func:`render` runs every parameter-dependent stage on a private copy of
  the source Lab planes and composites the result over the source.

:func:`process` chains both and is the pure ``process(image, params) ->
image`` entry point. Nothing is shared between calls, so concurrent calls
on different images are safe.

Example:
    >>> from labtint import RasterBuffer, RecolorParams, process
    >>> image = RasterBuffer.blank(64, 32, (200, 40, 40, 255))
    >>> out = process(image, RecolorParams(target_color="#2266CC", strength=90))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from labtint.color.kernels import (
    SRGB8_TO_LINEAR_LUT,
    lab_to_srgb8_blend_numba,
    srgb8_to_lab_numba,
)
from labtint.color.sampler import DominantStats, sample_dominant
from labtint.color.stages import (
    HueChromaMapping,
    apply_clarity,
    apply_depth,
    apply_finish,
    apply_vibrance,
    column_positions,
    lift_lightness,
    pastel_factor,
    protection_mask,
    remap_hue_chroma,
)
from labtint.config.values import RecolorParams
from labtint.raster import RasterBuffer

logger = logging.getLogger(__name__)


@dataclass
class LabPlane:
    """Per-pixel CIE Lab values as three flat float32 arrays of length W*H."""

    width: int
    height: int
    L: NDArray[np.float32]
    a: NDArray[np.float32]
    b: NDArray[np.float32]

    @classmethod
    def from_raster(cls, image: RasterBuffer) -> LabPlane:
        """Convert every pixel of ``image`` to Lab (alpha ignored)."""
        n = image.pixel_count
        L = np.empty(n, dtype=np.float32)
        a = np.empty(n, dtype=np.float32)
        b = np.empty(n, dtype=np.float32)
        if n > 0:
            srgb8_to_lab_numba(image.flat(), SRGB8_TO_LINEAR_LUT, L, a, b)
        return cls(width=image.width, height=image.height, L=L, a=a, b=b)

    def copy(self) -> LabPlane:
        return LabPlane(
            width=self.width,
            height=self.height,
            L=self.L.copy(),
            a=self.a.copy(),
            b=self.b.copy(),
        )

    def composite(self, source: RasterBuffer, strength: float) -> RasterBuffer:
        """Convert back to sRGB and blend over ``source``.

        :param source: Original raster (provides original RGB and alpha)
        :param strength: Blend factor in [0, 1]; 0 returns the source RGB
        :returns: New RasterBuffer with the source's alpha channel
        """
        if (source.width, source.height) != (self.width, self.height):
            raise ValueError(
                f"Plane is {self.width}x{self.height} but source is "
                f"{source.width}x{source.height}"
            )
        src = source.flat()
        out = np.empty_like(src)
        if src.shape[0] > 0:
            lab_to_srgb8_blend_numba(self.L, self.a, self.b, src, float(strength), out)
        return RasterBuffer(
            width=self.width,
            height=self.height,
            pixels=out.reshape(self.height, self.width, 4),
        )


@dataclass(frozen=True)
class SourceAnalysis:
    """Parameter-independent state derived from a source image.

    Attributes:
        image: The source raster
        plane: Lab values of the source; treated as read-only
        stats: Dominant color of the source
    """

    image: RasterBuffer
    plane: LabPlane
    stats: DominantStats


def analyze_source(image: RasterBuffer) -> SourceAnalysis:
    """Convert ``image`` to Lab and sample its dominant color.

    :param image: Source raster
    :returns: SourceAnalysis reusable across parameter changes
    """
    plane = LabPlane.from_raster(image)
    stats = sample_dominant(image)
    return SourceAnalysis(image=image, plane=plane, stats=stats)


def render(analysis: SourceAnalysis, params: RecolorParams | None = None) -> RasterBuffer:
    """Run every parameter-dependent stage and composite the result.

    Protected pixels (near-white, low chroma) keep their source Lab through
    remap, lift, finish, vibrance and depth. Alpha plays no part here: it
    only filters the dominant color samples and is copied to the output.
    Clarity runs on the whole L* plane, so protected pixels still feed the
    blur and can be nudged by it near edges.

    :param analysis: Result of :func:`analyze_source`
    :param params: Recolor parameters (defaults to ``RecolorParams()``)
    :returns: Recolored raster with the source's dimensions and alpha
    """
    if params is None:
        params = RecolorParams()

    image = analysis.image
    if image.pixel_count == 0 or params.is_identity():
        return image.copy()

    width, height = image.width, image.height
    stats = analysis.stats
    plane = analysis.plane.copy()

    target_lab = params.target_lab
    mapping = HueChromaMapping.from_stats(target_lab, stats, params.warm)
    pastel = pastel_factor(target_lab[0])
    lift = max(0.0, target_lab[0] - stats.lightness)

    frozen = protection_mask(plane.L, plane.a, plane.b, params.white_protect)
    active = np.flatnonzero(~frozen)

    logger.debug(
        "[Recolor] %dx%d active=%d frozen=%d d_hue=%.4f chroma_scale=%.4f lift=%.2f",
        width,
        height,
        active.size,
        frozen.size - active.size,
        mapping.d_hue,
        mapping.chroma_scale,
        lift,
    )

    if active.size > 0:
        L = plane.L[active]
        a, b = remap_hue_chroma(plane.a[active], plane.b[active], mapping)
        L = lift_lightness(L, lift, params.white_protect)

        x = column_positions(width, height)[active] if params.finish == "glossy" else None
        L, a, b = apply_finish(L, a, b, x, params.finish, params.finish_amount, pastel)
        a, b = apply_vibrance(L, a, b, params.vibrance_amount, pastel)
        L = apply_depth(L, params.depth_amount)

        plane.L[active] = L
        plane.a[active] = a
        plane.b[active] = b

    if params.clarity_amount > 0.0:
        sharpened = apply_clarity(plane.L.reshape(height, width), params.clarity_amount)
        plane.L = np.ascontiguousarray(sharpened, dtype=np.float32).reshape(-1)

    return plane.composite(image, params.strength_amount)


def process(image: RasterBuffer, params: RecolorParams | None = None) -> RasterBuffer:
    """Recolor ``image`` toward ``params.target_color``.

    Pure and synchronous: all intermediate buffers are created and released
    within the call.

    :param image: Source raster
    :param params: Recolor parameters (defaults to ``RecolorParams()``)
    :returns: New raster with identical dimensions and alpha channel
    """
    if params is None:
        params = RecolorParams()
    if image.pixel_count == 0 or params.is_identity():
        return image.copy()
    return render(analyze_source(image), params)
