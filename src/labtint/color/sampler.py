"""Dominant color estimation.

Scans a strided subset of the source raster and summarizes the content
color as mean lightness, mean chroma and a circular mean hue. Transparent,
paper-white and near-gray pixels are ignored so they do not dilute the
estimate.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from labtint.color.space import rgb_to_lab
from labtint.constants import (
    FALLBACK_CHROMA,
    FALLBACK_HUE,
    FALLBACK_LIGHTNESS,
    SAMPLE_BUDGET,
    SAMPLE_GRAY_CHROMA,
    SAMPLE_MIN_ALPHA,
    SAMPLE_PAPER_CHROMA,
    SAMPLE_PAPER_L,
)
from labtint.raster import RasterBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DominantStats:
    """Representative color of an image.

    Attributes:
        lightness: Mean L of the counted samples
        chroma: Mean chroma of the counted samples
        hue: Circular mean hue angle in radians
        n_samples: Number of samples that passed the filters
    """

    lightness: float = FALLBACK_LIGHTNESS
    chroma: float = FALLBACK_CHROMA
    hue: float = FALLBACK_HUE
    n_samples: int = 0

    @property
    def is_fallback(self) -> bool:
        """True when no sample qualified and the defaults were used."""
        return self.n_samples == 0


def sample_stride(pixel_count: int, budget: int = SAMPLE_BUDGET) -> int:
    """Stride over the flattened pixel index used by :func:`sample_dominant`.

    :param pixel_count: Number of pixels in the image
    :param budget: Target sample count
    :returns: ``max(1, floor(sqrt(pixel_count / budget)))``
    """
    return max(1, int(math.floor(math.sqrt(pixel_count / budget))))


def sample_dominant(image: RasterBuffer, budget: int = SAMPLE_BUDGET) -> DominantStats:
    """Estimate the dominant lightness, chroma and hue of ``image``.

    Samples pixels ``0, s, 2s, ...`` of the row-major pixel sequence where
    ``s`` is :func:`sample_stride`. A sample is skipped when its alpha is
    below 8, when it is paper-like (``L > 96`` and ``C < 8``), or when it is
    near gray (``C < 5``).

    :param image: Source raster
    :param budget: Target sample count for the stride computation
    :returns: DominantStats; fallback values when nothing qualifies
    """
    if image.pixel_count == 0:
        return DominantStats()

    stride = sample_stride(image.pixel_count, budget)
    samples = image.flat()[::stride]
    samples = samples[samples[:, 3] >= SAMPLE_MIN_ALPHA]
    if samples.shape[0] == 0:
        logger.debug("[Sampler] No opaque samples, using fallback stats")
        return DominantStats()

    rgb = samples[:, :3].astype(np.float64) / 255.0
    L, a, b = rgb_to_lab(rgb[:, 0], rgb[:, 1], rgb[:, 2])
    C = np.hypot(a, b)

    paper = (L > SAMPLE_PAPER_L) & (C < SAMPLE_PAPER_CHROMA)
    keep = ~paper & (C >= SAMPLE_GRAY_CHROMA)
    n = int(np.count_nonzero(keep))
    if n == 0:
        logger.debug("[Sampler] All %d samples are gray or paper, using fallback stats", len(C))
        return DominantStats()

    hue = np.arctan2(b[keep], a[keep])
    stats = DominantStats(
        lightness=float(np.mean(L[keep])),
        chroma=float(np.mean(C[keep])),
        hue=float(math.atan2(np.sum(np.sin(hue)), np.sum(np.cos(hue)))),
        n_samples=n,
    )
    logger.debug(
        "[Sampler] stride=%d samples=%d L=%.2f C=%.2f hue=%.3f",
        stride,
        n,
        stats.lightness,
        stats.chroma,
        stats.hue,
    )
    return stats
