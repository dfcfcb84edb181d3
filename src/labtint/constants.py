"""Numeric constants for the sRGB/D65 working space and the recolor stages."""

from __future__ import annotations

# =============================================================================
# sRGB transfer function
# =============================================================================

SRGB_LINEAR_CUTOFF = 0.04045
LINEAR_SRGB_CUTOFF = 0.0031308
SRGB_GAMMA = 2.4

# =============================================================================
# CIE XYZ / Lab (D65)
# =============================================================================

# Linear sRGB -> XYZ
RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

# XYZ -> linear sRGB
XYZ_TO_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)

# D65 reference white
WHITE_X = 0.95047
WHITE_Y = 1.00000
WHITE_Z = 1.08883

LAB_EPSILON = 0.008856
LAB_KAPPA_SLOPE = 7.787
LAB_OFFSET = 16.0 / 116.0

# =============================================================================
# Dominant color sampling
# =============================================================================

SAMPLE_BUDGET = 50_000
SAMPLE_MIN_ALPHA = 8  # 8-bit alpha below which a pixel is ignored
SAMPLE_PAPER_L = 96.0
SAMPLE_PAPER_CHROMA = 8.0
SAMPLE_GRAY_CHROMA = 5.0

FALLBACK_LIGHTNESS = 50.0
FALLBACK_CHROMA = 20.0
FALLBACK_HUE = 0.0

# =============================================================================
# Remap / protection
# =============================================================================

PROTECT_CHROMA = 12.0
WARM_MAX_DEGREES = 12.0
WARM_RANGE = 50.0
CHROMA_EXPONENT = 0.9
CHROMA_EPSILON = 1e-3
LIFT_GAIN = 0.85
LIFT_ROLLOFF_SPAN = 8.0

# =============================================================================
# Clarity
# =============================================================================

CLARITY_RADIUS = 2
CLARITY_GAIN = 0.9
