"""
Color module - Lab color math, dominant color sampling and recolor stages.

Example:
    >>> from labtint.color import hex_to_lab, rgb_to_lab, lab_to_rgb
    >>> L, a, b = hex_to_lab("#FF0000")
    >>> r, g, b = lab_to_rgb(L, a, b)
"""

from labtint.color.sampler import DominantStats, sample_dominant, sample_stride
from labtint.color.space import (
    hex_to_lab,
    lab_to_rgb,
    linear_to_srgb,
    normalize_hex,
    parse_hex,
    rgb_to_lab,
    smoothstep,
    srgb_to_linear,
)
from labtint.color.stages import (
    HueChromaMapping,
    apply_clarity,
    apply_depth,
    apply_finish,
    apply_glossy,
    apply_matte,
    apply_vibrance,
    box_blur,
    column_positions,
    lift_lightness,
    pastel_factor,
    protection_mask,
    remap_hue_chroma,
)

__all__ = [
    # Color space
    "srgb_to_linear",
    "linear_to_srgb",
    "rgb_to_lab",
    "lab_to_rgb",
    "hex_to_lab",
    "parse_hex",
    "normalize_hex",
    "smoothstep",
    # Sampling
    "DominantStats",
    "sample_dominant",
    "sample_stride",
    # Stages
    "HueChromaMapping",
    "remap_hue_chroma",
    "protection_mask",
    "lift_lightness",
    "pastel_factor",
    "column_positions",
    "apply_glossy",
    "apply_matte",
    "apply_finish",
    "apply_vibrance",
    "apply_depth",
    "box_blur",
    "apply_clarity",
]
