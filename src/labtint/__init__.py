"""
labtint - Lab-space image recoloring

CPU-optimized recolor engine that steers an image's dominant color toward a
target color while keeping tonal structure and paper-white regions intact.

Features:
- sRGB/D65 <-> CIE Lab conversion (NumPy, with Numba kernels for full frames)
- Strided dominant color sampling with circular hue averaging
- Hue rotation + chroma scaling toward the target, warm/cool bias
- White protection for near-gray highlights
- Finishes: glossy sheen or matte, plus vibrance, depth (S-curve) and
  clarity (unsharp mask on L*)
- Strength blend against the original, alpha passed through unchanged
- Pillow codec and a caching session for interactive editors

Example - One-shot:
    >>> from labtint import RecolorParams, load_image, process, save_image
    >>>
    >>> image = load_image("brush.png")
    >>> out = process(image, RecolorParams(target_color="#2E86DE", finish="glossy"))
    >>> save_image(out, "brush_blue.png")

Example - Interactive session:
    >>> from labtint import RecolorSession, get_preset
    >>>
    >>> session = RecolorSession(image)
    >>> preview = session.update(get_preset("matte", target_color="#8E44AD"))
    >>> preview = session.update(get_preset("matte", target_color="#27AE60"))
"""

__version__ = "0.1.0"

# Codec
from labtint.codec import PillowCodec, load_image, save_image

# Color math and stages
from labtint.color import (
    DominantStats,
    HueChromaMapping,
    hex_to_lab,
    lab_to_rgb,
    linear_to_srgb,
    rgb_to_lab,
    sample_dominant,
    srgb_to_linear,
)

# Config values and presets
from labtint.config import (
    BANNER,
    GLOSSY,
    IDENTITY,
    MATTE,
    NATURAL,
    POSTER,
    PRESETS,
    RECOLOR_CONFIG,
    SOFT,
    OperationSpec,
    RecolorParams,
    get_preset,
    load_params_json,
    params_from_dict,
    params_to_dict,
    save_params_json,
)

# Pipeline
from labtint.pipeline import LabPlane, SourceAnalysis, analyze_source, process, render

# Protocols
from labtint.protocols import ImageCodec

# Raster container
from labtint.raster import RasterBuffer

# Session
from labtint.session import RecolorSession

__all__ = [
    # Version
    "__version__",
    # Data structures
    "RasterBuffer",
    "LabPlane",
    "SourceAnalysis",
    "DominantStats",
    "HueChromaMapping",
    # Pipeline
    "process",
    "analyze_source",
    "render",
    "RecolorSession",
    # Config
    "RecolorParams",
    "OperationSpec",
    "RECOLOR_CONFIG",
    # Presets
    "BANNER",
    "NATURAL",
    "GLOSSY",
    "MATTE",
    "POSTER",
    "SOFT",
    "IDENTITY",
    "PRESETS",
    "get_preset",
    "params_from_dict",
    "params_to_dict",
    "load_params_json",
    "save_params_json",
    # Color math
    "srgb_to_linear",
    "linear_to_srgb",
    "rgb_to_lab",
    "lab_to_rgb",
    "hex_to_lab",
    "sample_dominant",
    # Codec
    "ImageCodec",
    "PillowCodec",
    "load_image",
    "save_image",
]
