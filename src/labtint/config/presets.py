"""Preset library for recolor parameters.

Provides pre-configured RecolorParams for common looks, with support for
loading from dict and JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from labtint.config.values import RecolorParams, canonical_fields

logger = logging.getLogger(__name__)

# ============================================================================
# Presets
# ============================================================================

# Banner editor defaults: coral target with a glossy sheen
BANNER = RecolorParams(
    target_color="#FE8F8D",
    strength=100,
    white_protect=94,
    finish="glossy",
    finish_strength=65,
    vibrance=45,
    depth=30,
    clarity=25,
    warm=0,
)

# Hue/chroma remap and lightness lift only
NATURAL = RecolorParams(finish="none", vibrance=0, depth=0, clarity=0)

GLOSSY = RecolorParams(finish="glossy", finish_strength=80, vibrance=55, depth=35, clarity=30)

MATTE = RecolorParams(finish="matte", finish_strength=70, vibrance=20, depth=15, clarity=10)

POSTER = RecolorParams(finish="none", vibrance=80, depth=60, clarity=50, white_protect=90)

SOFT = RecolorParams(
    strength=70, finish="matte", finish_strength=40, vibrance=25, depth=10, clarity=0
)

# Returns the source unchanged
IDENTITY = RecolorParams(strength=0, vibrance=0, depth=0, clarity=0)

PRESETS: dict[str, RecolorParams] = {
    "banner": BANNER,
    "natural": NATURAL,
    "glossy": GLOSSY,
    "matte": MATTE,
    "poster": POSTER,
    "soft": SOFT,
    "identity": IDENTITY,
}

# ============================================================================
# Loading Functions
# ============================================================================


def get_preset(name: str, target_color: str | None = None) -> RecolorParams:
    """Get recolor preset by name.

    :param name: Preset name (case-insensitive)
    :param target_color: Optional target color overriding the preset's
    :returns: RecolorParams preset
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Unknown recolor preset '{name}'. Available: {available}")
    preset = PRESETS[name_lower]
    if target_color is not None:
        preset = preset.replace(target_color=target_color)
    return preset


# ============================================================================
# Dict/JSON Loading
# ============================================================================


def params_from_dict(d: dict) -> RecolorParams:
    """Create RecolorParams from dictionary.

    A ``"preset"`` key selects the base preset; remaining keys override it.

    :param d: Dictionary with recolor parameters
    :returns: RecolorParams instance

    Example:
        >>> params = params_from_dict({"preset": "matte", "targetColor": "#2255AA"})
    """
    d = dict(d)
    preset_name = d.pop("preset", None)
    if preset_name is None:
        return RecolorParams.from_dict(d)

    return get_preset(preset_name).replace(**canonical_fields(d))


def params_to_dict(params: RecolorParams) -> dict:
    """Convert RecolorParams to dictionary.

    :param params: RecolorParams instance
    :returns: Dictionary representation
    """
    return params.to_dict()


def load_params_json(path: str | Path) -> RecolorParams:
    """Load RecolorParams from JSON file.

    :param path: Path to JSON file
    :returns: RecolorParams instance
    """
    with open(path) as f:
        d = json.load(f)
    logger.debug("Loaded recolor params from %s", path)
    return params_from_dict(d)


def save_params_json(params: RecolorParams, path: str | Path) -> None:
    """Save RecolorParams to JSON file.

    :param params: RecolorParams instance
    :param path: Output path
    """
    with open(path, "w") as f:
        json.dump(params_to_dict(params), f, indent=2)
