"""Configuration module for labtint.

This module provides standardized parameter specifications and the resolved
parameter value used by the recolor pipeline.

Usage:
    from labtint.config import RECOLOR_CONFIG, RecolorParams
    RECOLOR_CONFIG.white_protect.default  # 94.0
    params = RecolorParams(target_color="#2266AA", finish="glossy")
"""

from labtint.config.operations import OperationSpec
from labtint.config.presets import (
    BANNER,
    GLOSSY,
    IDENTITY,
    MATTE,
    NATURAL,
    POSTER,
    PRESETS,
    SOFT,
    get_preset,
    load_params_json,
    params_from_dict,
    params_to_dict,
    save_params_json,
)
from labtint.config.recolor import (
    DEFAULT_FINISH,
    DEFAULT_TARGET_COLOR,
    FINISH_MODES,
    RECOLOR_CONFIG,
    RecolorConfig,
)
from labtint.config.values import RecolorParams, canonical_fields

__all__ = [
    # Specs
    "OperationSpec",
    "RecolorConfig",
    "RECOLOR_CONFIG",
    "FINISH_MODES",
    "DEFAULT_FINISH",
    "DEFAULT_TARGET_COLOR",
    # Values
    "RecolorParams",
    "canonical_fields",
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
]
