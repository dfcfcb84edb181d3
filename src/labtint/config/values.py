"""Recolor parameter values.

``RecolorParams`` is the single, fully-resolved configuration value passed
to the pipeline. Resolution happens once at construction: numbers are
clamped, malformed values fall back to documented defaults, and nothing
here ever raises for bad input.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from labtint.color.space import hex_to_lab, normalize_hex
from labtint.config.recolor import (
    DEFAULT_FINISH,
    DEFAULT_TARGET_COLOR,
    FINISH_MODES,
    RECOLOR_CONFIG,
)
from labtint.types import Finish, LabTriple

logger = logging.getLogger(__name__)

# Keys used by the banner editor panel
_CAMEL_ALIASES = {
    "targetColor": "target_color",
    "whiteProtect": "white_protect",
    "finishStrength": "finish_strength",
}


@dataclass(frozen=True)
class RecolorParams:
    """Recolor parameters with construction-time resolution.

    Percent-style fields use the 0-100 scale; ``warm`` uses -50..50.

    Example:
        >>> params = RecolorParams(target_color="#3366CC", strength=80, finish="matte")
        >>> params.target_color
        '#3366cc'
        >>> RecolorParams(strength=250).strength
        100.0
        >>> RecolorParams(target_color="oops").target_color
        '#000000'
    """

    target_color: str = DEFAULT_TARGET_COLOR
    strength: float = RECOLOR_CONFIG.strength.default
    white_protect: float = RECOLOR_CONFIG.white_protect.default
    finish: Finish = DEFAULT_FINISH
    finish_strength: float = RECOLOR_CONFIG.finish_strength.default
    vibrance: float = RECOLOR_CONFIG.vibrance.default
    depth: float = RECOLOR_CONFIG.depth.default
    clarity: float = RECOLOR_CONFIG.clarity.default
    warm: float = RECOLOR_CONFIG.warm.default

    def __post_init__(self) -> None:
        set_ = object.__setattr__
        set_(self, "target_color", normalize_hex(self.target_color))

        finish = self.finish.strip().lower() if isinstance(self.finish, str) else self.finish
        if finish not in FINISH_MODES:
            logger.warning(
                "[Config] Unknown finish %r, using %r. Valid: %s",
                self.finish,
                DEFAULT_FINISH,
                FINISH_MODES,
            )
            finish = DEFAULT_FINISH
        set_(self, "finish", finish)

        for name in RECOLOR_CONFIG.names():
            spec = RECOLOR_CONFIG.get_spec(name)
            set_(self, name, spec.resolve(getattr(self, name)))

    # ========================================================================
    # Derived values (fractions used by the stages)
    # ========================================================================

    @property
    def target_lab(self) -> LabTriple:
        """Target color in Lab."""
        return hex_to_lab(self.target_color)

    @property
    def strength_amount(self) -> float:
        return self.strength / 100.0

    @property
    def finish_amount(self) -> float:
        """Finish intensity in [0, 1]; 0 when the finish is ``none``."""
        if self.finish == "none":
            return 0.0
        return self.finish_strength / 100.0

    @property
    def vibrance_amount(self) -> float:
        return self.vibrance / 100.0

    @property
    def depth_amount(self) -> float:
        return self.depth / 100.0

    @property
    def clarity_amount(self) -> float:
        return self.clarity / 100.0

    def is_identity(self) -> bool:
        """Check if processing would return the source unchanged.

        Only ``strength == 0`` guarantees that; every other combination
        still remaps color.
        """
        return RECOLOR_CONFIG.strength.is_neutral(self.strength)

    # ========================================================================
    # Construction helpers
    # ========================================================================

    def replace(self, **changes: Any) -> RecolorParams:
        """Return a new, re-resolved instance with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RecolorParams:
        """Create RecolorParams from a dictionary.

        Accepts snake_case field names and the editor's camelCase keys
        (``targetColor``, ``whiteProtect``, ``finishStrength``). Unknown
        keys are ignored.

        :param d: Dictionary with recolor parameters
        :returns: Resolved RecolorParams

        Example:
            >>> RecolorParams.from_dict({"targetColor": "#FF0000", "strength": 50})
        """
        return cls(**canonical_fields(d))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a snake_case dictionary accepted by :meth:`from_dict`."""
        return dataclasses.asdict(self)


def canonical_fields(d: dict[str, Any]) -> dict[str, Any]:
    """Map editor aliases to field names and drop unknown keys.

    :param d: Raw parameter dictionary
    :returns: Dictionary keyed by RecolorParams field names
    """
    valid_fields = {f.name for f in dataclasses.fields(RecolorParams)}
    kwargs: dict[str, Any] = {}
    for key, value in d.items():
        name = _CAMEL_ALIASES.get(key, key)
        if name in valid_fields:
            kwargs[name] = value
    return kwargs
