"""Recolor parameter configuration.

Standardized ranges, defaults and neutral values for every numeric
recolor parameter. Percent-style fields use the 0-100 scale callers see.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from labtint.config.operations import OperationSpec

FINISH_MODES: tuple[str, ...] = ("none", "glossy", "matte")
DEFAULT_TARGET_COLOR = "#fe8f8d"
DEFAULT_FINISH = "none"


@dataclass(frozen=True)
class RecolorConfig:
    """Configuration for all numeric recolor parameters."""

    strength: OperationSpec = OperationSpec(
        name="strength",
        min_value=0.0,
        max_value=100.0,
        default=100.0,
        neutral=0.0,
        description="Blend toward the processed pixel: 0=original, 100=fully recolored",
    )

    white_protect: OperationSpec = OperationSpec(
        name="white_protect",
        min_value=88.0,
        max_value=99.0,
        default=94.0,
        neutral=99.0,
        description="L* threshold above which near-gray pixels are left untouched",
    )

    finish_strength: OperationSpec = OperationSpec(
        name="finish_strength",
        min_value=0.0,
        max_value=100.0,
        default=65.0,
        neutral=0.0,
        description="Intensity of the glossy or matte finish",
    )

    vibrance: OperationSpec = OperationSpec(
        name="vibrance",
        min_value=0.0,
        max_value=100.0,
        default=45.0,
        neutral=0.0,
        description="Midtone chroma boost",
    )

    depth: OperationSpec = OperationSpec(
        name="depth",
        min_value=0.0,
        max_value=100.0,
        default=30.0,
        neutral=0.0,
        description="S-curve contrast on L*",
    )

    clarity: OperationSpec = OperationSpec(
        name="clarity",
        min_value=0.0,
        max_value=100.0,
        default=25.0,
        neutral=0.0,
        description="Local contrast (unsharp mask on L*)",
    )

    warm: OperationSpec = OperationSpec(
        name="warm",
        min_value=-50.0,
        max_value=50.0,
        default=0.0,
        neutral=0.0,
        description="Hue bias: -50=-12 degrees (cool), 50=+12 degrees (warm)",
    )

    def get_spec(self, name: str) -> OperationSpec:
        """Get specification by parameter name.

        :param name: Parameter name
        :returns: OperationSpec for the parameter
        :raises KeyError: If parameter not found
        """
        spec = getattr(self, name, None)
        if not isinstance(spec, OperationSpec):
            available = ", ".join(self.names())
            raise KeyError(f"Unknown recolor parameter '{name}'. Available: {available}")
        return spec

    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self))

    def get_all_specs(self) -> dict[str, dict[str, object]]:
        """Get all parameter specs as dictionaries.

        :return: Mapping of parameter name to spec attributes
        """
        return {
            spec.name: {
                "min": spec.min_value,
                "max": spec.max_value,
                "default": spec.default,
                "neutral": spec.neutral,
                "description": spec.description,
            }
            for spec in (getattr(self, name) for name in self.names())
        }


RECOLOR_CONFIG = RecolorConfig()
