"""Operation specifications for recolor parameters.

This module defines the OperationSpec dataclass that specifies the range,
default and neutral value of each numeric recolor parameter.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationSpec:
    """Specification for a numeric recolor parameter.

    Attributes:
        name: Parameter name (e.g., "strength", "warm")
        min_value: Minimum allowed value
        max_value: Maximum allowed value
        default: Value used when not specified or malformed
        neutral: Value that disables the parameter's effect
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    description: str = ""

    def resolve(self, value: object) -> float:
        """Resolve a caller-supplied value to a usable one.

        Numbers are clamped to ``[min_value, max_value]``, including integers
        too large to convert to float. Non-numeric and non-finite values fall
        back to ``default`` with a warning; this never raises.

        :param value: Value to resolve
        :returns: Clamped float within range
        """
        try:
            number = float(value)  # type: ignore[arg-type]
        except OverflowError:
            if isinstance(value, numbers.Real):
                return self.max_value if value > 0 else self.min_value
            logger.warning(
                "[Config] %s: value out of float range; using default %s",
                self.name,
                self.default,
            )
            return float(self.default)
        except (TypeError, ValueError):
            logger.warning(
                "[Config] %s: expected number, got %r; using default %s",
                self.name,
                value,
                self.default,
            )
            return float(self.default)

        if not math.isfinite(number):
            logger.warning(
                "[Config] %s: non-finite value %r; using default %s",
                self.name,
                number,
                self.default,
            )
            return float(self.default)

        return max(self.min_value, min(self.max_value, number))

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"OperationSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral})"
        )
