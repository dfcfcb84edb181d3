"""Type aliases for labtint.

Provides unified type hints for scalar-or-array parameters across all modules.
"""

from typing import Literal

import numpy as np

# A single channel value or a batch of them
FloatOrArray = float | np.ndarray

# RGBA8 fill color
RGBA = tuple[int, int, int, int]

# Lab triple (L, a, b)
LabTriple = tuple[float, float, float]

# Finish stylization modes
Finish = Literal["none", "glossy", "matte"]
