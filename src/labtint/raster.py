"""RGBA8 raster container shared by the codec and the recolor pipeline."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from labtint.types import RGBA


@dataclass(frozen=True, eq=False)
class RasterBuffer:
    """Decoded image: interleaved RGBA8, row-major, top-to-bottom.

    ``pixels`` always has shape ``(height, width, 4)`` and dtype ``uint8``,
    so its byte length is exactly ``4 * width * height``.

    Example:
        >>> img = RasterBuffer.blank(4, 2, (255, 0, 0, 255))
        >>> len(img.to_bytes())
        32
    """

    width: int
    height: int
    pixels: NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Raster dimensions must be non-negative, got {self.width}x{self.height}"
            )
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"pixels must be a numpy array, got {type(pixels).__name__}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {pixels.dtype}")
        if pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"pixels shape {pixels.shape} does not match "
                f"({self.height}, {self.width}, 4) for a {self.width}x{self.height} raster"
            )
        if not pixels.flags["C_CONTIGUOUS"]:
            object.__setattr__(self, "pixels", np.ascontiguousarray(pixels))

    # ========================================================================
    # Constructors
    # ========================================================================

    @classmethod
    def from_bytes(
        cls, width: int, height: int, data: bytes | bytearray | memoryview
    ) -> RasterBuffer:
        """Wrap a flat RGBA8 byte sequence.

        :param width: Image width in pixels
        :param height: Image height in pixels
        :param data: Interleaved RGBA8 bytes, length ``4 * width * height``
        :returns: RasterBuffer owning a copy of ``data``
        :raises ValueError: If the byte length does not match the dimensions
        """
        expected = 4 * width * height
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for a {width}x{height} RGBA8 raster, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4).copy()
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_array(cls, array: NDArray[np.uint8]) -> RasterBuffer:
        """Wrap an ``(H, W, 4)`` or ``(H, W, 3)`` uint8 array.

        RGB input gains an opaque alpha channel. The array is copied.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3) or (H, W, 4) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {array.dtype}")

        height, width = array.shape[:2]
        if array.shape[2] == 3:
            pixels = np.empty((height, width, 4), dtype=np.uint8)
            pixels[..., :3] = array
            pixels[..., 3] = 255
        else:
            pixels = np.array(array, dtype=np.uint8, copy=True, order="C")
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def blank(cls, width: int, height: int, rgba: RGBA = (0, 0, 0, 0)) -> RasterBuffer:
        """Create a raster filled with a single RGBA8 color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = np.asarray(rgba, dtype=np.uint8)
        return cls(width=width, height=height, pixels=pixels)

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> NDArray[np.uint8]:
        """RGB channels view [H, W, 3]."""
        return self.pixels[..., :3]

    @property
    def alpha(self) -> NDArray[np.uint8]:
        """Alpha channel view [H, W]."""
        return self.pixels[..., 3]

    def flat(self) -> NDArray[np.uint8]:
        """Pixels as a ``[W*H, 4]`` view."""
        return self.pixels.reshape(-1, 4)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def copy(self) -> RasterBuffer:
        return RasterBuffer(width=self.width, height=self.height, pixels=self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"RasterBuffer({self.width}x{self.height})"
