"""
Protocol definitions for labtint interfaces.

Defines the image codec boundary so callers can swap raster libraries
without touching the pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from labtint.raster import RasterBuffer


@runtime_checkable
class ImageCodec(Protocol):
    """
    Protocol for decoding and encoding raster images.

    The recolor core never touches encoded bytes; everything crossing the
    boundary goes through an ImageCodec.
    """

    def decode(self, data: bytes) -> RasterBuffer:
        """
        Decode encoded image bytes into an RGBA8 raster.

        :param data: Encoded image (PNG, JPEG, WebP, ...)
        :returns: Decoded RasterBuffer
        :raises ValueError: If the bytes cannot be decoded
        """
        ...

    def encode(self, image: RasterBuffer) -> bytes:
        """
        Encode an RGBA8 raster.

        :param image: Raster to encode
        :returns: Encoded bytes
        """
        ...

