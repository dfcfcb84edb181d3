"""Pillow-backed image codec.

Decodes any format Pillow can read into an RGBA8 :class:`RasterBuffer`
and encodes rasters back, PNG by default so the result stays lossless.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from labtint.raster import RasterBuffer

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "JPG", "BMP"}


class PillowCodec:
    """ImageCodec implementation on top of Pillow.

    Example:
        >>> codec = PillowCodec()
        >>> image = codec.decode(open("banner.jpg", "rb").read())
        >>> png_bytes = codec.encode(image)
    """

    def __init__(self, format: str = "PNG", exif_transpose: bool = True, **save_options):
        """
        :param format: Output format name understood by Pillow
        :param exif_transpose: Apply EXIF orientation when decoding
        :param save_options: Extra keyword arguments for ``Image.save``
        """
        self.format = format.upper()
        self.exif_transpose = exif_transpose
        self.save_options = save_options

    def decode(self, data: bytes) -> RasterBuffer:
        """Decode encoded image bytes to RGBA8.

        :param data: Encoded image bytes
        :returns: RasterBuffer
        :raises ValueError: If Pillow cannot identify or read the image
        """
        try:
            with Image.open(io.BytesIO(data)) as im:
                return self._to_raster(im)
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Could not decode image ({len(data)} bytes): {e}") from e

    def encode(self, image: RasterBuffer) -> bytes:
        """Encode a raster with the configured format.

        :param image: Raster to encode
        :returns: Encoded bytes
        """
        buffer = io.BytesIO()
        self._to_pil(image).save(buffer, format=self.format, **self.save_options)
        return buffer.getvalue()

    def load(self, path: str | Path) -> RasterBuffer:
        """Decode an image file.

        :param path: Image path
        :returns: RasterBuffer
        :raises FileNotFoundError: If ``path`` does not exist
        :raises ValueError: If Pillow cannot identify or read the image
        """
        try:
            with Image.open(path) as im:
                image = self._to_raster(im)
        except FileNotFoundError:
            raise
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Could not decode image {path}: {e}") from e
        logger.debug("Loaded %s (%dx%d)", path, image.width, image.height)
        return image

    def save(self, image: RasterBuffer, path: str | Path) -> None:
        """Encode ``image`` to ``path``; the format follows the file suffix if known.

        :param image: Raster to save
        :param path: Output path
        """
        path = Path(path)
        fmt = Image.registered_extensions().get(path.suffix.lower(), self.format)
        self._to_pil(image, fmt).save(path, format=fmt, **self.save_options)
        logger.debug("Saved %s (%dx%d, %s)", path, image.width, image.height, fmt)

    # ========================================================================
    # Conversion
    # ========================================================================

    def _to_raster(self, im: Image.Image) -> RasterBuffer:
        if self.exif_transpose:
            im = ImageOps.exif_transpose(im)
        rgba = np.asarray(im.convert("RGBA"), dtype=np.uint8)
        return RasterBuffer.from_array(rgba)

    def _to_pil(self, image: RasterBuffer, fmt: str | None = None) -> Image.Image:
        im = Image.fromarray(image.pixels)
        if (fmt or self.format).upper() in _OPAQUE_FORMATS:
            im = im.convert("RGB")
        return im


_DEFAULT_CODEC = PillowCodec()


def load_image(path: str | Path) -> RasterBuffer:
    """Load an image file as RGBA8 using the default PNG codec."""
    return _DEFAULT_CODEC.load(path)


def save_image(image: RasterBuffer, path: str | Path) -> None:
    """Save a raster using the default codec (format from the file suffix)."""
    _DEFAULT_CODEC.save(image, path)
