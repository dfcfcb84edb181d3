"""Tests for the RGBA8 raster container and the Pillow codec."""

import io

import numpy as np
import pytest
from PIL import Image

from labtint import ImageCodec, PillowCodec, load_image, save_image
from labtint.raster import RasterBuffer


@pytest.fixture
def sample_raster():
    """5x3 raster with varied colors and alpha."""
    rng = np.random.default_rng(21)
    return RasterBuffer.from_array(rng.integers(0, 256, size=(3, 5, 4), dtype=np.uint8))


class TestRasterBuffer:
    """Test RasterBuffer construction and accessors."""

    def test_from_bytes_round_trip(self, sample_raster):
        data = sample_raster.to_bytes()
        assert len(data) == 4 * 5 * 3
        assert RasterBuffer.from_bytes(5, 3, data) == sample_raster

    def test_from_bytes_length_mismatch(self):
        with pytest.raises(ValueError, match="Expected 32 bytes"):
            RasterBuffer.from_bytes(4, 2, b"\x00" * 31)

    def test_from_bytes_copies(self):
        data = bytearray(16)
        raster = RasterBuffer.from_bytes(2, 2, data)
        data[0] = 255
        assert raster.pixels[0, 0, 0] == 0

    def test_from_array_rgb_gets_opaque_alpha(self):
        rgb = np.full((2, 3, 3), 7, dtype=np.uint8)
        raster = RasterBuffer.from_array(rgb)
        assert (raster.width, raster.height) == (3, 2)
        np.testing.assert_array_equal(raster.alpha, 255)
        np.testing.assert_array_equal(raster.rgb, 7)

    @pytest.mark.parametrize(
        "array",
        [
            np.zeros((2, 2), dtype=np.uint8),
            np.zeros((2, 2, 2), dtype=np.uint8),
            np.zeros((2, 2, 4), dtype=np.float32),
        ],
    )
    def test_from_array_rejects(self, array):
        with pytest.raises(ValueError):
            RasterBuffer.from_array(array)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            RasterBuffer(width=3, height=2, pixels=np.zeros((3, 2, 4), dtype=np.uint8))

    def test_wrong_dtype(self):
        with pytest.raises(ValueError, match="uint8"):
            RasterBuffer(width=1, height=1, pixels=np.zeros((1, 1, 4), dtype=np.int32))

    def test_not_an_array(self):
        with pytest.raises(TypeError):
            RasterBuffer(width=1, height=1, pixels=[[[0, 0, 0, 0]]])

    def test_negative_dimensions(self):
        with pytest.raises(ValueError, match="non-negative"):
            RasterBuffer(width=-1, height=1, pixels=np.zeros((1, 0, 4), dtype=np.uint8))

    def test_blank(self):
        raster = RasterBuffer.blank(4, 2, (10, 20, 30, 40))
        assert raster.pixel_count == 8
        np.testing.assert_array_equal(raster.flat(), [[10, 20, 30, 40]] * 8)

    def test_copy_is_independent(self, sample_raster):
        clone = sample_raster.copy()
        clone.pixels[0, 0, 0] ^= 0xFF
        assert clone != sample_raster

    def test_equality(self, sample_raster):
        assert sample_raster == RasterBuffer.from_array(sample_raster.pixels)
        assert sample_raster != RasterBuffer.blank(5, 3)
        assert sample_raster != "not a raster"

    def test_repr(self):
        assert repr(RasterBuffer.blank(4, 2)) == "RasterBuffer(4x2)"


class TestPillowCodec:
    """Test decoding and encoding through Pillow."""

    def test_is_image_codec(self):
        assert isinstance(PillowCodec(), ImageCodec)

    def test_png_round_trip(self, sample_raster):
        codec = PillowCodec()
        data = codec.encode(sample_raster)
        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        assert codec.decode(data) == sample_raster

    def test_decode_rgb_png(self):
        buffer = io.BytesIO()
        Image.new("RGB", (3, 2), (1, 2, 3)).save(buffer, format="PNG")
        raster = PillowCodec().decode(buffer.getvalue())
        assert (raster.width, raster.height) == (3, 2)
        np.testing.assert_array_equal(raster.flat(), [[1, 2, 3, 255]] * 6)

    def test_decode_garbage(self):
        with pytest.raises(ValueError, match="Could not decode image"):
            PillowCodec().decode(b"definitely not an image")

    def test_load_garbage_file(self, tmp_path):
        path = tmp_path / "bad.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(ValueError, match="Could not decode image"):
            PillowCodec().load(path)
        with pytest.raises(ValueError, match="Could not decode image"):
            load_image(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_jpeg_encode_drops_alpha(self, sample_raster):
        data = PillowCodec(format="jpeg", quality=95).encode(sample_raster)
        assert data[:2] == b"\xff\xd8"
        decoded = PillowCodec().decode(data)
        np.testing.assert_array_equal(decoded.alpha, 255)

    def test_save_load_by_suffix(self, sample_raster, tmp_path):
        png_path = tmp_path / "out.png"
        save_image(sample_raster, png_path)
        assert load_image(png_path) == sample_raster

        jpg_path = tmp_path / "out.jpg"
        PillowCodec().save(sample_raster, jpg_path)
        with Image.open(jpg_path) as im:
            assert im.format == "JPEG"
            assert im.mode == "RGB"
