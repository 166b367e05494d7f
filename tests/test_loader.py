"""Tests for headshotgen.core.loader."""

import io

import numpy as np
import pytest
from PIL import Image

from headshotgen.core.loader import (
    data_url_to_bytes,
    decode_image,
    encode_png,
    to_data_url,
)
from headshotgen.errors import DecodeError
from headshotgen.schemas import RasterImage

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestDecodeImage:
    """Decode supported formats and reject everything else."""

    def test_decodes_png(self, photo_bytes: bytes) -> None:
        raster = decode_image(photo_bytes)
        assert raster.size == (120, 80)
        assert raster.pixels.dtype == np.uint8
        assert raster.pixels.shape == (80, 120, 4)

    def test_opaque_source_gets_full_alpha(self, photo_bytes: bytes) -> None:
        assert np.all(decode_image(photo_bytes).pixels[..., 3] == 255)

    def test_decodes_jpeg(self, rgb_image: Image.Image) -> None:
        buffer = io.BytesIO()
        rgb_image.save(buffer, format="JPEG")
        assert decode_image(buffer.getvalue()).size == (120, 80)

    def test_preserves_source_alpha(self) -> None:
        image = Image.new("RGBA", (10, 10), (10, 20, 30, 77))
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        raster = decode_image(buffer.getvalue())
        assert tuple(raster.pixels[5, 5]) == (10, 20, 30, 77)

    def test_grayscale_is_expanded(self) -> None:
        image = Image.new("L", (4, 4), 90)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        assert tuple(decode_image(buffer.getvalue()).pixels[0, 0]) == (90, 90, 90, 255)

    def test_empty_blob(self) -> None:
        with pytest.raises(DecodeError):
            decode_image(b"")

    def test_garbage_blob(self) -> None:
        with pytest.raises(DecodeError):
            decode_image(b"definitely not an image")

    def test_truncated_png(self, photo_bytes: bytes) -> None:
        with pytest.raises(DecodeError):
            decode_image(photo_bytes[: len(photo_bytes) // 2])


class TestExport:
    """PNG export and data-URI helpers."""

    def test_png_signature(self, photo: RasterImage) -> None:
        assert encode_png(photo).startswith(PNG_SIGNATURE)

    def test_png_is_lossless(self, photo: RasterImage) -> None:
        restored = decode_image(encode_png(photo))
        np.testing.assert_array_equal(restored.pixels, photo.pixels)

    def test_data_url_prefix(self) -> None:
        assert to_data_url(PNG_SIGNATURE).startswith("data:image/png;base64,")

    def test_data_url_payload(self) -> None:
        assert data_url_to_bytes(to_data_url(PNG_SIGNATURE)) == PNG_SIGNATURE

    def test_rejects_foreign_data_url(self) -> None:
        with pytest.raises(DecodeError):
            data_url_to_bytes("data:image/jpeg;base64,AAAA")

    def test_rejects_malformed_payload(self) -> None:
        with pytest.raises(DecodeError):
            data_url_to_bytes("data:image/png;base64,!!!")
