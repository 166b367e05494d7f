"""Shared fixtures for the headshotgen test suite."""

import io

import numpy as np
import pytest
from PIL import Image

from headshotgen.config import Settings
from headshotgen.schemas import RasterImage


def png_bytes(image: Image.Image) -> bytes:
    """Encode a PIL image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def rgb_image() -> Image.Image:
    """A small 120x80 RGB test photo with a horizontal red gradient."""
    arr = np.zeros((80, 120, 3), dtype=np.uint8)
    arr[:, :, 0] = np.linspace(0, 255, 120, dtype=np.uint8)  # red gradient
    arr[:, :, 1] = 128
    arr[:, :, 2] = 64
    return Image.fromarray(arr)


@pytest.fixture
def photo(rgb_image: Image.Image) -> RasterImage:
    """The test photo as a raster."""
    return RasterImage.from_pil(rgb_image)


@pytest.fixture
def photo_bytes(rgb_image: Image.Image) -> bytes:
    """The test photo encoded as PNG."""
    return png_bytes(rgb_image)


@pytest.fixture
def logo_image() -> Image.Image:
    """A 60x60 logo: a dark blue square (20..39) on a white backdrop."""
    arr = np.full((60, 60, 3), 255, dtype=np.uint8)
    arr[20:40, 20:40] = (0, 0, 200)
    return Image.fromarray(arr)


@pytest.fixture
def logo(logo_image: Image.Image) -> RasterImage:
    """The test logo as a raster."""
    return RasterImage.from_pil(logo_image)


@pytest.fixture
def logo_bytes(logo_image: Image.Image) -> bytes:
    """The test logo encoded as PNG."""
    return png_bytes(logo_image)


@pytest.fixture
def settings() -> Settings:
    """Settings with a fixed noise seed and a small worker pool."""
    return Settings(noise_seed=7, max_workers=2)
