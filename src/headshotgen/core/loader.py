"""Raster decoding and PNG export.

Typical usage::

    from headshotgen.core.loader import decode_image, encode_png, to_data_url

    raster = decode_image(uploaded_bytes)
    url = to_data_url(encode_png(raster))
"""

from __future__ import annotations

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from headshotgen.errors import DecodeError
from headshotgen.schemas import RasterImage

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = "data:image/png;base64,"


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_image(blob: bytes) -> RasterImage:
    """Decode an encoded image blob into an RGBA raster.

    The decoder is opened in a ``with`` block, so its file handle is
    released whether decoding succeeds or fails.

    Args:
        blob: Encoded image bytes (PNG, JPEG, WebP, ...).

    Returns:
        A ``RasterImage`` with the source dimensions.

    Raises:
        DecodeError: If the blob is empty, not a supported image format,
            corrupt, or exceeds Pillow's decompression-bomb limit.
    """
    if not blob:
        raise DecodeError("Image payload is empty.")

    try:
        with Image.open(io.BytesIO(blob)) as image:
            image.load()
            rgba = image.convert("RGBA")
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Unsupported or unrecognised image format: {exc}") from exc
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc

    logger.debug("Decoded %dx%d image (%d bytes)", rgba.width, rgba.height, len(blob))
    return RasterImage.from_pil(rgba)


# ---------------------------------------------------------------------------
# Export helpers
# ---------------------------------------------------------------------------


def encode_png(raster: RasterImage) -> bytes:
    """Serialize a raster to lossless PNG bytes.

    Args:
        raster: The image to export.

    Returns:
        Raw PNG file contents as ``bytes``.
    """
    buffer = io.BytesIO()
    raster.to_pil().save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(png: bytes) -> str:
    """Wrap PNG bytes in a self-contained ``data:`` URI."""
    return _DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")


def data_url_to_bytes(url: str) -> bytes:
    """Extract the PNG payload from a ``data:image/png;base64,`` URI.

    Raises:
        DecodeError: If *url* is not a base64 PNG data URI.
    """
    if not url.startswith(_DATA_URL_PREFIX):
        raise DecodeError("Not a base64 PNG data URI.")
    try:
        return base64.b64decode(url[len(_DATA_URL_PREFIX):], validate=True)
    except binascii.Error as exc:
        raise DecodeError(f"Malformed data URI payload: {exc}") from exc
