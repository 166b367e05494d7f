"""Base types and shared helpers for compositor recipes.

This module defines the recipe signature shared by every profile and
banner compositor, the fixed output sizes, and the drawing helpers that
several recipes reuse (circular photo placement, caption fonts).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PIL import ImageFont

from headshotgen.config import Settings
from headshotgen.core.blitter import draw_image_prop
from headshotgen.core.canvas import DEFAULT_STATE, Canvas
from headshotgen.core.geometry import Circle
from headshotgen.schemas import Point, RasterImage

logger = logging.getLogger(__name__)

PROFILE_SIZE: tuple[int, int] = (500, 500)
BANNER_SIZE: tuple[int, int] = (1584, 396)

# A recipe maps (profile photo, matted logo, settings) to a finished raster.
Recipe = Callable[[RasterImage, RasterImage, Settings], RasterImage]

_FALLBACK_FONTS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",  # Linux
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",  # macOS
    "C:/Windows/Fonts/arialbd.ttf",  # Windows
)


# ---------------------------------------------------------------------------
# Canvas helpers
# ---------------------------------------------------------------------------


def new_profile_canvas() -> Canvas:
    return Canvas(*PROFILE_SIZE)


def new_banner_canvas() -> Canvas:
    return Canvas(*BANNER_SIZE)


def draw_circular_photo(
    canvas: Canvas,
    photo: RasterImage,
    center: Point,
    radius: float,
) -> None:
    """Fill a disc with *photo*, cropped to the disc's bounding square."""
    cx, cy = center
    clip = DEFAULT_STATE.with_clip(Circle(center=center, radius=radius))
    draw_image_prop(
        canvas, photo, cx - radius, cy - radius, 2 * radius, 2 * radius, state=clip
    )


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


def load_font(
    size: int,
    font_path: Path | None = None,
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a bold caption font, with a fallback chain.

    Tries *font_path*, then common system bold fonts, then Pillow's
    built-in font at the requested size.

    Args:
        size: Font size in pixels.
        font_path: Preferred TrueType/OpenType file.

    Returns:
        A font usable with ``ImageDraw``.
    """
    candidates = [str(font_path)] if font_path else []
    candidates.extend(_FALLBACK_FONTS)

    for path in candidates:
        if not Path(path).is_file():
            continue
        try:
            font = ImageFont.truetype(path, size)
        except OSError as exc:
            logger.debug("Font %s failed: %s", path, exc)
            continue
        logger.debug("Loaded font %s (size=%d)", path, size)
        return font

    logger.info("No TrueType font found, using Pillow's default font.")
    return ImageFont.load_default(size=size)
