"""LinkedIn banner recipes (1584×396).

Both layouts take the profile photo and the already matted logo.
"""

from __future__ import annotations

from headshotgen.config import Settings
from headshotgen.core.blitter import draw_image_prop
from headshotgen.core.compositors._base import (
    BANNER_SIZE,
    draw_circular_photo,
    load_font,
    new_banner_canvas,
)
from headshotgen.schemas import RasterImage

_WIDTH, _HEIGHT = BANNER_SIZE


def compose_classic_banner(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Layout A: photo left, logo right, separator and caption on a light gradient."""
    canvas = new_banner_canvas()
    canvas.fill_linear_gradient((0, 0), (_WIDTH, _HEIGHT), "#f0f4f8", "#d1e2f2")

    photo_size = 300
    photo_x, photo_y = 100, (_HEIGHT - photo_size) / 2
    draw_circular_photo(
        canvas,
        profile,
        (photo_x + photo_size / 2, photo_y + photo_size / 2),
        photo_size / 2,
    )

    logo_size = 200
    draw_image_prop(
        canvas,
        logo,
        _WIDTH - logo_size - 100,
        (_HEIGHT - logo_size) / 2,
        logo_size,
        logo_size,
    )

    canvas.line((_WIDTH / 2, 50), (_WIDTH / 2, _HEIGHT - 50), (0, 0, 0, 26))
    canvas.text(
        settings.classic_banner_caption,
        (_WIDTH / 2, _HEIGHT - 50),
        load_font(24, settings.font_path),
        "#444444",
    )
    return canvas.to_raster()


def compose_modern_banner(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Layout B: bold blue gradient, circular photo, logo and a large caption."""
    canvas = new_banner_canvas()
    canvas.fill_linear_gradient((0, 0), (_WIDTH, 0), "#2563eb", "#4f46e5")

    draw_circular_photo(canvas, profile, (250, _HEIGHT / 2), 125)

    logo_size = 160
    draw_image_prop(
        canvas,
        logo,
        _WIDTH - logo_size - 100,
        _HEIGHT / 2 - logo_size / 2,
        logo_size,
        logo_size,
    )

    canvas.text(
        settings.modern_banner_caption,
        (_WIDTH / 2, _HEIGHT / 2),
        load_font(40, settings.font_path),
        "#ffffff",
    )
    return canvas.to_raster()
