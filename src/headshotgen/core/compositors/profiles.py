"""Profile picture recipes (500×500).

One function per ``Variant`` plus the classic headshot used when a
profile is requested without a variant. Every recipe receives the profile
photo and the *already matted* logo, draws on its own private canvas and
returns a new raster. All recipes are deterministic except ``vintage``,
whose paper noise is random unless ``Settings.noise_seed`` is set.
"""

from __future__ import annotations

import numpy as np

from headshotgen.config import Settings
from headshotgen.core import filters
from headshotgen.core.blitter import draw_image_prop
from headshotgen.core.canvas import DEFAULT_STATE
from headshotgen.core.compositors._base import (
    draw_circular_photo,
    load_font,
    new_profile_canvas,
)
from headshotgen.core.geometry import Circle, Polygon
from headshotgen.schemas import BlendMode, RasterImage

_CENTER = (250.0, 250.0)

# Diagonal split of the square along its top-left → bottom-right axis.
_UPPER_TRIANGLE = Polygon(vertices=((0, 0), (500, 0), (500, 500)))
_LOWER_TRIANGLE = Polygon(vertices=((0, 0), (0, 500), (500, 500)))


def compose_classic(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Circular headshot, corner logo, vignette and a colour lift."""
    canvas = new_profile_canvas()
    draw_circular_photo(canvas, profile, _CENTER, 250)
    draw_image_prop(canvas, logo, 300, 300, 100, 100, state=DEFAULT_STATE.with_alpha(0.8))
    filters.apply_vignette(canvas.pixels)
    filters.enhance_colors(canvas.pixels)
    return canvas.to_raster()


def compose_professional(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Clean circular headshot with a small logo watermark."""
    canvas = new_profile_canvas()
    draw_circular_photo(canvas, profile, _CENTER, 250)
    draw_image_prop(canvas, logo, 320, 320, 80, 80, state=DEFAULT_STATE.with_alpha(0.7))
    filters.apply_vignette(canvas.pixels)
    return canvas.to_raster()


def compose_artistic(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Royal-blue wash with the logo overlaid in the centre."""
    canvas = new_profile_canvas()
    draw_circular_photo(canvas, profile, _CENTER, 250)
    canvas.fill((65, 105, 225, 51))
    overlay = DEFAULT_STATE.with_blend(BlendMode.OVERLAY).with_alpha(0.4)
    draw_image_prop(canvas, logo, 150, 150, 200, 200, state=overlay)
    return canvas.to_raster()


def compose_minimal(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Slightly inset headshot with a white ring and a tiny logo."""
    canvas = new_profile_canvas()
    disc = DEFAULT_STATE.with_clip(Circle(center=_CENTER, radius=240))
    draw_image_prop(canvas, profile, 0, 0, 500, 500, state=disc)
    canvas.stroke_circle(_CENTER, 240, "#ffffff", width=10)
    draw_image_prop(canvas, logo, 400, 400, 60, 60)
    return canvas.to_raster()


def compose_bold(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Diagonal split: photo above, brand blue with screened logo below."""
    canvas = new_profile_canvas()
    draw_image_prop(canvas, profile, 0, 0, 500, 500, state=DEFAULT_STATE.with_clip(_UPPER_TRIANGLE))

    lower = DEFAULT_STATE.with_clip(_LOWER_TRIANGLE)
    canvas.fill("#1d4ed8", lower)
    draw_image_prop(canvas, logo, 150, 250, 200, 200, state=lower.with_blend(BlendMode.SCREEN))
    return canvas.to_raster()


def compose_gradient(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Blue-violet gradient card with photo, name caption and logo."""
    canvas = new_profile_canvas()
    canvas.fill_linear_gradient((0, 0), (500, 500), "#3b82f6", "#8b5cf6")
    draw_circular_photo(canvas, profile, (250, 230), 180)
    canvas.text(settings.name_caption, (250, 440), load_font(24, settings.font_path), "#ffffff")
    draw_image_prop(canvas, logo, 220, 350, 60, 60)
    return canvas.to_raster()


def compose_duotone(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Blue duotone headshot with a lightened logo watermark."""
    canvas = new_profile_canvas()
    draw_circular_photo(canvas, profile, _CENTER, 250)
    filters.apply_duotone(canvas.pixels)
    lighten = DEFAULT_STATE.with_blend(BlendMode.LIGHTEN).with_alpha(0.7)
    draw_image_prop(canvas, logo, 350, 350, 120, 120, state=lighten)
    return canvas.to_raster()


def compose_vintage(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """Sepia portrait on textured paper inside a double wooden frame."""
    canvas = new_profile_canvas()
    canvas.fill("#e2d3b4")
    rng = np.random.default_rng(settings.noise_seed)
    canvas.draw_layer(filters.noise_texture(canvas.width, canvas.height, rng))

    canvas.stroke_rect((40, 40, 420, 420), "#8b4513", width=20)
    canvas.stroke_rect((60, 60, 380, 380), "#d2b48c", width=10)

    draw_circular_photo(canvas, profile, _CENTER, 170)
    filters.apply_sepia(canvas.pixels)
    draw_image_prop(canvas, logo, 40, 430, 50, 50)
    return canvas.to_raster()


def compose_monochrome(profile: RasterImage, logo: RasterImage, settings: Settings) -> RasterImage:
    """High-contrast black and white portrait with an inverted logo."""
    canvas = new_profile_canvas()
    canvas.fill("#ffffff")
    draw_circular_photo(canvas, profile, _CENTER, 230)
    filters.apply_monochrome(canvas.pixels)
    canvas.stroke_circle(_CENTER, 230, "#000000", width=8)
    difference = DEFAULT_STATE.with_blend(BlendMode.DIFFERENCE)
    draw_image_prop(canvas, logo, 360, 360, 100, 100, state=difference)
    return canvas.to_raster()
