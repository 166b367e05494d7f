"""Per-pixel colour filters.

Every filter edits a writable ``(height, width, 4)`` ``uint8`` buffer in
place (typically ``Canvas.pixels``) and leaves the alpha channel alone,
except ``apply_vignette`` which composites a translucent overlay. Results
are rounded to the nearest integer and clamped to ``[0, 255]``.

Filters see the whole buffer they are given: clip or mask the canvas
*before* filtering when only part of it should be affected.
"""

from __future__ import annotations

import numpy as np

from headshotgen.core.blend import composite
from headshotgen.core.geometry import pixel_centres

_SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ]
)
_LUMA = np.array([0.299, 0.587, 0.114])

MONOCHROME_THRESHOLD = 140


def _store_rgb(pixels: np.ndarray, rgb: np.ndarray) -> None:
    pixels[..., :3] = np.rint(np.clip(rgb, 0.0, 255.0)).astype(np.uint8)


def enhance_colors(pixels: np.ndarray) -> None:
    """Raise contrast and saturation by 10%.

    Each channel is first pushed away from mid-grey (``(v-128)*1.1+128``)
    and stored, then pushed away from the pixel's own channel mean by a
    further 10%.
    """
    rgb = pixels[..., :3].astype(np.float64)
    rgb = np.rint(np.clip((rgb - 128.0) * 1.1 + 128.0, 0.0, 255.0))
    mean = rgb.mean(axis=-1, keepdims=True)
    _store_rgb(pixels, rgb + (rgb - mean) * 0.1)


def apply_duotone(pixels: np.ndarray) -> None:
    """Map lightness onto a dark-to-light blue ramp."""
    lightness = pixels[..., :3].astype(np.float64).mean(axis=-1, keepdims=True)
    _store_rgb(pixels, lightness * np.array([0.4, 0.7, 1.2]))


def apply_sepia(pixels: np.ndarray) -> None:
    """Apply the standard sepia matrix."""
    rgb = pixels[..., :3].astype(np.float64)
    _store_rgb(pixels, rgb @ _SEPIA.T)


def apply_monochrome(pixels: np.ndarray, threshold: int = MONOCHROME_THRESHOLD) -> None:
    """Binarise to pure black or white on Rec. 601 luma.

    Pixels with luma above *threshold* become white, all others black.
    """
    luma = pixels[..., :3].astype(np.float64) @ _LUMA
    value = np.where(luma > threshold, 255, 0).astype(np.uint8)
    pixels[..., :3] = value[..., np.newaxis]


def apply_vignette(pixels: np.ndarray) -> None:
    """Darken towards the corners with a radial black overlay.

    The overlay is transparent within 30% of ``min(width, height)`` from
    the centre and reaches 30% opacity at 70%, growing linearly between.
    """
    height, width = pixels.shape[:2]
    xs, ys = pixel_centres(width, height)
    distance = np.hypot(xs - width / 2, ys - height / 2)

    extent = min(width, height)
    inner, outer = extent * 0.3, extent * 0.7
    ramp = np.clip((distance - inner) / (outer - inner), 0.0, 1.0)

    overlay = np.zeros((height, width, 4))
    overlay[..., 3] = 0.3 * ramp

    backdrop = pixels.astype(np.float64) / 255.0
    pixels[...] = np.rint(composite(overlay, backdrop) * 255.0).astype(np.uint8)


def noise_texture(
    width: int,
    height: int,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Return a grey noise layer for paper-like backgrounds.

    Args:
        width: Layer width.
        height: Layer height.
        rng: Random generator; a fresh unseeded one when ``None``.

    Returns:
        ``uint8`` array ``(height, width, 4)``: grey levels 0–19 at a fixed
        alpha of 30.
    """
    rng = rng if rng is not None else np.random.default_rng()
    grey = rng.integers(0, 20, size=(height, width), dtype=np.uint8)
    layer = np.empty((height, width, 4), dtype=np.uint8)
    layer[..., :3] = grey[..., np.newaxis]
    layer[..., 3] = 30
    return layer
