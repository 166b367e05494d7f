"""Border-colour background matte for logos.

A heuristic, not a segmentation model: the background colour is estimated
from a band along the image border, and pixels close to it are made
transparent unless a Sobel edge runs through them. Logos with large
background-coloured regions or a non-uniform backdrop will be over- or
under-cleaned; that is accepted.

Typical usage::

    from headshotgen.core.matte import extract_matte
    from headshotgen.schemas import MatteParams

    clean_logo = extract_matte(logo, MatteParams(color_threshold=40))
"""

from __future__ import annotations

import logging

import numpy as np

from headshotgen.errors import InvalidSourceError
from headshotgen.schemas import Color, MatteParams, RasterImage

logger = logging.getLogger(__name__)

_WHITE: Color = (255, 255, 255)


# ---------------------------------------------------------------------------
# Background colour estimation
# ---------------------------------------------------------------------------


def border_band(width: int, height: int, fraction: float = 0.1) -> np.ndarray:
    """Boolean ``(height, width)`` mask of the sampled border band.

    Columns within ``fraction * width`` of the left or right edge, and rows
    within ``fraction * height`` of the top or bottom edge, are sampled.
    Width and height are treated independently so that very wide or very
    tall logos still get a band on every side.
    """
    band_x = width * fraction
    band_y = height * fraction
    xs = np.arange(width)
    ys = np.arange(height)
    cols = (xs < band_x) | (xs > width - band_x)
    rows = (ys < band_y) | (ys > height - band_y)
    return rows[:, np.newaxis] | cols[np.newaxis, :]


def estimate_background_color(
    raster: RasterImage,
    params: MatteParams = MatteParams(),
) -> Color:
    """Estimate the dominant colour of the border band.

    Colours are grouped into buckets of ``params.bucket_size`` per channel
    and the most populated bucket wins; on a tie, the bucket sampled first
    in row-major order wins. The winner is represented by the first pixel
    that fell into it.

    Args:
        raster: Logo image.
        params: Matte parameters (band width, bucket size).

    Returns:
        The estimated ``(r, g, b)`` background colour, or white if the band
        is empty.
    """
    band = border_band(raster.width, raster.height, params.border_fraction)
    samples = raster.pixels[..., :3][band]
    if samples.size == 0:
        return _WHITE

    buckets = samples.astype(np.int64) // params.bucket_size
    base = 256 // params.bucket_size + 1
    keys = (buckets[:, 0] * base + buckets[:, 1]) * base + buckets[:, 2]

    _, first_index, counts = np.unique(keys, return_index=True, return_counts=True)
    winner = first_index[counts == counts.max()].min()
    return tuple(int(c) for c in samples[winner])


# ---------------------------------------------------------------------------
# Edge detection
# ---------------------------------------------------------------------------


def detect_edges(raster: RasterImage, threshold: float = 30.0) -> np.ndarray:
    """Mark pixels whose Sobel gradient magnitude exceeds *threshold*.

    The gradient is taken on the mean of R, G and B. Only interior pixels
    are evaluated; the outermost rows and columns are never edges.

    Args:
        raster: Image to analyse.
        threshold: Minimum gradient magnitude (exclusive).

    Returns:
        Boolean array of shape ``(height, width)``.
    """
    edges = np.zeros((raster.height, raster.width), dtype=bool)
    if raster.height < 3 or raster.width < 3:
        return edges

    gray = raster.pixels[..., :3].astype(np.float64).mean(axis=2)
    tl, t, tr = gray[:-2, :-2], gray[:-2, 1:-1], gray[:-2, 2:]
    l, r = gray[1:-1, :-2], gray[1:-1, 2:]
    bl, b, br = gray[2:, :-2], gray[2:, 1:-1], gray[2:, 2:]

    gx = -tl - 2 * l - bl + tr + 2 * r + br
    gy = -tl - 2 * t - tr + bl + 2 * b + br
    edges[1:-1, 1:-1] = np.hypot(gx, gy) > threshold
    return edges


# ---------------------------------------------------------------------------
# Matte
# ---------------------------------------------------------------------------


def extract_matte(
    raster: RasterImage,
    params: MatteParams = MatteParams(),
) -> RasterImage:
    """Make the logo background transparent while keeping its outlines.

    For each pixel, with ``d`` the RGB distance to the estimated background
    and ``t = params.color_threshold``:

    - ``d < t`` and not an edge: alpha becomes 0.
    - ``d < t * soft_factor`` and not an edge: alpha becomes
      ``min(255, round(d / t * 255))``.
    - otherwise alpha is left as is.

    RGB channels are never modified and *raster* is not mutated.

    Args:
        raster: Logo image.
        params: Matte parameters.

    Returns:
        A new ``RasterImage`` of the same size.

    Raises:
        InvalidSourceError: If *raster* has a zero dimension.
    """
    if raster.is_empty:
        raise InvalidSourceError(
            f"Cannot matte an empty {raster.width}x{raster.height} logo."
        )

    background = estimate_background_color(raster, params)
    edges = detect_edges(raster, params.edge_threshold)

    rgb = raster.pixels[..., :3].astype(np.float64)
    distance = np.sqrt(((rgb - np.asarray(background, dtype=np.float64)) ** 2).sum(axis=2))

    threshold = params.color_threshold
    clear = (distance < threshold) & ~edges
    soft = (distance < threshold * params.soft_factor) & ~edges & ~clear

    pixels = raster.copy_pixels()
    alpha = pixels[..., 3]
    alpha[clear] = 0
    soft_alpha = np.minimum(255.0, np.floor(distance / threshold * 255.0 + 0.5))
    alpha[soft] = soft_alpha[soft].astype(np.uint8)

    logger.debug(
        "Matte: background %s, %d edge px, %d cleared, %d softened",
        background,
        int(edges.sum()),
        int(clear.sum()),
        int(soft.sum()),
    )
    return RasterImage(pixels=pixels)
