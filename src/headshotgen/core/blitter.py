"""Aspect-preserving image placement.

``draw_image_prop`` scales a source raster so that it *covers* the
destination rectangle, crops the overflow (centred by default) and draws
the result. The aspect ratio of the source is never distorted and the
destination is never letterboxed.
"""

from __future__ import annotations

import logging

from PIL import Image

from headshotgen.core.canvas import DEFAULT_STATE, Canvas, DrawState
from headshotgen.errors import InvalidSourceError
from headshotgen.schemas import RasterImage

logger = logging.getLogger(__name__)


def compute_source_rect(
    src_w: float,
    src_h: float,
    dest_w: float,
    dest_h: float,
    offset_x: float = 0.5,
    offset_y: float = 0.5,
) -> tuple[float, float, float, float]:
    """Compute the source crop rectangle that fills the destination.

    Args:
        src_w: Source width.
        src_h: Source height.
        dest_w: Destination width.
        dest_h: Destination height.
        offset_x: Horizontal crop bias in ``[0, 1]``; ``0.5`` centres,
            ``0`` keeps the left edge.
        offset_y: Vertical crop bias in ``[0, 1]``.

    Returns:
        ``(cx, cy, cw, ch)`` in source pixel coordinates. The crop has the
        destination's aspect ratio and lies within the source bounds.

    Raises:
        InvalidSourceError: If the source has a zero dimension.
    """
    if src_w <= 0 or src_h <= 0:
        raise InvalidSourceError(f"Cannot draw an empty {src_w}x{src_h} source.")

    offset_x = min(max(offset_x, 0.0), 1.0)
    offset_y = min(max(offset_y, 0.0), 1.0)

    r = min(dest_w / src_w, dest_h / src_h)
    nw = src_w * r
    nh = src_h * r

    # Grow the fit scale into a fill scale along the gap that remains.
    ar = 1.0
    if nw < dest_w:
        ar = dest_w / nw
    if abs(ar - 1.0) < 1e-14 and nh < dest_h:
        ar = dest_h / nh
    nw *= ar
    nh *= ar

    cw = src_w / (nw / dest_w)
    ch = src_h / (nh / dest_h)
    cx = (src_w - cw) * offset_x
    cy = (src_h - ch) * offset_y

    cw = min(cw, src_w)
    ch = min(ch, src_h)
    cx = min(max(cx, 0.0), src_w - cw)
    cy = min(max(cy, 0.0), src_h - ch)
    return cx, cy, cw, ch


def fit_image(
    source: RasterImage,
    width: int,
    height: int,
    offset: tuple[float, float] = (0.5, 0.5),
) -> Image.Image:
    """Return *source* cropped and resampled to exactly ``width×height``.

    Raises:
        InvalidSourceError: If *source* is empty.
    """
    cx, cy, cw, ch = compute_source_rect(
        source.width, source.height, width, height, *offset
    )
    box = (
        cx,
        cy,
        min(cx + cw, float(source.width)),
        min(cy + ch, float(source.height)),
    )
    return source.to_pil().resize((width, height), Image.BICUBIC, box=box)


def draw_image_prop(
    canvas: Canvas,
    source: RasterImage,
    x: float,
    y: float,
    w: float,
    h: float,
    offset: tuple[float, float] = (0.5, 0.5),
    state: DrawState = DEFAULT_STATE,
) -> None:
    """Draw *source* into the ``(x, y, w, h)`` region without distortion.

    Args:
        canvas: Destination surface. Regions outside it are clipped.
        source: Image to place.
        x: Left edge of the destination region.
        y: Top edge of the destination region.
        w: Destination width.
        h: Destination height.
        offset: ``(offset_x, offset_y)`` crop bias, see
            ``compute_source_rect``.
        state: Clip, opacity and blend mode for the draw.

    Raises:
        InvalidSourceError: If *source* is empty.
    """
    if source.is_empty:
        raise InvalidSourceError(
            f"Cannot draw an empty {source.width}x{source.height} source."
        )

    dest_w, dest_h = round(w), round(h)
    if dest_w <= 0 or dest_h <= 0:
        logger.debug("Skipping blit into empty region %sx%s.", w, h)
        return

    fitted = fit_image(source, dest_w, dest_h, offset)
    canvas.draw_image(fitted, (round(x), round(y)), state)


def smart_crop(source: RasterImage, width: int = 500, height: int = 500) -> RasterImage:
    """Centre-crop *source* to a ``width×height`` raster.

    No face detection is involved; the crop is always centred.

    Raises:
        InvalidSourceError: If *source* is empty.
        RenderTargetError: If the target size is not positive.
    """
    canvas = Canvas(width, height)
    draw_image_prop(canvas, source, 0, 0, width, height)
    return canvas.to_raster()
