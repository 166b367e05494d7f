"""Fixed-size RGBA drawing surface.

Drawing state is never ambient: every primitive takes an explicit,
immutable ``DrawState`` (clip region, global alpha, blend mode), and the
``with_*`` helpers derive modified copies. Shapes and text are first
rendered with ``PIL.ImageDraw`` onto a transparent full-canvas layer, then
the layer is composited through ``blend.composite``.

Typical usage::

    canvas = Canvas(500, 500)
    circle = DrawState(clip=Circle(center=(250, 250), radius=250))
    canvas.fill((29, 78, 216), circle)
    raster = canvas.to_raster()
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont
from pydantic import BaseModel, Field

from headshotgen.core.blend import composite
from headshotgen.core.geometry import ClipShape, pixel_centres
from headshotgen.errors import RenderTargetError
from headshotgen.schemas import BlendMode, Point, RasterImage

logger = logging.getLogger(__name__)

ColorLike = str | tuple[int, ...]


def parse_color(color: ColorLike) -> tuple[int, int, int, int]:
    """Normalise a CSS colour string or RGB(A) tuple to an RGBA tuple."""
    if isinstance(color, str):
        color = ImageColor.getcolor(color, "RGBA")
    if len(color) == 3:
        return (*color, 255)
    return tuple(color)


# ---------------------------------------------------------------------------
# Draw state
# ---------------------------------------------------------------------------


class DrawState(BaseModel):
    """Explicit drawing state threaded through every draw call.

    Attributes:
        clip: Region outside of which nothing is drawn. ``None`` means the
            whole canvas.
        alpha: Global opacity multiplier in ``[0, 1]``.
        blend_mode: Colour combination rule with existing content.
    """

    model_config = {"frozen": True}

    clip: ClipShape | None = None
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)
    blend_mode: BlendMode = BlendMode.NORMAL

    def with_clip(self, clip: ClipShape | None) -> DrawState:
        return DrawState(clip=clip, alpha=self.alpha, blend_mode=self.blend_mode)

    def with_alpha(self, alpha: float) -> DrawState:
        return DrawState(clip=self.clip, alpha=alpha, blend_mode=self.blend_mode)

    def with_blend(self, mode: BlendMode) -> DrawState:
        return DrawState(clip=self.clip, alpha=self.alpha, blend_mode=mode)


DEFAULT_STATE = DrawState()


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------


class Canvas:
    """RGBA surface owned by a single compositor invocation.

    The surface starts fully transparent. Its size is fixed at creation and
    every draw is clipped to it.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.

    Raises:
        RenderTargetError: If the size is not positive or the buffer cannot
            be allocated.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise RenderTargetError(f"Invalid canvas size {width}x{height}.")
        try:
            self._pixels = np.zeros((height, width, 4), dtype=np.uint8)
        except MemoryError as exc:
            raise RenderTargetError(
                f"Cannot allocate a {width}x{height} canvas: {exc}"
            ) from exc
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def pixels(self) -> np.ndarray:
        """The live ``(height, width, 4)`` buffer; pixel filters edit it in place."""
        return self._pixels

    def to_raster(self) -> RasterImage:
        """Snapshot the surface as an immutable ``RasterImage``."""
        return RasterImage(pixels=self._pixels)

    # ---- Compositing -------------------------------------------------------

    def draw_layer(self, layer: np.ndarray, state: DrawState = DEFAULT_STATE) -> None:
        """Composite a full-canvas RGBA layer under *state*.

        Args:
            layer: ``uint8`` or float (0–255) array of shape
                ``(height, width, 4)``.
            state: Clip, opacity and blend mode to apply.
        """
        if layer.shape != self._pixels.shape:
            raise ValueError(
                f"Layer shape {layer.shape} does not match canvas {self._pixels.shape}."
            )

        source = layer.astype(np.float64) / 255.0
        coverage = np.full((self._height, self._width), state.alpha)
        if state.clip is not None:
            coverage = coverage * state.clip.mask(self._width, self._height)
        source[..., 3] *= coverage

        backdrop = self._pixels.astype(np.float64) / 255.0
        result = composite(source, backdrop, state.blend_mode)
        self._pixels[...] = np.rint(result * 255.0).astype(np.uint8)

    def draw_image(
        self,
        image: Image.Image,
        position: tuple[int, int],
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Composite a PIL image with its top-left corner at *position*.

        Parts falling outside the canvas, including negative offsets, are
        dropped.
        """
        layer = self._new_layer()
        layer.paste(image.convert("RGBA"), position)
        self.draw_layer(np.asarray(layer), state)

    # ---- Fills -------------------------------------------------------------

    def fill(self, color: ColorLike, state: DrawState = DEFAULT_STATE) -> None:
        """Fill the whole canvas (subject to the clip)."""
        rgba = parse_color(color)
        layer = np.empty_like(self._pixels)
        layer[...] = rgba
        self.draw_layer(layer, state)

    def fill_rect(
        self,
        box: tuple[float, float, float, float],
        color: ColorLike,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Fill the ``(x, y, w, h)`` rectangle."""
        x, y, w, h = box
        if w <= 0 or h <= 0:
            return
        layer = self._new_layer()
        ImageDraw.Draw(layer).rectangle(
            [x, y, x + w - 1, y + h - 1], fill=parse_color(color)
        )
        self.draw_layer(np.asarray(layer), state)

    def fill_linear_gradient(
        self,
        start: Point,
        end: Point,
        start_color: ColorLike,
        end_color: ColorLike,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Fill the canvas with a two-stop linear gradient along *start*→*end*.

        Colours are interpolated in straight RGBA; pixels beyond either end
        take the nearest stop colour.
        """
        xs, ys = pixel_centres(self._width, self._height)
        dx, dy = end[0] - start[0], end[1] - start[1]
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            t = np.zeros_like(xs)
        else:
            t = ((xs - start[0]) * dx + (ys - start[1]) * dy) / length_sq
        t = np.clip(t, 0.0, 1.0)[..., np.newaxis]

        c0 = np.asarray(parse_color(start_color), dtype=np.float64)
        c1 = np.asarray(parse_color(end_color), dtype=np.float64)
        self.draw_layer(c0 + (c1 - c0) * t, state)

    # ---- Strokes -----------------------------------------------------------

    def stroke_circle(
        self,
        center: Point,
        radius: float,
        color: ColorLike,
        width: int,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Stroke a circle outline of *width* centred on the path."""
        half = width / 2
        cx, cy = center
        outer = radius + half
        layer = self._new_layer()
        ImageDraw.Draw(layer).ellipse(
            [cx - outer, cy - outer, cx + outer, cy + outer],
            outline=parse_color(color),
            width=width,
        )
        self.draw_layer(np.asarray(layer), state)

    def stroke_rect(
        self,
        box: tuple[float, float, float, float],
        color: ColorLike,
        width: int,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Stroke the ``(x, y, w, h)`` rectangle outline, centred on the path."""
        x, y, w, h = box
        half = width / 2
        layer = self._new_layer()
        ImageDraw.Draw(layer).rectangle(
            [x - half, y - half, x + w + half - 1, y + h + half - 1],
            outline=parse_color(color),
            width=width,
        )
        self.draw_layer(np.asarray(layer), state)

    def line(
        self,
        start: Point,
        end: Point,
        color: ColorLike,
        width: int = 1,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        layer = self._new_layer()
        ImageDraw.Draw(layer).line([start, end], fill=parse_color(color), width=width)
        self.draw_layer(np.asarray(layer), state)

    # ---- Text --------------------------------------------------------------

    def text(
        self,
        text: str,
        anchor: Point,
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        color: ColorLike,
        state: DrawState = DEFAULT_STATE,
    ) -> None:
        """Draw *text* horizontally centred on *anchor*, sitting on its baseline.

        Descenders extend below the baseline. Requires a FreeType font, which
        ``load_font`` returns whenever Pillow is built with FreeType.
        """
        layer = self._new_layer()
        ImageDraw.Draw(layer).text(
            anchor, text, font=font, fill=parse_color(color), anchor="ms"
        )
        self.draw_layer(np.asarray(layer), state)

    def _new_layer(self) -> Image.Image:
        return Image.new("RGBA", (self._width, self._height), (0, 0, 0, 0))
