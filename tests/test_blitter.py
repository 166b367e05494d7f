"""Tests for headshotgen.core.blitter."""

import numpy as np
import pytest

from headshotgen.core.blitter import compute_source_rect, draw_image_prop, smart_crop
from headshotgen.core.canvas import Canvas
from headshotgen.errors import InvalidSourceError
from headshotgen.schemas import RasterImage


def _split_raster(width: int = 200, height: int = 100) -> RasterImage:
    """Left half red, right half blue, fully opaque."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[:, : width // 2, 0] = 255
    pixels[:, width // 2 :, 2] = 255
    return RasterImage(pixels=pixels)


class TestComputeSourceRect:
    """The crop always has the destination's aspect and stays in bounds."""

    def test_wide_source_centred(self) -> None:
        assert compute_source_rect(200, 100, 100, 100) == pytest.approx((50, 0, 100, 100))

    def test_tall_source_centred(self) -> None:
        assert compute_source_rect(100, 200, 100, 100) == pytest.approx((0, 50, 100, 100))

    def test_same_aspect_uses_whole_source(self) -> None:
        assert compute_source_rect(640, 480, 320, 240) == pytest.approx((0, 0, 640, 480))

    @pytest.mark.parametrize(
        "src, dest",
        [
            ((4000, 100), (300, 300)),
            ((100, 4000), (300, 300)),
            ((120, 80), (1584, 396)),
            ((37, 1000), (60, 60)),
            ((1, 1), (500, 500)),
        ],
    )
    def test_aspect_preserved(self, src: tuple[int, int], dest: tuple[int, int]) -> None:
        cx, cy, cw, ch = compute_source_rect(*src, *dest)
        assert cw / ch == pytest.approx(dest[0] / dest[1])
        assert 0 <= cx and cx + cw <= src[0] + 1e-9
        assert 0 <= cy and cy + ch <= src[1] + 1e-9

    def test_extreme_wide_crop(self) -> None:
        cx, cy, cw, ch = compute_source_rect(4000, 100, 300, 300)
        assert (cw, ch) == pytest.approx((100, 100))
        assert cx == pytest.approx(1950)

    def test_offset_zero_keeps_left(self) -> None:
        cx, _, _, _ = compute_source_rect(200, 100, 100, 100, offset_x=0.0)
        assert cx == 0

    def test_offset_one_keeps_right(self) -> None:
        cx, _, cw, _ = compute_source_rect(200, 100, 100, 100, offset_x=1.0)
        assert cx + cw == pytest.approx(200)

    def test_offsets_are_clamped(self) -> None:
        assert compute_source_rect(200, 100, 100, 100, -3.0, 0.5) == compute_source_rect(
            200, 100, 100, 100, 0.0, 0.5
        )
        assert compute_source_rect(200, 100, 100, 100, 7.0, 0.5) == compute_source_rect(
            200, 100, 100, 100, 1.0, 0.5
        )

    @pytest.mark.parametrize("src", [(0, 10), (10, 0)])
    def test_empty_source(self, src: tuple[int, int]) -> None:
        with pytest.raises(InvalidSourceError):
            compute_source_rect(*src, 100, 100)


class TestDrawImageProp:
    """Verify cover-fit placement on a canvas."""

    @pytest.mark.parametrize("region", [(10, 10, 20, 30), (0, 0, 50, 50), (5, 20, 40, 7)])
    def test_covers_exactly_the_region(self, photo: RasterImage, region) -> None:
        x, y, w, h = region
        canvas = Canvas(50, 50)
        draw_image_prop(canvas, photo, *region)
        alpha = canvas.pixels[..., 3]
        assert alpha[y : y + h, x : x + w].min() == 255
        assert alpha.sum() == w * h * 255

    def test_no_distortion(self) -> None:
        """A 2:1 red|blue source cropped to a square keeps both halves."""
        canvas = Canvas(100, 100)
        draw_image_prop(canvas, _split_raster(), 0, 0, 100, 100)
        left = canvas.pixels[50, 10]
        right = canvas.pixels[50, 90]
        assert left[0] > 200 and left[2] < 50
        assert right[2] > 200 and right[0] < 50

    def test_offset_selects_left_edge(self) -> None:
        canvas = Canvas(100, 100)
        draw_image_prop(canvas, _split_raster(), 0, 0, 100, 100, offset=(0.0, 0.5))
        assert canvas.pixels[50, 90, 0] > 200

    def test_partially_offscreen(self, photo: RasterImage) -> None:
        canvas = Canvas(30, 30)
        draw_image_prop(canvas, photo, -20, -20, 60, 60)
        assert canvas.pixels[..., 3].min() == 255

    def test_empty_region_is_noop(self, photo: RasterImage) -> None:
        canvas = Canvas(10, 10)
        draw_image_prop(canvas, photo, 0, 0, 0, 10)
        draw_image_prop(canvas, photo, 0, 0, 10, -4)
        assert canvas.pixels.max() == 0

    def test_empty_source(self) -> None:
        empty = RasterImage(pixels=np.zeros((0, 5, 4), dtype=np.uint8))
        with pytest.raises(InvalidSourceError):
            draw_image_prop(Canvas(10, 10), empty, 0, 0, 10, 10)


class TestSmartCrop:
    """Verify centred cropping to a fixed size."""

    def test_default_size(self, photo: RasterImage) -> None:
        cropped = smart_crop(photo)
        assert cropped.size == (500, 500)
        assert cropped.pixels[..., 3].min() == 255

    def test_custom_size(self, photo: RasterImage) -> None:
        assert smart_crop(photo, 64, 32).size == (64, 32)
