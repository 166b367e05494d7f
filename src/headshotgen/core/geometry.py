"""Clip shapes expressed as geometric predicates.

Each shape answers ``contains(x, y)`` for scalars or numpy arrays, and can
rasterise itself into a boolean mask sampled at pixel centres. The same
predicate therefore drives both clipping and mask-boundary tests.
"""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field

from headshotgen.schemas import Point


def pixel_centres(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(xs, ys)`` grids of pixel-centre coordinates."""
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    return xs + 0.5, ys + 0.5


class Circle(BaseModel):
    """Disc of *radius* around *center*, boundary included."""

    model_config = {"frozen": True}

    center: Point
    radius: float = Field(..., ge=0.0)

    def contains(self, x, y) -> np.ndarray:
        cx, cy = self.center
        dx = np.asarray(x, dtype=np.float64) - cx
        dy = np.asarray(y, dtype=np.float64) - cy
        return dx * dx + dy * dy <= self.radius * self.radius

    def mask(self, width: int, height: int) -> np.ndarray:
        return self.contains(*pixel_centres(width, height))


class Polygon(BaseModel):
    """Simple polygon, even-odd fill rule."""

    model_config = {"frozen": True}

    vertices: tuple[Point, ...] = Field(..., min_length=3)

    def contains(self, x, y) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        inside = np.zeros(np.broadcast(x, y).shape, dtype=bool)

        j = len(self.vertices) - 1
        for i, (xi, yi) in enumerate(self.vertices):
            xj, yj = self.vertices[j]
            crosses = (yi > y) != (yj > y)
            # Horizontal edges never cross; their nan/inf is masked out.
            with np.errstate(divide="ignore", invalid="ignore"):
                x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            inside ^= crosses & (x < x_cross)
            j = i
        return inside

    def mask(self, width: int, height: int) -> np.ndarray:
        return self.contains(*pixel_centres(width, height))


def point_in_circle(point: Point, center: Point, radius: float) -> bool:
    """Return ``True`` if *point* lies inside or on the circle."""
    return bool(Circle(center=center, radius=radius).contains(*point))


def point_in_polygon(point: Point, vertices: tuple[Point, ...] | list[Point]) -> bool:
    """Return ``True`` if *point* lies inside the polygon (even-odd rule)."""
    return bool(Polygon(vertices=tuple(vertices)).contains(*point))


ClipShape = Circle | Polygon
