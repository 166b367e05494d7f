"""Blending module.

Blend functions follow the separable modes of the W3C compositing
recommendation: each takes the normalised source colour ``Cs`` and
backdrop colour ``Cb`` (arrays in ``[0, 1]``) and returns the blended
colour. ``composite`` then mixes the result with the backdrop according to
the backdrop alpha and lays it over the canvas with source-over.

See https://www.w3.org/TR/compositing/#blending
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from headshotgen.schemas import BlendMode

logger = logging.getLogger(__name__)

BlendFunction = Callable[[np.ndarray, np.ndarray], np.ndarray]

BLEND_FUNCTIONS: dict[BlendMode, BlendFunction] = {}


def register(mode: BlendMode) -> Callable[[BlendFunction], BlendFunction]:
    """Decorator adding a blend function to ``BLEND_FUNCTIONS``."""

    def decorator(func: BlendFunction) -> BlendFunction:
        BLEND_FUNCTIONS[mode] = func
        return func

    return decorator


@register(BlendMode.NORMAL)
def _normal(Cs, Cb):
    return Cs


@register(BlendMode.ADD)
def _add(Cs, Cb):
    return np.minimum(1.0, Cs + Cb)


@register(BlendMode.SCREEN)
def _screen(Cs, Cb):
    return Cb + Cs - Cb * Cs


def _multiply(Cs, Cb):
    return Cs * Cb


def _hard_light(Cs, Cb):
    return np.where(Cs > 0.5, _screen(2.0 * Cs - 1.0, Cb), _multiply(2.0 * Cs, Cb))


@register(BlendMode.OVERLAY)
def _overlay(Cs, Cb):
    return _hard_light(Cb, Cs)


@register(BlendMode.LIGHTEN)
def _lighten(Cs, Cb):
    return np.maximum(Cs, Cb)


@register(BlendMode.DIFFERENCE)
def _difference(Cs, Cb):
    return np.abs(Cb - Cs)


def composite(
    source: np.ndarray,
    backdrop: np.ndarray,
    mode: BlendMode = BlendMode.NORMAL,
) -> np.ndarray:
    """Blend *source* onto *backdrop* and composite with source-over.

    Both arrays hold straight (non-premultiplied) RGBA in ``[0, 1]`` with
    channels on the last axis; any leading shape is accepted.

    Args:
        source: Layer being drawn.
        backdrop: Existing canvas content.
        mode: Colour combination rule.

    Returns:
        A new float array of the same shape, straight RGBA in ``[0, 1]``.
    """
    Cs, As = source[..., :3], source[..., 3:4]
    Cb, Ab = backdrop[..., :3], backdrop[..., 3:4]

    if mode is not BlendMode.NORMAL:
        Cs = (1.0 - Ab) * Cs + Ab * BLEND_FUNCTIONS[mode](Cs, Cb)

    Ao = As + Ab * (1.0 - As)
    premultiplied = As * Cs + Ab * Cb * (1.0 - As)
    Co = np.divide(
        premultiplied,
        Ao,
        out=np.zeros_like(premultiplied),
        where=Ao > 0.0,
    )
    return np.clip(np.concatenate([Co, Ao], axis=-1), 0.0, 1.0)


def blend_pixel(
    source: tuple[int, int, int, int],
    backdrop: tuple[int, int, int, int],
    mode: BlendMode = BlendMode.NORMAL,
) -> tuple[int, int, int, int]:
    """Byte-level form of ``composite`` for a single RGBA pixel.

    Args:
        source: ``(r, g, b, a)`` of the pixel being drawn, 0–255.
        backdrop: ``(r, g, b, a)`` already on the canvas, 0–255.
        mode: Colour combination rule.

    Returns:
        The resulting ``(r, g, b, a)``, 0–255.
    """
    src = np.asarray(source, dtype=np.float64) / 255.0
    dst = np.asarray(backdrop, dtype=np.float64) / 255.0
    out = np.rint(composite(src, dst, mode) * 255.0).astype(np.uint8)
    return tuple(int(v) for v in out)
