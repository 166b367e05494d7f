"""Recipe registry: maps style selectors to compositor functions.

Adding a new profile style requires two steps:

1. Add a member to ``Variant`` in ``headshotgen.schemas``.
2. Write a recipe with the ``Recipe`` signature
   ``(profile, logo, settings) -> RasterImage`` and register it below.

Typical usage::

    from headshotgen.core.compositors import get_profile_recipe

    recipe = get_profile_recipe(Variant.DUOTONE)
    raster = recipe(profile, matted_logo, settings)
"""

from __future__ import annotations

from headshotgen.core.compositors import banners, profiles
from headshotgen.core.compositors._base import BANNER_SIZE, PROFILE_SIZE, Recipe
from headshotgen.schemas import BannerLayout, Variant

# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

_PROFILE_RECIPES: dict[Variant, Recipe] = {
    Variant.PROFESSIONAL: profiles.compose_professional,
    Variant.ARTISTIC: profiles.compose_artistic,
    Variant.MINIMAL: profiles.compose_minimal,
    Variant.BOLD: profiles.compose_bold,
    Variant.GRADIENT: profiles.compose_gradient,
    Variant.DUOTONE: profiles.compose_duotone,
    Variant.VINTAGE: profiles.compose_vintage,
    Variant.MONOCHROME: profiles.compose_monochrome,
}

_BANNER_RECIPES: dict[BannerLayout, tuple[str, Recipe]] = {
    BannerLayout.CLASSIC: ("Professional LinkedIn Banner", banners.compose_classic_banner),
    BannerLayout.MODERN: ("Modern LinkedIn Banner", banners.compose_modern_banner),
}

CLASSIC_PROFILE_NAME = "Classic Headshot"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_profile_recipe(variant: Variant | None) -> Recipe:
    """Return the recipe for *variant*, or the classic headshot for ``None``.

    Raises:
        ValueError: If *variant* has no registered recipe.
    """
    if variant is None:
        return profiles.compose_classic
    try:
        return _PROFILE_RECIPES[variant]
    except KeyError:
        raise ValueError(
            f"Unknown variant '{variant}'. "
            f"Registered: {sorted(v.value for v in _PROFILE_RECIPES)}"
        ) from None


def get_banner_recipe(layout: BannerLayout) -> Recipe:
    """Return the recipe for a banner *layout*."""
    return _BANNER_RECIPES[layout][1]


def banner_name(layout: BannerLayout) -> str:
    """Gallery title of a banner *layout*."""
    return _BANNER_RECIPES[layout][0]


# Re-export key types for convenience.
__all__ = [
    "BANNER_SIZE",
    "CLASSIC_PROFILE_NAME",
    "PROFILE_SIZE",
    "Recipe",
    "banner_name",
    "get_banner_recipe",
    "get_profile_recipe",
]
