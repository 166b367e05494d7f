"""Application settings loaded from environment and .env files."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from headshotgen.schemas import Variant


# Monochrome is left out of the full batch; it stays reachable through
# single requests.
_DEFAULT_BATCH_VARIANTS = [
    Variant.PROFESSIONAL,
    Variant.ARTISTIC,
    Variant.MINIMAL,
    Variant.BOLD,
    Variant.GRADIENT,
    Variant.DUOTONE,
    Variant.VINTAGE,
]


class Settings(BaseSettings):
    """Global configuration for headshotgen.

    Values are loaded in order: field defaults → .env file → environment
    variables. Environment variables are prefixed with ``HSG_``.

    Attributes:
        supported_formats: Allowed upload image extensions (lowercase,
            without dot).
        max_upload_mb: Maximum upload file size in megabytes.
        max_workers: Thread pool size used to fan out a batch.
        batch_variants: Profile variants rendered by a full batch, in
            slot order.
        font_path: Optional TrueType font used for captions. When unset a
            list of common system fonts is tried, then Pillow's default.
        name_caption: Placeholder name drawn by the ``gradient`` variant.
        classic_banner_caption: Caption of the classic banner layout.
        modern_banner_caption: Caption of the modern banner layout.
        noise_seed: Seed for the vintage noise texture. ``None`` draws a
            fresh texture on every render.
        matte_color_threshold: RGB distance below which a logo pixel is
            treated as background.
        matte_edge_threshold: Sobel magnitude above which a logo pixel is
            treated as an edge and kept opaque.
    """

    model_config = SettingsConfigDict(
        env_prefix="HSG_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Upload ---
    supported_formats: list[str] = ["jpg", "jpeg", "png", "webp", "gif", "bmp"]
    max_upload_mb: float = 10.0

    # --- Batch ---
    max_workers: int = Field(default=4, ge=1, le=32)
    batch_variants: list[Variant] = list(_DEFAULT_BATCH_VARIANTS)

    # --- Text ---
    font_path: Path | None = None
    name_caption: str = "YOUR NAME"
    classic_banner_caption: str = "Professional • Trustworthy • Expert"
    modern_banner_caption: str = "Professional | Creative | Innovative"

    # --- Effects ---
    noise_seed: int | None = None

    # --- Logo matte ---
    matte_color_threshold: float = Field(default=30.0, gt=0.0, le=255.0)
    matte_edge_threshold: float = Field(default=30.0, ge=0.0)
