"""Pydantic data contracts shared across modules.

Every cross-module boundary is typed through one of these schemas.
The pipeline flow is::

    bytes (upload)
        → decode_image()              → RasterImage
        → extract_matte(MatteParams)  → RasterImage (logo, once)
        → compositor recipe           → RasterImage
        → encode_png() / data URL     → GeneratedImage
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from PIL import Image
from pydantic import BaseModel, Field, field_validator, model_validator


Color = tuple[int, int, int]
Point = tuple[float, float]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Variant(str, Enum):
    """Style presets for the 500×500 profile picture."""

    PROFESSIONAL = "professional"
    ARTISTIC = "artistic"
    MINIMAL = "minimal"
    BOLD = "bold"
    GRADIENT = "gradient"
    DUOTONE = "duotone"
    VINTAGE = "vintage"
    MONOCHROME = "monochrome"

    @property
    def display_name(self) -> str:
        """Gallery title, e.g. ``"Duotone Headshot"``."""
        return f"{self.value.capitalize()} Headshot"


class ImageKind(str, Enum):
    """Output family: square headshot or wide banner."""

    PROFILE = "profile"
    BANNER = "banner"


class BannerLayout(str, Enum):
    """The two 1584×396 banner layouts."""

    CLASSIC = "classic"
    MODERN = "modern"


class BlendMode(str, Enum):
    """Colour combination rule between a new layer and the canvas."""

    NORMAL = "normal"
    ADD = "add"
    SCREEN = "screen"
    OVERLAY = "overlay"
    LIGHTEN = "lighten"
    DIFFERENCE = "difference"


# ---------------------------------------------------------------------------
# Raster
# ---------------------------------------------------------------------------


class RasterImage(BaseModel):
    """Decoded, immutable RGBA pixel grid.

    Attributes:
        pixels: Read-only ``uint8`` array of shape ``(height, width, 4)``.
            The model keeps its own copy, so callers may keep mutating the
            array they passed in.
    """

    pixels: np.ndarray

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("pixels")
    @classmethod
    def _check_pixels(cls, value: np.ndarray) -> np.ndarray:
        if value.ndim != 3 or value.shape[2] != 4:
            raise ValueError(
                f"Expected an (H, W, 4) RGBA array, got shape {value.shape}."
            )
        if value.dtype != np.uint8:
            raise ValueError(f"Expected dtype uint8, got {value.dtype}.")
        frozen = value.copy()
        frozen.setflags(write=False)
        return frozen

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)``, PIL order."""
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def copy_pixels(self) -> np.ndarray:
        """Return a private, writable copy of the pixel buffer."""
        return self.pixels.copy()

    def to_pil(self) -> Image.Image:
        """Convert to a PIL image in mode ``RGBA``."""
        return Image.fromarray(self.pixels)

    @classmethod
    def from_pil(cls, image: Image.Image) -> RasterImage:
        """Build a raster from any PIL image (converted to ``RGBA``)."""
        return cls(pixels=np.asarray(image.convert("RGBA"), dtype=np.uint8))


# ---------------------------------------------------------------------------
# Logo matte
# ---------------------------------------------------------------------------


class MatteParams(BaseModel):
    """Parameters of the border-colour background matte.

    Attributes:
        color_threshold: RGB distance under which a non-edge pixel becomes
            fully transparent.
        soft_factor: Multiplier of *color_threshold* bounding the partial
            transparency band.
        edge_threshold: Sobel gradient magnitude above which a pixel is an
            edge and is never made transparent.
        border_fraction: Width of the sampled border band, as a fraction of
            the image width (columns) and height (rows).
        bucket_size: Width of the per-channel colour buckets.
    """

    model_config = {"frozen": True}

    color_threshold: float = Field(default=30.0, gt=0.0, le=255.0)
    soft_factor: float = Field(default=1.5, ge=1.0, le=4.0)
    edge_threshold: float = Field(default=30.0, ge=0.0)
    border_fraction: float = Field(default=0.1, gt=0.0, le=0.5)
    bucket_size: int = Field(default=10, ge=1, le=256)


# ---------------------------------------------------------------------------
# Requests and results
# ---------------------------------------------------------------------------


class GenerationRequest(BaseModel):
    """A single ``(type, variant?)`` render request.

    Attributes:
        kind: Profile picture or banner.
        variant: Profile style. ``None`` selects the classic headshot.
        layout: Banner layout. ``None`` selects the classic layout.
    """

    kind: ImageKind
    variant: Variant | None = None
    layout: BannerLayout | None = None

    @model_validator(mode="after")
    def _check_selector(self) -> GenerationRequest:
        if self.kind is ImageKind.BANNER and self.variant is not None:
            raise ValueError("A banner request does not take a variant.")
        if self.kind is ImageKind.PROFILE and self.layout is not None:
            raise ValueError("A profile request does not take a layout.")
        return self


class GeneratedImage(BaseModel):
    """One rendered output handed to the gallery.

    Attributes:
        id: Identifier, unique within a batch.
        url: Self-contained ``data:image/png;base64,...`` URI.
        type: ``profile`` or ``banner``.
        name: Display name for the gallery card.
    """

    id: str
    url: str = Field(..., description="PNG payload as a data URI.")
    type: ImageKind
    name: str

    @property
    def filename(self) -> str:
        """Suggested download file name."""
        return f"linkedin-{self.type.value}-{self.id}.png"

    def png_bytes(self) -> bytes:
        """Decode the data URI back to raw PNG bytes."""
        from headshotgen.core.loader import data_url_to_bytes

        return data_url_to_bytes(self.url)


class TaskFailure(BaseModel):
    """A batch slot that yielded no image.

    Attributes:
        id: Identifier the slot would have had.
        name: Display name the slot would have had.
        message: User-facing notification text.
    """

    id: str
    name: str
    message: str


class BatchResult(BaseModel):
    """Outcome of a full batch.

    ``images`` is in completion order; callers must not rely on position.
    """

    images: list[GeneratedImage] = Field(default_factory=list)
    failures: list[TaskFailure] = Field(default_factory=list)

    def by_kind(self, kind: ImageKind | None = None) -> list[GeneratedImage]:
        """Return the images of one kind, or all of them for ``None``."""
        if kind is None:
            return list(self.images)
        return [image for image in self.images if image.type is kind]
