"""Batch and single-request entry points.

This is the in-process boundary the UI talks to. Inputs are raw image
bytes; outputs are ``GeneratedImage`` records carrying PNG data URIs.

A batch decodes both inputs once, mattes the logo once, then renders every
slot on a thread pool. The decoded rasters are read-only and shared; each
recipe draws on its own canvas. A failing slot is logged and reported in
``BatchResult.failures`` without affecting the others.

Typical usage::

    from headshotgen.core.generator import generate_batch

    result = generate_batch(photo_bytes, logo_bytes)
    for image in result.by_kind(ImageKind.BANNER):
        ...
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from headshotgen.config import Settings
from headshotgen.core.blitter import smart_crop
from headshotgen.core.compositors import (
    CLASSIC_PROFILE_NAME,
    Recipe,
    banner_name,
    get_banner_recipe,
    get_profile_recipe,
)
from headshotgen.core.loader import decode_image, encode_png, to_data_url
from headshotgen.core.matte import extract_matte
from headshotgen.errors import BatchGenerationError, HeadshotError
from headshotgen.schemas import (
    BannerLayout,
    BatchResult,
    GeneratedImage,
    GenerationRequest,
    ImageKind,
    MatteParams,
    RasterImage,
    TaskFailure,
    Variant,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderTask:
    """One output slot: identity, display metadata and the recipe to run."""

    id: str
    name: str
    kind: ImageKind
    recipe: Recipe
    failure_message: str

    def failure(self, message: str | None = None) -> TaskFailure:
        return TaskFailure(id=self.id, name=self.name, message=message or self.failure_message)


def profile_task(variant: Variant | None) -> RenderTask:
    """Build the task for a profile *variant* (``None`` for classic)."""
    if variant is None:
        return RenderTask(
            id="profile-classic",
            name=CLASSIC_PROFILE_NAME,
            kind=ImageKind.PROFILE,
            recipe=get_profile_recipe(None),
            failure_message="Failed to generate classic profile",
        )
    return RenderTask(
        id=f"profile-{variant.value}",
        name=variant.display_name,
        kind=ImageKind.PROFILE,
        recipe=get_profile_recipe(variant),
        failure_message=f"Failed to generate {variant.value} profile",
    )


def banner_task(layout: BannerLayout) -> RenderTask:
    """Build the task for a banner *layout*."""
    return RenderTask(
        id=f"banner-{layout.value}",
        name=banner_name(layout),
        kind=ImageKind.BANNER,
        recipe=get_banner_recipe(layout),
        failure_message=f"Failed to generate {layout.value} banner",
    )


def batch_tasks(settings: Settings) -> list[RenderTask]:
    """All slots of a full batch: configured variants, then both banners."""
    tasks = [profile_task(variant) for variant in dict.fromkeys(settings.batch_variants)]
    tasks.extend(banner_task(layout) for layout in BannerLayout)
    return tasks


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def prepare_logo(logo: RasterImage, settings: Settings) -> RasterImage:
    """Remove the logo background with the configured matte thresholds."""
    params = MatteParams(
        color_threshold=settings.matte_color_threshold,
        edge_threshold=settings.matte_edge_threshold,
    )
    return extract_matte(logo, params)


def render(
    task: RenderTask,
    profile: RasterImage,
    logo: RasterImage,
    settings: Settings,
) -> GeneratedImage:
    """Run a single task and encode its output.

    Args:
        task: Slot to render.
        profile: Decoded profile photo.
        logo: Matted logo.
        settings: Application settings.

    Returns:
        The encoded ``GeneratedImage``.
    """
    raster = task.recipe(profile, logo, settings)
    return GeneratedImage(
        id=task.id,
        url=to_data_url(encode_png(raster)),
        type=task.kind,
        name=task.name,
    )


def generate(
    request: GenerationRequest,
    profile_blob: bytes,
    logo_blob: bytes,
    settings: Settings | None = None,
) -> GeneratedImage:
    """Render a single ``(type, variant?)`` request.

    A profile request without a variant renders the classic headshot; a
    banner request without a layout renders the classic banner.

    Raises:
        DecodeError: If either blob cannot be decoded.
        InvalidSourceError: If a decoded image is empty.
        RenderTargetError: If the output surface cannot be allocated.
    """
    settings = settings or Settings()
    if request.kind is ImageKind.PROFILE:
        task = profile_task(request.variant)
    else:
        task = banner_task(request.layout or BannerLayout.CLASSIC)

    profile = decode_image(profile_blob)
    logo = prepare_logo(decode_image(logo_blob), settings)
    return render(task, profile, logo, settings)


def generate_batch(
    profile_blob: bytes | None,
    logo_blob: bytes | None,
    settings: Settings | None = None,
) -> BatchResult:
    """Render every configured profile variant plus both banner layouts.

    Slots run concurrently and are collected in completion order. A slot
    that fails is logged and recorded in ``failures``; the rest of the
    batch carries on.

    Args:
        profile_blob: Encoded profile photo.
        logo_blob: Encoded company logo.
        settings: Application settings. Defaults to ``Settings()``.

    Returns:
        A ``BatchResult`` with at least one image.

    Raises:
        BatchGenerationError: If an input is missing or unreadable, or if no
            slot produced an image.
    """
    settings = settings or Settings()
    if not profile_blob or not logo_blob:
        raise BatchGenerationError("Please upload both your profile photo and company logo.")

    tasks = batch_tasks(settings)

    # Every recipe needs both the photo and the logo, so an unreadable
    # input skips the whole batch.
    try:
        profile = decode_image(profile_blob)
        logo = prepare_logo(decode_image(logo_blob), settings)
    except HeadshotError as exc:
        logger.warning("Batch inputs unusable: %s", exc)
        raise BatchGenerationError(
            f"Could not read the uploaded images: {exc}",
            failures=[task.failure() for task in tasks],
        ) from exc

    images: list[GeneratedImage] = []
    failures: list[TaskFailure] = []

    with ThreadPoolExecutor(
        max_workers=settings.max_workers, thread_name_prefix="headshotgen"
    ) as pool:
        futures = {
            pool.submit(render, task, profile, logo, settings): task for task in tasks
        }
        for future in as_completed(futures):
            task = futures[future]
            try:
                images.append(future.result())
            except HeadshotError as exc:
                logger.warning("%s: %s", task.failure_message, exc)
                failures.append(task.failure())
            except Exception:
                logger.exception(task.failure_message)
                failures.append(task.failure())

    logger.info(
        "Batch finished: %d image(s), %d failure(s)", len(images), len(failures)
    )
    if not images:
        raise BatchGenerationError(
            "Failed to generate images. Please try again.", failures=failures
        )
    return BatchResult(images=images, failures=failures)


def smart_crop_image(blob: bytes, width: int = 500, height: int = 500) -> str:
    """Centre-crop an uploaded photo and return it as a PNG data URI.

    Raises:
        DecodeError: If *blob* cannot be decoded.
        InvalidSourceError: If the decoded image is empty.
    """
    return to_data_url(encode_png(smart_crop(decode_image(blob), width, height)))
