"""Tests for headshotgen.core.generator."""

import io

import pytest
from PIL import Image

from headshotgen.config import Settings
from headshotgen.core import compositors
from headshotgen.core.generator import (
    batch_tasks,
    generate,
    generate_batch,
    smart_crop_image,
)
from headshotgen.core.loader import data_url_to_bytes
from headshotgen.errors import BatchGenerationError, DecodeError, RenderTargetError
from headshotgen.schemas import (
    BannerLayout,
    GenerationRequest,
    ImageKind,
    Variant,
)


def _boom(*args, **kwargs):
    raise RenderTargetError("simulated allocation failure")


def _crash(*args, **kwargs):
    raise RuntimeError("unexpected")


def _size(url: str) -> tuple[int, int]:
    with Image.open(io.BytesIO(data_url_to_bytes(url))) as image:
        return image.size


class TestBatchTasks:
    """Validate batch slot construction."""

    def test_default_slots(self, settings: Settings) -> None:
        ids = [task.id for task in batch_tasks(settings)]
        assert len(ids) == 9
        assert ids[-2:] == ["banner-classic", "banner-modern"]
        assert "profile-monochrome" not in ids

    def test_duplicates_collapsed(self) -> None:
        settings = Settings(batch_variants=[Variant.BOLD, Variant.BOLD])
        assert [t.id for t in batch_tasks(settings)] == [
            "profile-bold",
            "banner-classic",
            "banner-modern",
        ]


class TestGenerateBatch:
    """End-to-end batch generation and failure reporting."""

    def test_full_batch(self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings) -> None:
        result = generate_batch(photo_bytes, logo_bytes, settings)
        ids = [image.id for image in result.images]
        assert len(ids) == 9
        assert len(set(ids)) == len(ids)
        assert len(result.by_kind(ImageKind.BANNER)) == 2
        assert result.failures == []

    def test_output_sizes(self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings) -> None:
        for image in generate_batch(photo_bytes, logo_bytes, settings).images:
            expected = (500, 500) if image.type is ImageKind.PROFILE else (1584, 396)
            assert _size(image.url) == expected

    @pytest.mark.parametrize("missing", ["profile", "logo"])
    def test_missing_input(self, missing: str, photo_bytes: bytes, logo_bytes: bytes) -> None:
        profile = None if missing == "profile" else photo_bytes
        logo = b"" if missing == "logo" else logo_bytes
        with pytest.raises(BatchGenerationError, match="Please upload both"):
            generate_batch(profile, logo)

    def test_unreadable_logo(self, photo_bytes: bytes, settings: Settings) -> None:
        with pytest.raises(BatchGenerationError) as exc_info:
            generate_batch(photo_bytes, b"not an image", settings)
        assert len(exc_info.value.failures) == 9
        assert isinstance(exc_info.value.__cause__, DecodeError)

    @pytest.mark.parametrize("recipe", [_boom, _crash])
    def test_failed_slot_does_not_stop_batch(
        self,
        recipe,
        monkeypatch: pytest.MonkeyPatch,
        photo_bytes: bytes,
        logo_bytes: bytes,
        settings: Settings,
    ) -> None:
        monkeypatch.setitem(compositors._PROFILE_RECIPES, Variant.BOLD, recipe)
        result = generate_batch(photo_bytes, logo_bytes, settings)
        assert len(result.images) == 8
        assert [f.id for f in result.failures] == ["profile-bold"]
        assert result.failures[0].message == "Failed to generate bold profile"

    def test_nothing_rendered(
        self,
        monkeypatch: pytest.MonkeyPatch,
        photo_bytes: bytes,
        logo_bytes: bytes,
    ) -> None:
        for layout in BannerLayout:
            monkeypatch.setitem(compositors._BANNER_RECIPES, layout, ("x", _boom))
        settings = Settings(batch_variants=[], noise_seed=1)
        with pytest.raises(BatchGenerationError, match="Failed to generate images") as exc_info:
            generate_batch(photo_bytes, logo_bytes, settings)
        assert len(exc_info.value.failures) == 2


class TestGenerate:
    """Validate single-image requests."""

    def test_profile_variant(self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings) -> None:
        request = GenerationRequest(kind=ImageKind.PROFILE, variant=Variant.MONOCHROME)
        image = generate(request, photo_bytes, logo_bytes, settings)
        assert image.id == "profile-monochrome"
        assert image.name == "Monochrome Headshot"
        assert image.filename == "linkedin-profile-profile-monochrome.png"
        assert _size(image.url) == (500, 500)

    def test_profile_without_variant_is_classic(
        self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings
    ) -> None:
        image = generate(GenerationRequest(kind="profile"), photo_bytes, logo_bytes, settings)
        assert image.id == "profile-classic"
        assert image.name == "Classic Headshot"

    def test_banner_defaults_to_classic(
        self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings
    ) -> None:
        image = generate(GenerationRequest(kind="banner"), photo_bytes, logo_bytes, settings)
        assert image.id == "banner-classic"
        assert image.type is ImageKind.BANNER
        assert _size(image.url) == (1584, 396)

    def test_modern_banner(self, photo_bytes: bytes, logo_bytes: bytes, settings: Settings) -> None:
        request = GenerationRequest(kind=ImageKind.BANNER, layout=BannerLayout.MODERN)
        image = generate(request, photo_bytes, logo_bytes, settings)
        assert image.name == "Modern LinkedIn Banner"

    def test_decode_error_propagates(self, logo_bytes: bytes, settings: Settings) -> None:
        with pytest.raises(DecodeError):
            generate(GenerationRequest(kind="profile"), b"garbage", logo_bytes, settings)


class TestSmartCropImage:
    """Verify the data-URI crop helper."""

    def test_default_size(self, photo_bytes: bytes) -> None:
        assert _size(smart_crop_image(photo_bytes)) == (500, 500)

    def test_custom_size(self, photo_bytes: bytes) -> None:
        assert _size(smart_crop_image(photo_bytes, 200, 100)) == (200, 100)
