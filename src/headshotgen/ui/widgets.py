"""Reusable Streamlit UI components.

Each function renders a self-contained section of the interface.
Compositing stays in ``core``; widgets only move bytes in and
``GeneratedImage`` records out.
"""

from __future__ import annotations

import streamlit as st

from headshotgen.config import Settings
from headshotgen.schemas import BatchResult, GeneratedImage, ImageKind


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------


def render_uploader(label: str, help_text: str, settings: Settings, key: str) -> bytes | None:
    """Render one image upload widget.

    Args:
        label: Widget label.
        help_text: Tooltip text.
        settings: Application settings (allowed formats, max size).
        key: Unique Streamlit widget key.

    Returns:
        The uploaded bytes, or ``None`` if nothing usable was uploaded.
    """
    uploaded = st.file_uploader(
        label,
        type=settings.supported_formats,
        help=f"{help_text} Max {settings.max_upload_mb:.0f} MB.",
        key=key,
    )
    if uploaded is None:
        return None
    if uploaded.size > settings.max_upload_mb * 1024 * 1024:
        st.error(f"{uploaded.name} is larger than {settings.max_upload_mb:.0f} MB.")
        return None
    return uploaded.getvalue()


def render_uploads(settings: Settings) -> tuple[bytes | None, bytes | None]:
    """Render the photo and logo uploaders side by side.

    Returns:
        ``(profile_bytes, logo_bytes)``; either may be ``None``.
    """
    col_photo, col_logo = st.columns(2)
    with col_photo:
        photo = render_uploader(
            "Profile photo", "A clear, front-facing headshot.", settings, "photo"
        )
        if photo is not None:
            st.image(photo, width="stretch")
    with col_logo:
        logo = render_uploader(
            "Company logo", "Works best on a plain background.", settings, "logo"
        )
        if logo is not None:
            st.image(logo, width="stretch")
    return photo, logo


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def render_failures(result: BatchResult) -> None:
    """Show one warning per slot that did not render."""
    for failure in result.failures:
        st.warning(failure.message)


def _render_card(image: GeneratedImage, tab_name: str) -> None:
    caption = "Profile Picture" if image.type is ImageKind.PROFILE else "LinkedIn Banner"
    png = image.png_bytes()
    st.image(png, caption=f"{image.name} · {caption}", width="stretch")
    st.download_button(
        label="⬇ Download PNG",
        data=png,
        file_name=image.filename,
        mime="image/png",
        key=f"download-{tab_name}-{image.id}",
        width="stretch",
    )


def render_gallery(result: BatchResult) -> None:
    """Render the gallery with All / Profile Pictures / Banners tabs.

    Images are sorted by id so the layout does not depend on the order in
    which slots finished.
    """
    tab_all, tab_profile, tab_banner = st.tabs(["All", "Profile Pictures", "Banners"])
    for tab, kind in ((tab_all, None), (tab_profile, ImageKind.PROFILE), (tab_banner, ImageKind.BANNER)):
        with tab:
            images = sorted(result.by_kind(kind), key=lambda image: (image.type.value, image.id))
            if not images:
                st.info("No images in this category.")
                continue
            for image in images:
                _render_card(image, kind.value if kind else "all")
