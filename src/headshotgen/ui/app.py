"""headshotgen: Streamlit application entry point.

Launch with::

    uv run streamlit run src/headshotgen/ui/app.py
"""

from __future__ import annotations

import logging

import streamlit as st

from headshotgen.config import Settings
from headshotgen.core.generator import generate_batch
from headshotgen.errors import BatchGenerationError
from headshotgen.ui.state import (
    StateKey,
    get_state,
    has_results,
    set_state,
    track_uploads,
)
from headshotgen.ui.widgets import render_failures, render_gallery, render_uploads

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page configuration (must be called first)
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="headshotgen",
    page_icon="🪪",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Cached resources
# ---------------------------------------------------------------------------


@st.cache_data(show_spinner=False)
def _get_settings() -> Settings:
    """Load and cache application settings."""
    return Settings()


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the headshotgen Streamlit application."""
    settings = _get_settings()

    # ---- Header ----
    st.title("🪪 headshotgen")
    st.caption("LinkedIn profile pictures and banners from your photo and company logo.")

    # ---- Upload ----
    profile_blob, logo_blob = render_uploads(settings)
    track_uploads(profile_blob, logo_blob)

    ready = profile_blob is not None and logo_blob is not None
    if not ready:
        st.info("Upload both your profile photo and company logo to get started.", icon="📷")

    # ---- Generation ----
    if st.button("Generate images", type="primary", disabled=not ready):
        try:
            with st.spinner("Combining your photo and logo…"):
                result = generate_batch(profile_blob, logo_blob, settings)
        except BatchGenerationError as exc:
            logger.warning("Batch failed: %s", exc)
            st.error(str(exc))
            return
        set_state(StateKey.BATCH_RESULT, result)
        st.success("Your LinkedIn images have been generated!")

    if not has_results():
        return

    result = get_state(StateKey.BATCH_RESULT)

    # ---- Per-slot failures ----
    render_failures(result)

    # ---- Gallery ----
    st.divider()
    render_gallery(result)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
