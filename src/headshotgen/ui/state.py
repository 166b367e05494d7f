"""Streamlit session state management.

Centralises all ``st.session_state`` keys and provides typed accessors
so that the rest of the UI layer never uses raw string keys.
"""

from __future__ import annotations

from enum import Enum

import streamlit as st


class StateKey(str, Enum):
    """All session state keys used by the application."""

    UPLOAD_SIGNATURE = "upload_signature"
    BATCH_RESULT = "batch_result"


def get_state(key: StateKey, default=None):
    """Retrieve a value from session state.

    Args:
        key: The state key to look up.
        default: Fallback value if the key is absent.

    Returns:
        The stored value or *default*.
    """
    return st.session_state.get(key.value, default)


def set_state(key: StateKey, value) -> None:
    """Store a value in session state."""
    st.session_state[key.value] = value


def clear_results() -> None:
    """Drop the last batch so stale images do not outlive a new upload."""
    st.session_state.pop(StateKey.BATCH_RESULT.value, None)


def track_uploads(profile_blob: bytes | None, logo_blob: bytes | None) -> None:
    """Clear previous results whenever either upload changes."""
    signature = (hash(profile_blob), hash(logo_blob))
    if get_state(StateKey.UPLOAD_SIGNATURE) != signature:
        clear_results()
        set_state(StateKey.UPLOAD_SIGNATURE, signature)


def has_results() -> bool:
    """Return ``True`` if a batch result is available."""
    return get_state(StateKey.BATCH_RESULT) is not None
