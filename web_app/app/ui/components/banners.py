"""Error banners shown above the plot."""

from __future__ import annotations

from typing import Iterable

import streamlit as st

from src.core.viewer import Banner

__all__ = ["render_banners"]


def render_banners(banners: Iterable[Banner], *, toast_seconds: float = 5.0) -> None:
    """Persistent banners stay inline; transient ones become toasts that close on their own."""
    for banner in banners:
        if not banner.persistent:
            st.toast(banner.message, icon="⚠️", duration=max(1, round(toast_seconds)))
        elif banner.level == "warning":
            st.warning(banner.message)
        else:
            st.error(banner.message)
