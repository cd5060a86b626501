"""Size and color legends rendered next to the dot plot."""

from __future__ import annotations

from html import escape
from typing import Iterable, List

import streamlit as st

from src.core.scales import SequentialColorScale, SqrtScale

__all__ = [
    "build_size_legend_html",
    "build_color_legend_html",
    "render_size_legend",
    "render_color_legend",
]

LEGEND_DOT_COLOR = "#667eea"
LEGEND_DOT_OPACITY = 0.6


def build_size_legend_html(size_scale: SqrtScale, sizes: Iterable[int], *, key: str = "size-legend") -> str:
    """One circle per reference percentage, each in a box sized for the 100 % dot."""
    box = size_scale(100) * 2
    center = size_scale(100)
    items: List[str] = []
    for size in sizes:
        items.append(
            f"""
            <div class='item'>
                <svg width='{box:.2f}' height='{box:.2f}'>
                    <circle cx='{center:.2f}' cy='{center:.2f}' r='{size_scale(size):.2f}'
                        style='fill:{LEGEND_DOT_COLOR}; opacity:{LEGEND_DOT_OPACITY}'></circle>
                </svg>
                <span>{escape(str(size))}%</span>
            </div>
            """
        )
    return f"""
    <style>
        #{key} {{ display:flex; gap: 12px; align-items:flex-end; flex-wrap:wrap; }}
        #{key} .item {{ display:flex; flex-direction:column; align-items:center; }}
        #{key} .item span {{ font-size: 10px; margin-top: 2px; }}
    </style>
    <div id='{key}'>{''.join(items)}</div>
    """


def build_color_legend_html(color_scale: SequentialColorScale, n_stops: int = 10, *, key: str = "color-legend") -> str:
    stops = "".join(
        f"<stop offset='{offset * 100:g}%' stop-color='{color}'></stop>"
        for offset, color in color_scale.stops(n_stops)
    )
    lower, upper = color_scale.domain
    return f"""
    <div id='{key}'>
        <svg width='100%' height='20px'>
            <defs><linearGradient id='{key}-gradient'>{stops}</linearGradient></defs>
            <rect width='100%' height='20px' style='fill:url(#{key}-gradient)'></rect>
        </svg>
        <div style='display:flex; justify-content:space-between; font-size:10px;'>
            <span>{lower:.2f}</span><span>{upper:.2f}</span>
        </div>
    </div>
    """


def render_size_legend(size_scale: SqrtScale, sizes: Iterable[int]) -> None:
    st.markdown("**% Expressing**")
    st.markdown(build_size_legend_html(size_scale, sizes), unsafe_allow_html=True)


def render_color_legend(color_scale: SequentialColorScale, n_stops: int = 10) -> None:
    st.markdown("**Avg Expression**")
    st.markdown(build_color_legend_html(color_scale, n_stops), unsafe_allow_html=True)
