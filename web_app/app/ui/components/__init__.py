"""Componentes UI generales reutilizables."""

from .banners import render_banners  # noqa: F401
from .gene_tags import render_gene_tags  # noqa: F401
from .legends import (  # noqa: F401
    build_color_legend_html,
    build_size_legend_html,
    render_color_legend,
    render_size_legend,
)

__all__ = (
    "render_banners",
    "render_gene_tags",
    "build_color_legend_html",
    "build_size_legend_html",
    "render_color_legend",
    "render_size_legend",
)
