"""Servicios que traducen el estado del visor a figuras Plotly."""

from .dotplot_visuals import (  # noqa: F401
    build_dot_plot_figure,
    compute_plot_scales,
    format_tooltip,
)

__all__ = [
    "build_dot_plot_figure",
    "compute_plot_scales",
    "format_tooltip",
]
