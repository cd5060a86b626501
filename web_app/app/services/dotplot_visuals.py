from __future__ import annotations

from typing import List, Optional, Tuple

import plotly.graph_objects as go

from app.config.models import PlotConfig
from src.core.aggregation import AggregatedCell
from src.core.scales import DotPlotScales, build_scales
from src.core.viewer import DotPlot


def format_tooltip(cell: AggregatedCell) -> str:
    """Texto del tooltip: tipo celular, condición, genes y ambas métricas redondeadas."""
    genes_label = "Gene" if len(cell.contributing_genes) == 1 else "Genes"
    return (
        f"<b>Cell Type:</b> {cell.cell_type}<br>"
        f"<b>Condition:</b> {cell.condition}<br>"
        f"<b>{genes_label}:</b> {', '.join(cell.contributing_genes)}<br>"
        f"<b>% Express:</b> {cell.mean_pct_express:.1f}%<br>"
        f"<b>Avg Expression:</b> {cell.mean_avg_expressing:.2f}"
    )


def compute_plot_scales(
    plot: DotPlot,
    config: PlotConfig,
    available_width: Optional[int] = None,
) -> DotPlotScales:
    return build_scales(
        plot.cells,
        plot.cell_types,
        plot.conditions,
        width=config.plot_width(available_width),
        height=config.plot_height,
        padding=config.padding,
        palette=config.palette,
    )


def _dot_positions(plot: DotPlot, scales: DotPlotScales) -> Tuple[List[float], List[float]]:
    xs = [scales.x.center(c.condition) for c in plot.cells]
    ys = [scales.y.center(c.cell_type) for c in plot.cells]
    return xs, ys


def build_dot_plot_figure(
    plot: DotPlot,
    config: PlotConfig,
    *,
    available_width: Optional[int] = None,
    scales: Optional[DotPlotScales] = None,
) -> go.Figure:
    """Genera el dot plot en coordenadas de píxel.

    Los ejes cubren exactamente el área de trazado y los márgenes son fijos, por lo
    que una unidad de datos equivale a un píxel y el radio del punto es un radio real.
    """
    scales = scales or compute_plot_scales(plot, config, available_width)
    width = config.plot_width(available_width)
    height = config.plot_height
    margin = config.margin

    xs, ys = _dot_positions(plot, scales)
    fig = go.Figure(
        go.Scatter(
            x=xs,
            y=ys,
            mode="markers",
            marker=dict(
                size=[2 * scales.size(c.mean_pct_express) for c in plot.cells],
                sizemode="diameter",
                color=[scales.color(c.mean_avg_expressing) for c in plot.cells],
                opacity=config.opacity,
                line=dict(width=0),
            ),
            text=[format_tooltip(c) for c in plot.cells],
            hovertemplate="%{text}<extra></extra>",
            showlegend=False,
        )
    )

    fig.update_layout(
        title=dict(text=f"<b>{plot.title}</b>", x=0.5, xanchor="center", font=dict(size=18)),
        width=width + margin.left + margin.right,
        height=height + margin.top + margin.bottom,
        autosize=False,
        margin=dict(l=margin.left, r=margin.right, t=margin.top, b=margin.bottom, pad=0),
        plot_bgcolor="white",
        hoverlabel=dict(align="left"),
    )
    fig.update_xaxes(
        range=[0, width],
        tickvals=scales.x.centers(),
        ticktext=list(scales.x.domain),
        tickangle=-45,
        showgrid=True,
        gridcolor="#e5e7eb",
        zeroline=False,
        fixedrange=True,
        showline=True,
        linecolor="#333",
        title_text="Condition",
    )
    fig.update_yaxes(
        range=[0, height],
        tickvals=scales.y.centers(),
        ticktext=list(scales.y.domain),
        showgrid=True,
        gridcolor="#e5e7eb",
        zeroline=False,
        fixedrange=True,
        showline=True,
        linecolor="#333",
        title_text="Cell Type",
    )
    return fig
