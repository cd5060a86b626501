from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, List, Mapping, Optional

import streamlit as st

# Asegura que ``src`` y ``app`` sean importables al ejecutar con ``streamlit run``
_WEB_ROOT = Path(__file__).resolve().parent
_PROJ_ROOT = _WEB_ROOT.parent
for _path in (_PROJ_ROOT, _WEB_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from app.config import AppConfig
from app.config.defaults import DEFAULT_PROJECT_NAME
from app.config.loader import ConfigError, load_app_config
from app.services import build_dot_plot_figure, compute_plot_scales
from app.state import ViewerSessionState
from app.ui import build_gate, render_access_gate, render_gene_selection_section
from app.ui.components import render_banners, render_color_legend, render_size_legend
from src.core.viewer import GeneExpressionViewer


def _read_secrets() -> Optional[Mapping[str, Any]]:
    try:
        return dict(st.secrets)  # type: ignore[attr-defined]
    except Exception:  # sin secrets.toml
        return None


def _configure_logging(app_config: AppConfig) -> logging.Logger:
    if "_log_configured" not in st.session_state:
        level = getattr(logging, str(app_config.log_level).upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        st.session_state["_log_configured"] = True
    return logging.getLogger("gev.web_app")


def _ensure_viewer(app_config: AppConfig, logger: logging.Logger) -> GeneExpressionViewer:
    """Crea el visor de la sesión y carga los datos una sola vez por fuente."""

    state = ViewerSessionState.load()
    data_cfg = app_config.data
    signature = (data_cfg.expression_source, data_cfg.catalog_source)
    if state.viewer is not None and state.data_signature == signature:
        return state.viewer

    viewer = GeneExpressionViewer(
        banner_seconds=app_config.ui.banner_seconds,
        suggestion_limit=app_config.ui.suggestion_limit,
    )
    with st.spinner("Cargando datos de expresión..."):
        loaded = viewer.load_data(
            data_cfg.expression_source,
            data_cfg.catalog_source,
            timeout=data_cfg.timeout,
        )
    if loaded:
        logger.info("Visor inicializado con %d registros", len(viewer.records))
    state.viewer = viewer
    state.data_signature = signature
    state.persist()
    return viewer


def _render_sidebar(viewer: GeneExpressionViewer, app_config: AppConfig) -> None:
    with st.sidebar:
        st.caption("Fuentes de datos")
        st.code(f"{app_config.data.expression_source}\n{app_config.data.catalog_source}", language=None)
        if viewer.is_loaded:
            cols = st.columns(2)
            cols[0].metric("Registros", len(viewer.records))
            cols[1].metric("Genes", len(viewer.catalog))
        elif st.button("Reintentar carga", use_container_width=True):
            ViewerSessionState.load().reset_viewer()
            st.rerun()


def _render_plot_area(viewer: GeneExpressionViewer, app_config: AppConfig) -> None:
    plot = viewer.plot
    if plot is None:
        return

    plot_cfg = app_config.plot
    scales = compute_plot_scales(plot, plot_cfg)
    fig = build_dot_plot_figure(plot, plot_cfg, scales=scales)
    st.plotly_chart(fig, use_container_width=False)

    col_size, col_color = st.columns(2)
    with col_size:
        render_size_legend(scales.size, plot_cfg.legend_sizes)
    with col_color:
        render_color_legend(scales.color, plot_cfg.legend_color_stops)


def main() -> None:
    st.set_page_config(page_title=DEFAULT_PROJECT_NAME, layout="wide")

    warnings: List[str] = []
    try:
        app_config = load_app_config(secrets=_read_secrets(), warn=warnings.append)
    except ConfigError as exc:
        st.error(f"Error cargando configuración: {exc}")
        st.stop()
        return

    logger = _configure_logging(app_config)
    for warning_msg in warnings:
        st.warning(warning_msg)

    if not render_access_gate(build_gate(app_config.access)):
        st.stop()
        return

    st.title(app_config.project_name)
    viewer = _ensure_viewer(app_config, logger)
    _render_sidebar(viewer, app_config)

    render_banners(viewer.drain_banners(), toast_seconds=app_config.ui.banner_seconds)
    if not viewer.is_loaded:
        return

    render_gene_selection_section(viewer)
    st.divider()
    _render_plot_area(viewer, app_config)


if __name__ == "__main__":
    main()
