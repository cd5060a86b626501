from __future__ import annotations

import streamlit as st

from app.ui.components import render_gene_tags
from src.core.viewer import GeneExpressionViewer

GENE_INPUT_KEY = "_gene_input"


def _sync_input(viewer: GeneExpressionViewer) -> None:
    st.session_state[GENE_INPUT_KEY] = viewer.input_value


def _on_gene_submitted(viewer: GeneExpressionViewer) -> None:
    text = st.session_state.get(GENE_INPUT_KEY, "")
    if viewer.on_submit(text) is None:
        # Sin coincidencia exacta: se ofrecen sugerencias por prefijo.
        viewer.on_input(text)
    _sync_input(viewer)


def _on_suggestion_clicked(viewer: GeneExpressionViewer, gene: str) -> None:
    viewer.on_suggestion_selected(gene)
    _sync_input(viewer)


def _on_clear(viewer: GeneExpressionViewer) -> None:
    viewer.on_clear()
    _sync_input(viewer)


def render_gene_selection_section(viewer: GeneExpressionViewer) -> None:
    """Entrada de genes con autocompletado, etiquetas seleccionadas y botones de acción."""

    st.text_input(
        "Gen",
        key=GENE_INPUT_KEY,
        placeholder="Escribe un gen y presiona Enter (p. ej. ACTB)",
        on_change=_on_gene_submitted,
        args=(viewer,),
    )

    if viewer.suggestions:
        st.caption("Sugerencias")
        cols = st.columns(min(5, len(viewer.suggestions)))
        for idx, gene in enumerate(viewer.suggestions):
            with cols[idx % len(cols)]:
                st.button(
                    gene,
                    key=f"_suggest_{gene}",
                    on_click=_on_suggestion_clicked,
                    args=(viewer, gene),
                    use_container_width=True,
                )

    render_gene_tags(viewer.selection.as_list(), on_remove=viewer.on_remove)

    col_plot, col_clear, _ = st.columns([1, 1, 4])
    with col_plot:
        st.button("Graficar", type="primary", on_click=viewer.on_plot, use_container_width=True)
    with col_clear:
        st.button("Limpiar", on_click=_on_clear, args=(viewer,), use_container_width=True)
