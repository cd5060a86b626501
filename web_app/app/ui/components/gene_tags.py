"""Selected-gene tags with a per-tag remove button."""

from __future__ import annotations

from typing import Callable, Sequence

import streamlit as st

__all__ = ["render_gene_tags"]


def render_gene_tags(
    genes: Sequence[str],
    *,
    on_remove: Callable[[str], None],
    key: str = "gene-tags",
    per_row: int = 6,
) -> None:
    if not genes:
        st.caption("Ningún gen seleccionado.")
        return

    per_row = max(1, int(per_row))
    for start in range(0, len(genes), per_row):
        row = genes[start:start + per_row]
        cols = st.columns(per_row)
        for col, gene in zip(cols, row):
            with col:
                # Las claves de Streamlit aceptan cualquier texto; el nombre del gen es único.
                st.button(
                    f"{gene}  ×",
                    key=f"{key}-{gene}",
                    help=f"Quitar {gene}",
                    on_click=on_remove,
                    args=(gene,),
                    use_container_width=True,
                )
