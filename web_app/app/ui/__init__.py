"""Componentes UI reutilizables (acceso, secciones, leyendas)."""

from .access_gate import build_gate, render_access_gate  # noqa: F401
from .sections import GENE_INPUT_KEY, render_gene_selection_section  # noqa: F401

__all__ = [
    "build_gate",
    "render_access_gate",
    "GENE_INPUT_KEY",
    "render_gene_selection_section",
]
