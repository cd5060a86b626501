"""Secciones de la página principal."""

from .gene_selection import GENE_INPUT_KEY, render_gene_selection_section  # noqa: F401

__all__ = ["GENE_INPUT_KEY", "render_gene_selection_section"]
