"""Paquete principal de la aplicación Streamlit."""

from __future__ import annotations

__all__ = [
    "config",
    "state",
    "services",
    "ui",
]
