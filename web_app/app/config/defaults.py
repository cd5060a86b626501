from __future__ import annotations

from typing import Any, Dict

DEFAULT_PROJECT_NAME = "Gene Expression Viewer"
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_EXPRESSION_SOURCE = "Gene_Expression_Summary_by_Condition.tsv"
DEFAULT_CATALOG_SOURCE = "gene_list_unique.txt"

DEFAULT_DATA_SETTINGS: Dict[str, Any] = {
    "expression_source": DEFAULT_EXPRESSION_SOURCE,
    "catalog_source": DEFAULT_CATALOG_SOURCE,
    "timeout": 10.0,
}

# Márgenes en píxeles alrededor del área de trazado.
DEFAULT_PLOT_SETTINGS: Dict[str, Any] = {
    "min_width": 800,
    "height": 600,
    "margin": {"top": 100, "right": 50, "bottom": 100, "left": 150},
    "padding": 0.1,
    "opacity": 0.8,
    "palette": "Blues",
    "legend_sizes": [25, 50, 75, 100],
    "legend_color_stops": 10,
}

DEFAULT_UI_SETTINGS: Dict[str, Any] = {
    "banner_seconds": 5.0,
    "suggestion_limit": 10,
}

DEFAULT_ACCESS_SETTINGS: Dict[str, Any] = {
    "password_hash": None,
    "session_key": "expression_viewer_access",
}
