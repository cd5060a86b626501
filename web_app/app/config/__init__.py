"""Subpaquete con modelos y cargadores de configuración."""

from __future__ import annotations

from .models import (
    AccessConfig,
    AppConfig,
    ConfigValidationError,
    DataSourcesConfig,
    PlotConfig,
    PlotMargin,
    UIConfig,
)
from .loader import load_app_config, ConfigError

__all__ = [
    "AccessConfig",
    "AppConfig",
    "ConfigValidationError",
    "DataSourcesConfig",
    "PlotConfig",
    "PlotMargin",
    "UIConfig",
    "load_app_config",
    "ConfigError",
]
