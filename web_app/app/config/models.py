from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


class ConfigValidationError(Exception):
    """Se produce cuando la configuración presenta valores inválidos."""


@dataclass(frozen=True)
class DataSourcesConfig:
    expression_source: str = "Gene_Expression_Summary_by_Condition.tsv"
    catalog_source: str = "gene_list_unique.txt"
    timeout: float = 10.0

    def validate(self) -> None:
        if not self.expression_source:
            raise ConfigValidationError("Se requiere la ruta o URL del archivo de expresión.")
        if not self.catalog_source:
            raise ConfigValidationError("Se requiere la ruta o URL de la lista de genes.")

    def sanitized(self) -> "DataSourcesConfig":
        timeout = float(self.timeout) if self.timeout and float(self.timeout) > 0 else 10.0
        return DataSourcesConfig(
            expression_source=str(self.expression_source).strip(),
            catalog_source=str(self.catalog_source).strip(),
            timeout=timeout,
        )


@dataclass(frozen=True)
class PlotMargin:
    top: int = 100
    right: int = 50
    bottom: int = 100
    left: int = 150

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "PlotMargin":
        defaults = cls()
        return cls(**{k: int(data.get(k, getattr(defaults, k))) for k in ("top", "right", "bottom", "left")})


@dataclass(frozen=True)
class PlotConfig:
    min_width: int = 800
    height: int = 600
    margin: PlotMargin = field(default_factory=PlotMargin)
    padding: float = 0.1
    opacity: float = 0.8
    palette: str = "Blues"
    legend_sizes: Tuple[int, ...] = (25, 50, 75, 100)
    legend_color_stops: int = 10

    def validate(self) -> None:
        if not 0 <= self.padding < 1:
            raise ConfigValidationError("El padding de las bandas debe estar en [0, 1).")
        if not 0 < self.opacity <= 1:
            raise ConfigValidationError("La opacidad debe estar en (0, 1].")
        if self.min_width <= self.margin.left + self.margin.right:
            raise ConfigValidationError("El ancho mínimo no deja espacio para el área de trazado.")
        if self.height <= self.margin.top + self.margin.bottom:
            raise ConfigValidationError("La altura no deja espacio para el área de trazado.")
        if any(not 0 <= s <= 100 for s in self.legend_sizes):
            raise ConfigValidationError("Los tamaños de la leyenda deben estar entre 0 y 100.")

    def sanitized(self) -> "PlotConfig":
        return PlotConfig(
            min_width=int(self.min_width),
            height=int(self.height),
            margin=self.margin,
            padding=float(self.padding),
            opacity=float(self.opacity),
            palette=self.palette or "Blues",
            legend_sizes=tuple(int(s) for s in self.legend_sizes),
            legend_color_stops=max(1, int(self.legend_color_stops)),
        )

    def plot_width(self, available_width: Optional[int] = None) -> int:
        """Ancho útil del área de trazado (sin márgenes)."""
        width = max(self.min_width, int(available_width or 0))
        return width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom


@dataclass(frozen=True)
class UIConfig:
    banner_seconds: float = 5.0
    suggestion_limit: int = 10

    def sanitized(self) -> "UIConfig":
        return UIConfig(
            banner_seconds=max(0.0, float(self.banner_seconds)),
            suggestion_limit=max(1, int(self.suggestion_limit)),
        )


@dataclass(frozen=True)
class AccessConfig:
    password_hash: Optional[str] = None
    session_key: str = "expression_viewer_access"

    def sanitized(self) -> "AccessConfig":
        digest = (self.password_hash or "").strip().lower() or None
        return AccessConfig(password_hash=digest, session_key=self.session_key or "expression_viewer_access")

    def validate(self) -> None:
        if self.password_hash is None:
            return
        if len(self.password_hash) != 64 or any(ch not in "0123456789abcdef" for ch in self.password_hash):
            raise ConfigValidationError("El hash de acceso debe ser un digest SHA-256 en hexadecimal.")


@dataclass(frozen=True)
class AppConfig:
    project_name: str
    log_level: str
    data: DataSourcesConfig = field(default_factory=DataSourcesConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    access: AccessConfig = field(default_factory=AccessConfig)

    def sanitized(self) -> "AppConfig":
        return AppConfig(
            project_name=self.project_name,
            log_level=self.log_level.upper(),
            data=self.data.sanitized(),
            plot=self.plot.sanitized(),
            ui=self.ui.sanitized(),
            access=self.access.sanitized(),
        )

    def validate(self) -> None:
        self.data.validate()
        self.plot.validate()
        self.access.validate()
