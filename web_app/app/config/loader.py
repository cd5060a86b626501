from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .defaults import (
    DEFAULT_ACCESS_SETTINGS,
    DEFAULT_DATA_SETTINGS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PLOT_SETTINGS,
    DEFAULT_PROJECT_NAME,
    DEFAULT_UI_SETTINGS,
)
from .models import (
    AccessConfig,
    AppConfig,
    ConfigValidationError,
    DataSourcesConfig,
    PlotConfig,
    PlotMargin,
    UIConfig,
)

LOGGER = logging.getLogger(__name__)

SECTIONS = ("data", "plot", "ui", "access")


class ConfigError(Exception):
    """Error genérico al cargar la configuración de la aplicación."""


def load_app_config(
    config_path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    secrets: Optional[Mapping[str, Any]] = None,
    warn: Optional[Callable[[str], None]] = None,
) -> AppConfig:
    """Carga la configuración de la app consolidando defaults, archivo, secrets y entorno."""

    env_map = env if env is not None else os.environ
    warn_fn = warn or (lambda msg: LOGGER.warning(msg))

    project_name = env_map.get("GEV_PROJECT_NAME", DEFAULT_PROJECT_NAME)
    log_level = env_map.get("GEV_LOGLEVEL", DEFAULT_LOG_LEVEL).upper()

    file_data = _load_file_config(config_path=config_path, env=env_map, secrets=secrets, warn=warn_fn)

    data_cfg = _load_data_config(file_data.get("data", {}), env=env_map, warn=warn_fn)
    plot_cfg = _load_plot_config(file_data.get("plot", {}), env=env_map, warn=warn_fn)
    ui_cfg = _load_ui_config(file_data.get("ui", {}), warn=warn_fn)
    access_cfg = _load_access_config(file_data.get("access", {}), env=env_map, secrets=secrets)

    app_config = AppConfig(
        project_name=project_name,
        log_level=log_level,
        data=data_cfg,
        plot=plot_cfg,
        ui=ui_cfg,
        access=access_cfg,
    ).sanitized()
    try:
        app_config.validate()
    except ConfigValidationError as exc:
        raise ConfigError(f"Configuración inválida: {exc}") from exc
    return app_config


def _load_file_config(
    *,
    config_path: Optional[Path],
    env: Mapping[str, str],
    secrets: Optional[Mapping[str, Any]],
    warn: Callable[[str], None],
) -> Dict[str, Mapping[str, Any]]:
    raw: Optional[Mapping[str, Any]] = None

    # Prioridad: argumento explícito > env > secrets > archivo por defecto > defaults en código
    if config_path is not None:
        if config_path.exists():
            raw = _read_json(config_path, warn)
        else:
            warn(f"Archivo de configuración no encontrado: {config_path}")
    else:
        env_path = env.get("GEV_CONFIG_PATH")
        if env_path:
            path = Path(env_path)
            if path.exists():
                raw = _read_json(path, warn)
            else:
                warn(f"No se encontró el archivo definido en GEV_CONFIG_PATH: {path}")

    if raw is None and secrets is not None:
        viewer_secret = secrets.get("viewer")
        if isinstance(viewer_secret, Mapping):
            raw = viewer_secret

    if raw is None:
        default_path = Path(__file__).resolve().parents[2] / "config" / "viewer.json"
        if default_path.exists():
            raw = _read_json(default_path, warn)

    raw = raw or {}
    return {key: raw[key] for key in SECTIONS if isinstance(raw.get(key), Mapping)}


def _load_data_config(
    section: Mapping[str, Any],
    *,
    env: Mapping[str, str],
    warn: Callable[[str], None],
) -> DataSourcesConfig:
    defaults = {**DEFAULT_DATA_SETTINGS, **section}
    timeout = _read_float(env.get("GEV_FETCH_TIMEOUT"), defaults["timeout"], warn)
    return DataSourcesConfig(
        expression_source=env.get("GEV_EXPRESSION_SOURCE") or str(defaults["expression_source"]),
        catalog_source=env.get("GEV_CATALOG_SOURCE") or str(defaults["catalog_source"]),
        timeout=timeout,
    )


def _load_plot_config(
    section: Mapping[str, Any],
    *,
    env: Mapping[str, str],
    warn: Callable[[str], None],
) -> PlotConfig:
    values = {**DEFAULT_PLOT_SETTINGS, **section}
    margin_raw = values.get("margin")
    try:
        margin = PlotMargin.from_dict(margin_raw if isinstance(margin_raw, Mapping) else {})
        return PlotConfig(
            min_width=_read_int(env.get("GEV_PLOT_WIDTH"), values["min_width"], warn),
            height=int(values["height"]),
            margin=margin,
            padding=float(values["padding"]),
            opacity=float(values["opacity"]),
            palette=str(values["palette"]),
            legend_sizes=tuple(int(s) for s in values["legend_sizes"]),
            legend_color_stops=int(values["legend_color_stops"]),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Sección 'plot' inválida: {exc}") from exc


def _load_ui_config(section: Mapping[str, Any], *, warn: Callable[[str], None]) -> UIConfig:
    values = {**DEFAULT_UI_SETTINGS, **section}
    return UIConfig(
        banner_seconds=_read_float(values.get("banner_seconds"), DEFAULT_UI_SETTINGS["banner_seconds"], warn),
        suggestion_limit=_read_int(values.get("suggestion_limit"), DEFAULT_UI_SETTINGS["suggestion_limit"], warn),
    )


def _load_access_config(
    section: Mapping[str, Any],
    *,
    env: Mapping[str, str],
    secrets: Optional[Mapping[str, Any]],
) -> AccessConfig:
    values = {**DEFAULT_ACCESS_SETTINGS, **section}
    password_hash = _get_secret(
        "access_password_hash",
        env_key="GEV_ACCESS_HASH",
        env=env,
        secrets=secrets,
    ) or values.get("password_hash")
    return AccessConfig(
        password_hash=password_hash,
        session_key=str(values.get("session_key") or DEFAULT_ACCESS_SETTINGS["session_key"]),
    )


def _read_json(path: Path, warn: Callable[[str], None]) -> Mapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handler:
            data = json.load(handler)
    except FileNotFoundError:
        warn(f"Archivo de configuración no encontrado: {path}")
        return {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"No se pudo parsear {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path} debe contener un objeto JSON.")
    return data


def _read_int(value: Optional[Any], default: int, warn: Callable[[str], None]) -> int:
    if value is None:
        return int(default)
    try:
        return int(value)
    except (TypeError, ValueError):
        warn(f"Valor entero inválido '{value}', usando {default}.")
        return int(default)


def _read_float(value: Optional[Any], default: float, warn: Callable[[str], None]) -> float:
    if value is None:
        return float(default)
    try:
        return float(value)
    except (TypeError, ValueError):
        warn(f"Valor numérico inválido '{value}', usando {default}.")
        return float(default)


def _get_secret(
    key: str,
    *,
    env_key: str,
    env: Mapping[str, str],
    secrets: Optional[Mapping[str, Any]],
) -> Optional[str]:
    if env.get(env_key):
        return env[env_key]
    if secrets is not None and key in secrets and secrets[key]:
        return str(secrets[key])
    return None


__all__ = [
    "load_app_config",
    "ConfigError",
]
