"""Configuration loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .models import DisplaySettings, WidgetSettings, coerce_mode

CONFIG_ENV_VAR = "STOPLIGHT_CONFIG"

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML file.

    An explicit path (argument or ``STOPLIGHT_CONFIG``) must exist. When no
    path is given and the bundled ``config.yaml`` is absent, built-in
    defaults apply.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit) if explicit else _DEFAULT_CONFIG_PATH
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config not found: {path}")
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def get_widget_settings(config: dict[str, Any]) -> WidgetSettings:
    """Extract widget settings from config."""
    w = config.get("widget", {}) or {}
    return WidgetSettings(
        default_mode=coerce_mode(w.get("default_mode", "rehab_required")),
    )


def get_display_settings(config: dict[str, Any]) -> DisplaySettings:
    """Extract display settings from config."""
    d = config.get("display", {}) or {}
    return DisplaySettings(
        currency_symbol=str(d.get("currency_symbol", "$")),
        decimals=int(d.get("decimals", 2)),
        show_depth=bool(d.get("show_depth", True)),
    )


def get_log_level(config: dict[str, Any]) -> int:
    """Resolve ``logging.level`` to a logging level number (default WARNING)."""
    lg = config.get("logging", {}) or {}
    level = lg.get("level", "WARNING")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved
