"""Simple configuration loader for gridpath."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .core.costs import DEFAULT_COST_MODEL
from .search.neighbors import DEFAULT_NEIGHBORHOOD


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class SearchConfig:
    """Defaults applied to every search built from configuration."""

    cost_model: str = DEFAULT_COST_MODEL
    neighborhood: str = DEFAULT_NEIGHBORHOOD
    record_events: bool = False


@dataclass
class LoggingConfig:
    """Root log level plus optional per-module overrides."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class RenderConfig:
    colour: bool = True


@dataclass
class Config:
    """Top level configuration dataclass."""

    search: SearchConfig
    logging: LoggingConfig
    render: RenderConfig


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    search_data = data.get("search") or {}
    search = SearchConfig(
        cost_model=str(search_data.get("cost_model", DEFAULT_COST_MODEL)),
        neighborhood=str(search_data.get("neighborhood", DEFAULT_NEIGHBORHOOD)),
        record_events=bool(search_data.get("record_events", False)),
    )

    logging_data = data.get("logging") or {}
    logging_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels=dict(logging_data.get("module_levels") or {}),
    )

    render_data = data.get("render") or {}
    render = RenderConfig(colour=bool(render_data.get("colour", True)))

    return Config(search=search, logging=logging_cfg, render=render)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "CONFIG_PATH",
    "Config",
    "SearchConfig",
    "LoggingConfig",
    "RenderConfig",
    "load_config",
]
