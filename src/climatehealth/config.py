"""Configuration loading utilities"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .paths import config_dir


class Config(BaseModel):
    """Pydantic model for the project configuration."""

    project: Dict[str, Any] = Field(default_factory=dict)
    data: Dict[str, Any] = Field(default_factory=dict)
    api: Dict[str, Any] = Field(default_factory=dict)
    map: Dict[str, Any] = Field(default_factory=dict)
    baselines: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    viz: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(extra="allow")


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def merge_dicts(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = merge_dicts(dict(base[key]), value)
        else:
            base[key] = value
    return base


def load_config(cfg_dir: Optional[Path] = None) -> Config:
    """Load and merge the default and local configuration files."""
    cfg_dir = cfg_dir or config_dir()
    default_path = cfg_dir / "config.default.yaml"
    local_path = cfg_dir / "config.local.yaml"

    if not default_path.exists():
        raise FileNotFoundError(f"Missing default config: {default_path}")

    default_cfg = _load_yaml(default_path)
    local_cfg: Dict[str, Any] = _load_yaml(local_path) if local_path.exists() else {}

    merged = merge_dicts(default_cfg.copy(), local_cfg)
    return Config.model_validate(merged)
