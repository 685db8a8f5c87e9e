"""XDG directory management and configuration for logflow."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from logflow.models import AppConfig

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the logflow config directory.

    Respects LOGFLOW_CONFIG_DIR environment variable if set.
    """
    if override := os.environ.get("LOGFLOW_CONFIG_DIR"):
        return Path(override)
    return Path(user_config_dir("logflow"))


def load_config() -> AppConfig:
    """Load application config from disk, returning defaults if not found."""
    path = get_config_dir() / "config.toml"
    if not path.exists():
        return AppConfig()
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text())
        return AppConfig(**data)
    except (OSError, ValueError, TypeError, KeyError):
        logger.warning("Ignoring invalid config file %s", path)
        return AppConfig()


def save_config(config: AppConfig) -> None:
    """Save application config to disk."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.toml"
    path.write_bytes(tomli_w.dumps(config.model_dump()).encode())
