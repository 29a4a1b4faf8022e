"""
Engine configuration.

Configuration is per engine instance and is passed to the renderer
explicitly. It can be read from a YAML mapping, with environment overrides:

    autoescape: false

TAGTPL_AUTOESCAPE (0/false/no/off/empty is false) takes precedence over the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

AUTOESCAPE_ENV = "TAGTPL_AUTOESCAPE"

_yaml = YAML(typ="safe")


def _norm_bool(x: Any) -> bool:
    if isinstance(x, bool):
        return x
    if x is None:
        return False
    s = str(x).strip().lower()
    return s not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class EngineConfig:
    """Engine settings."""
    autoescape: bool = True

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "EngineConfig":
        """
        Builds configuration from a parsed mapping.

        Raises:
            ConfigLoadError: On unknown keys or values of the wrong type
        """
        unknown = sorted(set(raw) - {"autoescape"})
        if unknown:
            raise ConfigLoadError(f"Unknown engine config keys: {', '.join(map(str, unknown))}")

        autoescape = raw.get("autoescape", True)
        if not isinstance(autoescape, bool):
            raise ConfigLoadError(f"'autoescape' must be a boolean, got {type(autoescape).__name__}")

        return EngineConfig(autoescape=autoescape)


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file expected to hold a mapping; a missing file is empty."""
    if not path.is_file():
        logger.debug(f"Engine config {path} not found, using defaults")
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        raise ConfigLoadError(f"Failed to read engine config {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_engine_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Loads engine configuration.

    Args:
        path: Optional YAML file; when omitted only defaults and
              environment overrides apply

    Returns:
        Engine configuration

    Raises:
        ConfigLoadError: If the file is malformed
    """
    raw = _read_yaml_map(Path(path)) if path is not None else {}
    config = EngineConfig.from_dict(raw)

    env = os.environ.get(AUTOESCAPE_ENV, None)
    if env is not None:
        config = EngineConfig(autoescape=_norm_bool(env))
        logger.debug(f"{AUTOESCAPE_ENV} overrides autoescape={config.autoescape}")

    return config


__all__ = ["EngineConfig", "load_engine_config", "AUTOESCAPE_ENV"]
