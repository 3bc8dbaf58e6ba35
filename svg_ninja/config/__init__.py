"""
SVG Ninja - Configuration Package
=================================
Loads processing settings from defaults, a JSON file and the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from svg_ninja.config.default import (
    BOOLEAN_OPTIONS, DEFAULT_CONFIG, ENV_PREFIX, INTEGER_OPTIONS
)
from svg_ninja.utils.io import load_config

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])


def as_flag(value: Any) -> bool:
    """Interpret a checkbox-style option value."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class PipelineSettings:
    """Host-owned flags read before each pipeline run."""
    admin_only: bool = True
    upload_capability: str = "manage_options"
    strip_metadata: bool = True
    compression_level: int = 9
    thumbnail_size: int = 150
    notice_ttl: int = 30

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "PipelineSettings":
        return cls(
            admin_only=as_flag(config.get("admin_only", DEFAULT_CONFIG["admin_only"])),
            upload_capability=str(config.get("upload_capability", DEFAULT_CONFIG["upload_capability"])),
            strip_metadata=as_flag(config.get("strip_metadata", DEFAULT_CONFIG["strip_metadata"])),
            compression_level=int(config.get("compression_level", DEFAULT_CONFIG["compression_level"])),
            thumbnail_size=int(config.get("thumbnail_size", DEFAULT_CONFIG["thumbnail_size"])),
            notice_ttl=int(config.get("notice_ttl", DEFAULT_CONFIG["notice_ttl"])),
        )


def _normalize(key: str, value: Any) -> Any:
    if key in BOOLEAN_OPTIONS:
        return as_flag(value)
    if key in INTEGER_OPTIONS:
        return int(value)
    return value


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Merge configuration from defaults, a JSON file and the environment.

    Args:
        config_path: Optional path to a JSON configuration file
        env: Environment mapping, os.environ by default

    Returns:
        Dictionary containing the merged configuration
    """
    config = dict(DEFAULT_CONFIG)

    if config_path:
        for key, value in load_config(config_path).items():
            if key not in DEFAULT_CONFIG:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            config[key] = _normalize(key, value)

    env = os.environ if env is None else env
    for key in DEFAULT_CONFIG:
        env_key = ENV_PREFIX + key.upper()
        if env_key in env:
            config[key] = _normalize(key, env[env_key])

    return config


def configure(settings: Optional[Dict[str, Any]] = None, **overrides) -> PipelineSettings:
    """
    Build pipeline settings from a configuration dictionary.

    Args:
        settings: Configuration dictionary, defaults when omitted
        **overrides: Individual settings to override

    Returns:
        PipelineSettings instance
    """
    config = dict(DEFAULT_CONFIG)
    config.update(settings or {})
    config.update(overrides)
    return PipelineSettings.from_dict(config)


__all__ = [
    "DEFAULT_CONFIG",
    "PipelineSettings",
    "as_flag",
    "configure",
    "load_settings",
]
