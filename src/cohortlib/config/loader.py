"""Config loading and normalization for the evaluation engine."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from cohortlib.config.model import EngineConfig
from cohortlib.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_CACHE_ENABLED,
    DEFAULT_LOG_LEVEL,
    VALID_LOG_LEVELS,
)
from cohortlib.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> EngineConfig:
    """Load and validate engine config from ``cohortlib.yaml`` or an explicit path.

    Relative ``definitions_dir`` values resolve against the config file's directory.
    """
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return EngineConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = set(raw) - ALLOWED_CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {sorted(unknown)}")

    cache_enabled = raw.get("cache_enabled", DEFAULT_CACHE_ENABLED)
    if not isinstance(cache_enabled, bool):
        raise ConfigError("cache_enabled must be a boolean")

    log_level = raw.get("log_level", DEFAULT_LOG_LEVEL)
    if not isinstance(log_level, str) or log_level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {log_level!r}")

    definitions_dir_raw = raw.get("definitions_dir")
    definitions_dir: Path | None = None
    if definitions_dir_raw is not None:
        if not isinstance(definitions_dir_raw, str) or not definitions_dir_raw.strip():
            raise ConfigError("definitions_dir must be a non-empty string")
        definitions_dir = Path(definitions_dir_raw)
        if not definitions_dir.is_absolute():
            definitions_dir = (path.parent / definitions_dir).resolve()

    config = EngineConfig(
        cache_enabled=cache_enabled,
        definitions_dir=definitions_dir,
        log_level=log_level.upper(),
    )
    logger.debug("Loaded engine config from %s: %r", path, config)
    return config


def apply_log_level(config: EngineConfig) -> None:
    """Set the package logger level from *config*."""
    logging.getLogger("cohortlib").setLevel(config.log_level)
