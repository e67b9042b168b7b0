"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "cohortlib.yaml"

DEFAULT_CACHE_ENABLED: bool = True
DEFAULT_LOG_LEVEL: str = "WARNING"

VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"cache_enabled", "definitions_dir", "log_level"})
