"""Configuration loading for the evaluation engine."""

from __future__ import annotations

from cohortlib.config.loader import apply_log_level, load_config
from cohortlib.config.model import EngineConfig

__all__ = [
    "EngineConfig",
    "apply_log_level",
    "load_config",
]
