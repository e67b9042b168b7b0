"""Config data model for the evaluation engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cohortlib.constants.config import DEFAULT_CACHE_ENABLED, DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class EngineConfig:
    """Resolved engine config."""

    cache_enabled: bool = DEFAULT_CACHE_ENABLED
    definitions_dir: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL
