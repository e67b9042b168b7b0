"""Configuration-related exceptions."""

from __future__ import annotations

from cohortlib.exceptions.base import CohortError


class ConfigError(CohortError, ValueError):
    """Raised when engine configuration is invalid."""


class HandlerConflictError(ConfigError):
    """Raised when two handlers tie for the same definition type and order."""
