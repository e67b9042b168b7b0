"""Shared exception hierarchy for cohortlib."""

from __future__ import annotations

from .base import CohortError
from .config import ConfigError, HandlerConflictError
from .evaluation import BindingError, CacheAccessError, DefinitionError, NoHandlerError
from .persistence import PersistenceError

__all__ = [
    "BindingError",
    "CacheAccessError",
    "CohortError",
    "ConfigError",
    "DefinitionError",
    "HandlerConflictError",
    "NoHandlerError",
    "PersistenceError",
]
