"""Exceptions raised while resolving, binding and evaluating definitions."""

from __future__ import annotations

from cohortlib.exceptions.base import CohortError


class NoHandlerError(CohortError, LookupError):
    """Raised when no evaluator or persister is registered for a definition type."""

    def __init__(self, capability: str, definition_type: type, definition_name: str = "") -> None:
        self.capability = capability
        self.definition_type = definition_type
        self.definition_name = definition_name
        super().__init__(
            f"No {capability} found for ({definition_type.__module__}.{definition_type.__qualname__}) "
            f"{definition_name}".rstrip()
        )


class BindingError(CohortError, ValueError):
    """Raised when a parameter value cannot be bound onto a definition."""


class DefinitionError(CohortError, ValueError):
    """Raised when a definition is malformed or cannot be decoded."""


class CacheAccessError(CohortError):
    """Raised internally when deriving a cache key or touching the cache fails.

    Never escapes the engine; callers only see it in log records.
    """
