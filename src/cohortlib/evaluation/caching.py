"""Caching strategies and the best-effort cache protocol used by the engine."""

from __future__ import annotations

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

from cohortlib.constants.cache import CACHE_KEY_HASH, CACHE_KEY_SEPARATOR
from cohortlib.exceptions import CacheAccessError
from cohortlib.model.cohort import Cohort
from cohortlib.model.serialize import encode_value

if TYPE_CHECKING:
    from cohortlib.evaluation.context import EvaluationContext
    from cohortlib.model.definition import CohortDefinition

logger = logging.getLogger(__name__)


class CachingStrategy(ABC):
    """Derives the cache key a configured definition is stored under."""

    @abstractmethod
    def cache_key(self, definition: CohortDefinition) -> str | None:
        """Return a deterministic key, or None to skip caching."""


class NoCachingStrategy(CachingStrategy):
    """Explicitly opts a definition variant out of caching."""

    def cache_key(self, definition: CohortDefinition) -> str | None:
        return None


class ConfigurationCachingStrategy(CachingStrategy):
    """Keys a definition by its kind and resolved configuration values.

    Name, description and uuid are left out so equivalent clones share a key.
    """

    def cache_key(self, definition: CohortDefinition) -> str | None:
        payload = {
            "kind": definition.kind,
            "config": {key: encode_value(value) for key, value in definition.configuration().items()},
        }
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return f"{definition.kind}{CACHE_KEY_SEPARATOR}{hashlib.new(CACHE_KEY_HASH, blob).hexdigest()}"


def caching_strategy_for(definition: CohortDefinition) -> CachingStrategy | None:
    """Return the strategy declared by the definition's variant, if it caches."""
    strategy = type(definition).caching
    if strategy is None or isinstance(strategy, NoCachingStrategy):
        return None
    return strategy


def _derive_key(strategy: CachingStrategy, definition: CohortDefinition) -> str | None:
    try:
        return strategy.cache_key(definition)
    except Exception as exc:
        raise CacheAccessError(f"Failed to derive cache key for {definition}: {exc}") from exc


def _lookup(context: EvaluationContext, key: str) -> Cohort | None:
    try:
        return context.get_from_cache(key)
    except Exception as exc:
        raise CacheAccessError(f"Failed to read cache entry {key!r}: {exc}") from exc


def _store(context: EvaluationContext, key: str, cohort: Cohort) -> None:
    try:
        context.add_to_cache(key, cohort)
    except Exception as exc:
        raise CacheAccessError(f"Failed to write cache entry {key!r}: {exc}") from exc


def maybe_cache(
    definition: CohortDefinition,
    context: EvaluationContext | None,
    compute: Callable[[], Cohort],
) -> Cohort:
    """Return a cached cohort for *definition* or compute and cache a fresh one.

    Cache failures are logged and treated as misses; errors raised by
    ``compute`` propagate unchanged.
    """
    strategy = caching_strategy_for(definition)
    if context is None or strategy is None:
        return compute()

    try:
        key = _derive_key(strategy, definition)
        cached = _lookup(context, key) if key is not None else None
    except CacheAccessError:
        logger.warning("An error occurred while attempting to access the cache.", exc_info=True)
        return compute()

    if key is None:
        return compute()
    if cached is not None:
        logger.debug("Cache hit for %s under %s", definition, key)
        return cached

    cohort = compute()
    try:
        _store(context, key, cohort)
    except CacheAccessError:
        logger.warning("An error occurred while attempting to access the cache.", exc_info=True)
    return cohort
