"""Parameter binding, caching protocol and evaluation context."""

from .binding import bind_parameters
from .cache import CohortCache, InMemoryCohortCache, NullCohortCache
from .caching import CachingStrategy, ConfigurationCachingStrategy, NoCachingStrategy, maybe_cache
from .context import EvaluationContext

__all__ = [
    "CachingStrategy",
    "CohortCache",
    "ConfigurationCachingStrategy",
    "EvaluationContext",
    "InMemoryCohortCache",
    "NoCachingStrategy",
    "NullCohortCache",
    "bind_parameters",
    "maybe_cache",
]
