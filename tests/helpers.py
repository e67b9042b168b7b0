"""Test-only definition variants, evaluators and caches."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from cohortlib.evaluation import CachingStrategy, ConfigurationCachingStrategy, EvaluationContext
from cohortlib.handlers import CohortDefinitionEvaluator
from cohortlib.model import Cohort, CohortDefinition


@dataclass
class CachedDefinition(CohortDefinition):
    """Subjects at or above ``threshold``, cached by configuration."""

    kind = "test_cached"
    caching = ConfigurationCachingStrategy()

    threshold: int | None = None
    ratio: float | None = None


@dataclass
class SpecialCachedDefinition(CachedDefinition):
    kind = "test_special_cached"


@dataclass
class UncachedDefinition(CohortDefinition):
    kind = "test_uncached"

    threshold: int | None = None


@dataclass
class LeftDefinition(CohortDefinition):
    kind = "test_left"


@dataclass
class RightDefinition(CohortDefinition):
    kind = "test_right"


@dataclass
class BothDefinition(LeftDefinition, RightDefinition):
    kind = "test_both"


class FixedKeyStrategy(CachingStrategy):
    def cache_key(self, definition: CohortDefinition) -> str | None:
        return "K1"


class DecliningStrategy(CachingStrategy):
    def cache_key(self, definition: CohortDefinition) -> str | None:
        return None


class ExplodingStrategy(CachingStrategy):
    def cache_key(self, definition: CohortDefinition) -> str | None:
        raise RuntimeError("key derivation failed")


@dataclass
class FixedKeyDefinition(CohortDefinition):
    kind = "test_fixed_key"
    caching = FixedKeyStrategy()

    threshold: int | None = None


@dataclass
class DecliningDefinition(CohortDefinition):
    kind = "test_declining"
    caching = DecliningStrategy()

    threshold: int | None = None


@dataclass
class ExplodingKeyDefinition(CohortDefinition):
    kind = "test_exploding_key"
    caching = ExplodingStrategy()

    threshold: int | None = None


class CountingEvaluator(CohortDefinitionEvaluator):
    """Returns members at or above the definition threshold and counts calls."""

    def __init__(self, members: Iterable[int] = (1, 2, 3, 4, 5)) -> None:
        self.members = tuple(members)
        self.calls = 0

    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        self.calls += 1
        threshold = getattr(definition, "threshold", None)
        return Cohort.of(member for member in self.members if threshold is None or member >= threshold)


class FailingEvaluator(CohortDefinitionEvaluator):
    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        raise LookupError("subject source unavailable")


class BrokenGetCache:
    """Cache whose reads always fail; writes are recorded."""

    def __init__(self) -> None:
        self.puts: list[str] = []

    def get(self, key: str) -> Cohort | None:
        raise ConnectionError("cache backend down")

    def put(self, key: str, cohort: Cohort) -> None:
        self.puts.append(key)


class BrokenPutCache:
    """Cache whose writes always fail."""

    def get(self, key: str) -> Cohort | None:
        return None

    def put(self, key: str, cohort: Cohort) -> None:
        raise ConnectionError("cache backend down")
