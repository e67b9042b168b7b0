"""Evaluation context carried through one evaluation tree."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from typing import Any

from cohortlib.constants.definitions import MAPPING_EXPRESSION_PATTERN
from cohortlib.evaluation.cache import CohortCache, InMemoryCohortCache
from cohortlib.exceptions import BindingError
from cohortlib.model.cohort import Cohort
from cohortlib.model.mapped import Mapped

logger = logging.getLogger(__name__)


class EvaluationContext:
    """Parameter values, base cohort, cache and parent link for an evaluation.

    Parameter lookups fall back to the parent chain for names that are not
    set locally. The parent is held through a weak reference and never
    learns about its children.
    """

    def __init__(
        self,
        parameter_values: Mapping[str, Any] | None = None,
        *,
        base_cohort: Cohort | None = None,
        cache: CohortCache | None = None,
        parent: EvaluationContext | None = None,
    ) -> None:
        self._parameter_values: dict[str, Any] = dict(parameter_values or {})
        self._base_cohort = base_cohort
        self._cache: CohortCache = cache if cache is not None else InMemoryCohortCache()
        self._parent_ref: weakref.ref[EvaluationContext] | None = (
            weakref.ref(parent) if parent is not None else None
        )

    @classmethod
    def for_child(cls, parent: EvaluationContext | None, mapped: Mapped) -> EvaluationContext:
        """Derive the context a mapped child definition is evaluated in.

        The child shares the parent's cache and base cohort; its local values
        come from the resolved parameter mappings.
        """
        values = {
            name: resolve_mapping_value(name, value, parent) for name, value in mapped.parameter_mappings.items()
        }
        if parent is None:
            return cls(values)
        return cls(values, base_cohort=parent.base_cohort, cache=parent.cache, parent=parent)

    @property
    def parent(self) -> EvaluationContext | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def parameter_values(self) -> dict[str, Any]:
        """Local parameter values, without anything inherited from parents."""
        return dict(self._parameter_values)

    def effective_parameter_values(self) -> dict[str, Any]:
        """All visible parameter values, local ones overriding inherited ones."""
        parent = self.parent
        merged = parent.effective_parameter_values() if parent is not None else {}
        merged.update(self._parameter_values)
        return merged

    def contains_parameter(self, name: str) -> bool:
        if name in self._parameter_values:
            return True
        parent = self.parent
        return parent is not None and parent.contains_parameter(name)

    def get_parameter_value(self, name: str) -> Any:
        """Return the value visible for *name*; raises KeyError when none is set."""
        if name in self._parameter_values:
            return self._parameter_values[name]
        parent = self.parent
        if parent is None:
            raise KeyError(name)
        return parent.get_parameter_value(name)

    @property
    def base_cohort(self) -> Cohort | None:
        return self._base_cohort

    @base_cohort.setter
    def base_cohort(self, cohort: Cohort | None) -> None:
        self._base_cohort = cohort

    @property
    def cache(self) -> CohortCache:
        return self._cache

    def get_from_cache(self, key: str) -> Cohort | None:
        return self._cache.get(key)

    def add_to_cache(self, key: str, cohort: Cohort) -> None:
        self._cache.put(key, cohort)

    def __repr__(self) -> str:
        return f"EvaluationContext(parameter_values={self._parameter_values!r}, base_cohort={self._base_cohort!r})"


def resolve_mapping_value(name: str, value: Any, parent: EvaluationContext | None) -> Any:
    """Resolve a ``${name}`` mapping expression against *parent*; literals pass through."""
    if not isinstance(value, str):
        return value
    match = MAPPING_EXPRESSION_PATTERN.match(value)
    if match is None:
        return value
    source = match.group(1)
    if parent is None or not parent.contains_parameter(source):
        raise BindingError(f"Cannot resolve mapping {name!r} = {value!r}: parameter {source!r} is not in context")
    resolved = parent.get_parameter_value(source)
    logger.debug("Resolved mapping %s = %s -> %r", name, value, resolved)
    return resolved
