"""Tests for evaluation context parameter lookup and child derivation."""

from __future__ import annotations

import gc

import pytest

from cohortlib.evaluation import EvaluationContext, InMemoryCohortCache
from cohortlib.exceptions import BindingError
from cohortlib.model import Cohort, Mapped

from .helpers import CachedDefinition


def test_local_value_overrides_parent() -> None:
    parent = EvaluationContext({"a": 1, "b": 2})
    child = EvaluationContext({"a": 10}, parent=parent)

    assert child.get_parameter_value("a") == 10
    assert child.get_parameter_value("b") == 2
    assert child.contains_parameter("b")
    assert not child.contains_parameter("c")
    assert child.effective_parameter_values() == {"a": 10, "b": 2}
    assert child.parameter_values == {"a": 10}


def test_missing_value_raises_key_error() -> None:
    with pytest.raises(KeyError):
        EvaluationContext().get_parameter_value("missing")


def test_for_child_resolves_expressions_and_literals() -> None:
    cache = InMemoryCohortCache()
    base = Cohort.of([1, 2])
    parent = EvaluationContext({"start": 18}, base_cohort=base, cache=cache)
    mapped = Mapped.map(CachedDefinition(), threshold="${start}", label="literal")

    child = EvaluationContext.for_child(parent, mapped)

    assert child.parameter_values == {"threshold": 18, "label": "literal"}
    assert child.parent is parent
    assert child.cache is cache
    assert child.base_cohort == base


def test_for_child_falls_back_to_parent_for_unmapped_names() -> None:
    parent = EvaluationContext({"threshold": 4})
    child = EvaluationContext.for_child(parent, Mapped.map(CachedDefinition()))
    assert child.get_parameter_value("threshold") == 4


def test_for_child_leaves_parent_untouched() -> None:
    parent = EvaluationContext({"start": 1})
    EvaluationContext.for_child(parent, Mapped.map(CachedDefinition(), threshold=5))
    assert parent.parameter_values == {"start": 1}


def test_unresolvable_expression_raises() -> None:
    parent = EvaluationContext()
    with pytest.raises(BindingError, match="start"):
        EvaluationContext.for_child(parent, Mapped.map(CachedDefinition(), threshold="${start}"))


def test_for_child_without_parent() -> None:
    child = EvaluationContext.for_child(None, Mapped.map(CachedDefinition(), threshold=2))
    assert child.parent is None
    assert child.base_cohort is None
    assert child.get_parameter_value("threshold") == 2


def test_parent_reference_is_weak() -> None:
    parent = EvaluationContext({"a": 1})
    child = EvaluationContext(parent=parent)
    del parent
    gc.collect()
    assert child.parent is None
    assert not child.contains_parameter("a")


def test_cache_helpers_delegate_to_cache() -> None:
    cache = InMemoryCohortCache()
    context = EvaluationContext(cache=cache)
    context.add_to_cache("k", Cohort.of([1]))
    assert context.get_from_cache("k") == Cohort.of([1])
    assert cache.keys() == ("k",)
