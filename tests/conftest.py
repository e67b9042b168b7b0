"""Shared pytest fixtures for engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from cohortlib import CohortDefinitionService
from cohortlib.constants.capabilities import EVALUATOR
from cohortlib.definitions import Subject, SubjectStore
from cohortlib.handlers import HandlerRegistry

from .helpers import (
    CachedDefinition,
    CountingEvaluator,
    DecliningDefinition,
    ExplodingKeyDefinition,
    FixedKeyDefinition,
    UncachedDefinition,
)


@pytest.fixture
def subject_store() -> SubjectStore:
    """Four subjects with ages 44, 13, 23 (deceased) and unknown on 2024-01-01."""
    return SubjectStore(
        [
            Subject(1, "F", date(1980, 1, 1)),
            Subject(2, "M", date(2010, 5, 5)),
            Subject(3, "F", date(2000, 6, 15), death_date=date(2020, 1, 1)),
            Subject(4, "M", None),
        ]
    )


@pytest.fixture
def service(subject_store: SubjectStore) -> CohortDefinitionService:
    """Service with the default registry over the fixture subject store."""
    return CohortDefinitionService(store=subject_store)


@pytest.fixture
def counting_evaluator() -> CountingEvaluator:
    return CountingEvaluator()


@pytest.fixture
def counting_service(counting_evaluator: CountingEvaluator) -> CohortDefinitionService:
    """Service whose test definition variants all share one counting evaluator."""
    registry = HandlerRegistry()
    for definition_type in (
        CachedDefinition,
        UncachedDefinition,
        FixedKeyDefinition,
        DecliningDefinition,
        ExplodingKeyDefinition,
    ):
        registry.register(EVALUATOR, definition_type, counting_evaluator)
    return CohortDefinitionService(registry)
