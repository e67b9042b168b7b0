"""Explicitly enumerated cohorts."""

from __future__ import annotations

from dataclasses import dataclass, field

from cohortlib.evaluation.context import EvaluationContext
from cohortlib.handlers.base import CohortDefinitionEvaluator
from cohortlib.model.cohort import Cohort
from cohortlib.model.definition import CohortDefinition
from cohortlib.types.common import SubjectId


@dataclass
class StaticCohortDefinition(CohortDefinition):
    """A fixed list of subject identifiers."""

    kind = "static"

    member_ids: frozenset[SubjectId] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.member_ids = frozenset(self.member_ids)


class StaticCohortDefinitionEvaluator(CohortDefinitionEvaluator):
    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        if not isinstance(definition, StaticCohortDefinition):
            raise TypeError(f"Cannot evaluate {type(definition).__name__} as a static definition")
        return Cohort(definition.member_ids)
