"""Demographic characteristic definitions and their evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cohortlib.constants.definitions import VALID_GENDERS
from cohortlib.definitions.subjects import Subject, SubjectStore
from cohortlib.evaluation.caching import ConfigurationCachingStrategy
from cohortlib.evaluation.context import EvaluationContext
from cohortlib.exceptions import DefinitionError
from cohortlib.handlers.base import CohortDefinitionEvaluator
from cohortlib.model.cohort import Cohort
from cohortlib.model.definition import CohortDefinition


@dataclass
class CharacteristicCohortDefinition(CohortDefinition):
    """Subjects matching gender, age range and vital status.

    With every field unset the definition matches all subjects.
    """

    kind = "characteristic"
    caching = ConfigurationCachingStrategy()

    gender: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    effective_date: date | None = None
    alive_only: bool = False

    def is_unrestricted(self) -> bool:
        return (
            self.gender is None
            and self.min_age is None
            and self.max_age is None
            and not self.alive_only
        )


class CharacteristicCohortDefinitionEvaluator(CohortDefinitionEvaluator):
    """Filters a subject store by the characteristics of the definition."""

    def __init__(self, store: SubjectStore) -> None:
        self._store = store

    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        if not isinstance(definition, CharacteristicCohortDefinition):
            raise TypeError(f"Cannot evaluate {type(definition).__name__} as a characteristic definition")
        if definition.gender is not None and definition.gender not in VALID_GENDERS:
            raise DefinitionError(f"gender must be one of {sorted(VALID_GENDERS)}, got {definition.gender!r}")
        if definition.is_unrestricted():
            return Cohort.of(subject.subject_id for subject in self._store)

        on_date = definition.effective_date or date.today()
        return Cohort.of(
            subject.subject_id for subject in self._store if _matches(subject, definition, on_date)
        )


def _matches(subject: Subject, definition: CharacteristicCohortDefinition, on_date: date) -> bool:
    if definition.gender is not None and subject.gender != definition.gender:
        return False
    if definition.alive_only and not subject.is_alive_on(on_date):
        return False
    if definition.min_age is None and definition.max_age is None:
        return True
    age = subject.age_on(on_date)
    if age is None:
        return False
    if definition.min_age is not None and age < definition.min_age:
        return False
    return definition.max_age is None or age <= definition.max_age
