"""Handler interfaces for evaluating and persisting cohort definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cohortlib.model.cohort import Cohort
from cohortlib.model.definition import CohortDefinition

if TYPE_CHECKING:
    from cohortlib.evaluation.context import EvaluationContext


class CohortDefinitionEvaluator(ABC):
    """Executes one definition variant against an evaluation context."""

    @abstractmethod
    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        """Return the cohort described by a fully configured *definition*."""


class CohortDefinitionPersister(ABC):
    """Saves and loads definitions of the variants it is registered for."""

    @abstractmethod
    def save(self, definition: CohortDefinition) -> CohortDefinition:
        """Persist *definition* and return the stored version."""

    @abstractmethod
    def get(self, uuid: str) -> CohortDefinition | None:
        """Return the stored definition with *uuid*, or None."""

    @abstractmethod
    def get_all(self) -> list[CohortDefinition]:
        """Return every stored definition."""

    @abstractmethod
    def purge(self, definition: CohortDefinition) -> None:
        """Remove *definition* from storage; unknown definitions are ignored."""
