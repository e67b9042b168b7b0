"""Boolean compositions of mapped child definitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING

from cohortlib.constants.definitions import VALID_COMPOSITION_OPERATORS
from cohortlib.evaluation.context import EvaluationContext
from cohortlib.exceptions import DefinitionError
from cohortlib.handlers.base import CohortDefinitionEvaluator
from cohortlib.model.cohort import Cohort
from cohortlib.model.definition import CohortDefinition
from cohortlib.model.mapped import Mapped
from cohortlib.types.common import CompositionOperator

if TYPE_CHECKING:
    from cohortlib.service import CohortDefinitionService

logger = logging.getLogger(__name__)


@dataclass
class CompositionCohortDefinition(CohortDefinition):
    """Combines child cohorts with ``and``, ``or`` or ``minus``.

    ``minus`` keeps the first child's subjects that appear in none of the
    others. Children are evaluated in child contexts, so their mappings can
    refer to parameters of the enclosing context with ``${name}``.
    """

    kind = "composition"

    operator: CompositionOperator = "and"
    children: tuple[Mapped, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        self.children = tuple(self.children)


class CompositionCohortDefinitionEvaluator(CohortDefinitionEvaluator):
    """Evaluates each child through the engine and folds the results."""

    def __init__(self, engine: CohortDefinitionService) -> None:
        self._engine = engine

    def evaluate(self, definition: CohortDefinition, context: EvaluationContext | None) -> Cohort:
        if not isinstance(definition, CompositionCohortDefinition):
            raise TypeError(f"Cannot evaluate {type(definition).__name__} as a composition definition")
        if definition.operator not in VALID_COMPOSITION_OPERATORS:
            raise DefinitionError(
                f"operator must be one of {sorted(VALID_COMPOSITION_OPERATORS)}, got {definition.operator!r}"
            )
        if not definition.children:
            return Cohort()

        results = [self._engine.evaluate_mapped(child, context) for child in definition.children]
        logger.debug("Composed %d children of %s with %s", len(results), definition, definition.operator)

        if definition.operator == "and":
            return reduce(Cohort.intersect, results)
        if definition.operator == "or":
            return reduce(Cohort.union, results)
        rest = reduce(Cohort.union, results[1:], Cohort())
        return results[0].subtract(rest)

