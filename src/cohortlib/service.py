"""Cohort definition evaluation engine.

Resolves the evaluator for a definition, binds its parameters, consults the
context cache and restricts the result to the context's base cohort.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cohortlib.config import EngineConfig, apply_log_level, load_config
from cohortlib.constants.capabilities import EVALUATOR, PERSISTER
from cohortlib.constants.definitions import UNIVERSE_DEFINITION_DESCRIPTION, UNIVERSE_DEFINITION_NAME
from cohortlib.definitions import CharacteristicCohortDefinition, SubjectStore
from cohortlib.evaluation.binding import bind_parameters
from cohortlib.evaluation.cache import CohortCache, NullCohortCache
from cohortlib.evaluation.caching import maybe_cache
from cohortlib.evaluation.context import EvaluationContext
from cohortlib.handlers.base import CohortDefinitionEvaluator, CohortDefinitionPersister
from cohortlib.handlers.defaults import build_default_registry
from cohortlib.handlers.registry import HandlerRegistry
from cohortlib.model.cohort import Cohort
from cohortlib.model.definition import CohortDefinition
from cohortlib.model.mapped import Mapped

logger = logging.getLogger(__name__)


class CohortDefinitionService:
    """Evaluates and persists cohort definitions through registered handlers."""

    def __init__(
        self,
        registry: HandlerRegistry | None = None,
        *,
        store: SubjectStore | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._store = store if store is not None else SubjectStore()
        self._registry = (
            registry if registry is not None else build_default_registry(self, self._store, self._config)
        )

    @classmethod
    def from_config(
        cls,
        root: Path,
        config_path: Path | None = None,
        *,
        store: SubjectStore | None = None,
    ) -> CohortDefinitionService:
        """Build a service with the default registry from ``cohortlib.yaml``."""
        config = load_config(root, config_path)
        apply_log_level(config)
        return cls(store=store, config=config)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def new_context(
        self,
        parameter_values: dict[str, object] | None = None,
        *,
        base_cohort: Cohort | None = None,
        cache: CohortCache | None = None,
    ) -> EvaluationContext:
        """Create a top-level context; caching follows the engine config unless *cache* is given."""
        if cache is None and not self._config.cache_enabled:
            cache = NullCohortCache()
        return EvaluationContext(parameter_values, base_cohort=base_cohort, cache=cache)

    def evaluate(
        self,
        definition: CohortDefinition | Mapped,
        context: EvaluationContext | None = None,
    ) -> Cohort:
        """Evaluate *definition* in *context*.

        A Mapped definition is evaluated in a child context derived from
        *context*; see :meth:`evaluate_mapped`.
        """
        if isinstance(definition, Mapped):
            return self.evaluate_mapped(definition, context)

        evaluator: CohortDefinitionEvaluator = self._registry.resolve(EVALUATOR, type(definition), definition.name)
        configured = bind_parameters(definition, context)

        cohort = maybe_cache(configured, context, lambda: evaluator.evaluate(configured, context))

        if context is not None and context.base_cohort is not None:
            cohort = cohort.intersect(context.base_cohort)
        logger.debug("Evaluated %s: %d subjects", configured, cohort.size)
        return cohort

    def evaluate_mapped(self, mapped: Mapped, parent_context: EvaluationContext | None = None) -> Cohort:
        """Evaluate a mapped definition in a child of *parent_context*."""
        child_context = EvaluationContext.for_child(parent_context, mapped)
        logger.debug(
            "Evaluating mapped definition %s (%r)",
            mapped.definition,
            child_context.parameter_values,
        )
        return self.evaluate(mapped.definition, child_context)

    def save_definition(self, definition: CohortDefinition) -> CohortDefinition:
        """Persist *definition* through the persister registered for its type."""
        persister = self._persister_for(type(definition), definition.name)
        return persister.save(definition)

    def get_definition(self, uuid: str) -> CohortDefinition | None:
        """Look up a stored definition by uuid across all registered persisters."""
        for persister in self._registry.handlers(PERSISTER):
            definition = persister.get(uuid)
            if definition is not None:
                return definition
        return None

    def get_all_definitions(self) -> list[CohortDefinition]:
        """Return every stored definition, de-duplicated by uuid."""
        found: dict[str, CohortDefinition] = {}
        for persister in self._registry.handlers(PERSISTER):
            for definition in persister.get_all():
                found.setdefault(definition.uuid, definition)
        return list(found.values())

    def purge_definition(self, definition: CohortDefinition) -> None:
        """Remove *definition* through the persister registered for its type."""
        self._persister_for(type(definition), definition.name).purge(definition)

    def get_universe_definition(self) -> CohortDefinition:
        """Return a definition that matches every subject."""
        return CharacteristicCohortDefinition(
            name=UNIVERSE_DEFINITION_NAME,
            description=UNIVERSE_DEFINITION_DESCRIPTION,
        )

    def _persister_for(self, definition_type: type[CohortDefinition], name: str) -> CohortDefinitionPersister:
        return self._registry.resolve(PERSISTER, definition_type, name)
