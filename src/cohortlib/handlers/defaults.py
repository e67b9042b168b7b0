"""Registration of the built-in evaluators and persisters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cohortlib.config.model import EngineConfig
from cohortlib.constants.capabilities import EVALUATOR, PERSISTER
from cohortlib.definitions import (
    CharacteristicCohortDefinition,
    CharacteristicCohortDefinitionEvaluator,
    CompositionCohortDefinition,
    CompositionCohortDefinitionEvaluator,
    StaticCohortDefinition,
    StaticCohortDefinitionEvaluator,
    SubjectStore,
)
from cohortlib.handlers.base import CohortDefinitionPersister
from cohortlib.handlers.registry import HandlerRegistry
from cohortlib.model.definition import CohortDefinition
from cohortlib.persistence import InMemoryDefinitionPersister, YamlDefinitionPersister

if TYPE_CHECKING:
    from cohortlib.service import CohortDefinitionService


def build_persister(config: EngineConfig) -> CohortDefinitionPersister:
    """Return the YAML persister when a definitions directory is configured."""
    if config.definitions_dir is not None:
        return YamlDefinitionPersister(config.definitions_dir)
    return InMemoryDefinitionPersister()


def build_default_registry(
    engine: CohortDefinitionService,
    store: SubjectStore,
    config: EngineConfig,
) -> HandlerRegistry:
    """Build a registry holding every built-in handler.

    One persister is registered on the base definition type so that it
    serves every variant.
    """
    registry = HandlerRegistry()
    registry.register(EVALUATOR, CharacteristicCohortDefinition, CharacteristicCohortDefinitionEvaluator(store))
    registry.register(EVALUATOR, StaticCohortDefinition, StaticCohortDefinitionEvaluator())
    registry.register(EVALUATOR, CompositionCohortDefinition, CompositionCohortDefinitionEvaluator(engine))
    registry.register(PERSISTER, CohortDefinition, build_persister(config))
    return registry
