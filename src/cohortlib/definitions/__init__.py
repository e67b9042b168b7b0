"""Built-in definition variants and their evaluators."""

from .characteristic import CharacteristicCohortDefinition, CharacteristicCohortDefinitionEvaluator
from .composition import CompositionCohortDefinition, CompositionCohortDefinitionEvaluator
from .static import StaticCohortDefinition, StaticCohortDefinitionEvaluator
from .subjects import Subject, SubjectStore

__all__ = [
    "CharacteristicCohortDefinition",
    "CharacteristicCohortDefinitionEvaluator",
    "CompositionCohortDefinition",
    "CompositionCohortDefinitionEvaluator",
    "StaticCohortDefinition",
    "StaticCohortDefinitionEvaluator",
    "Subject",
    "SubjectStore",
]
